from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw

from heartmaze.game.state import GameState
from heartmaze.maze_gen.generator import GOAL, WALL

WALL_RGB = (92, 26, 51)
PATH_RGB = (255, 240, 245)
GRID_RGB = (240, 200, 215)
GOAL_RGB = (230, 30, 90)
PLAYER_RGB = (60, 180, 90)

TEXT_GLYPHS = {WALL: '#', GOAL: 'G'}


def render_text(state: GameState) -> str:
    px, py = state.position
    lines = []
    for y, row in enumerate(state.grid.tolist()):
        chars = []
        for x, v in enumerate(row):
            if (x, y) == (px, py):
                chars.append('@')
            else:
                chars.append(TEXT_GLYPHS.get(v, '.'))
        lines.append(''.join(chars))
    lines.append(f'moves: {state.move_count}')
    return '\n'.join(lines)


def render_image(state: GameState, cell_px: Optional[int] = None) -> Image.Image:
    cell = cell_px or state.profile.cell_size
    h, w = state.height, state.width
    img = Image.new('RGB', (w*cell, h*cell), PATH_RGB)
    draw = ImageDraw.Draw(img)
    grid = state.grid
    for r in range(h):
        for c in range(w):
            x0, y0 = c*cell, r*cell
            x1, y1 = x0+cell-1, y0+cell-1
            if grid[r, c] == WALL:
                draw.rectangle([x0, y0, x1, y1], fill=WALL_RGB)
            else:
                draw.rectangle([x0, y0, x1, y1], outline=GRID_RGB)
    pad = max(1, cell // 8)
    goal = state.goal
    if goal is not None and goal != state.position:
        gx, gy = goal[0]*cell, goal[1]*cell
        draw.ellipse([gx+pad, gy+pad, gx+cell-1-pad, gy+cell-1-pad], fill=GOAL_RGB)
    sx, sy = state.position[0]*cell, state.position[1]*cell
    draw.rectangle([sx+pad, sy+pad, sx+cell-1-pad, sy+cell-1-pad], fill=PLAYER_RGB)
    return img


def save_snapshot(output_path: str, state: GameState, cell_px: Optional[int] = None) -> Path:
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    render_image(state, cell_px).save(out, format='PNG')
    return out
