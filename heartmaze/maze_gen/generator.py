import logging
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from heartmaze.common.errors import ConfigurationError

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]  # (x, y)

PATH = 0
WALL = 1
GOAL = 2

START: Coord = (1, 1)
MIN_SIDE = 5

# 2-step lattice: up, down, left, right
CARVE_OFFSETS: List[Coord] = [(0, -2), (0, 2), (-2, 0), (2, 0)]
STEP_OFFSETS: List[Coord] = [(0, -1), (0, 1), (-1, 0), (1, 0)]


@dataclass
class MazeConfig:
    width: int
    height: int
    seed: Optional[int] = None


def check_dimensions(width: int, height: int) -> None:
    for name, v in (('width', width), ('height', height)):
        if isinstance(v, bool) or not isinstance(v, (int, np.integer)):
            raise ConfigurationError(f'{name} must be an integer, got {v!r}')
        if v < MIN_SIDE:
            raise ConfigurationError(f'{name} must be >= {MIN_SIDE}, got {v}')
        if v % 2 == 0:
            raise ConfigurationError(f'{name} must be odd, got {v}')


class MazeGenerator:
    """Random perfect maze by depth-first carving on odd coordinates.

    Room centers sit on odd (x, y); the even cells between two centers are
    the walls that get knocked out. The carve is a spanning tree over the
    room centers, so any two open cells are joined by exactly one simple path.
    """

    def __init__(self, cfg: MazeConfig):
        check_dimensions(cfg.width, cfg.height)
        self.cfg = cfg
        self.rng = np.random.default_rng(cfg.seed)

    def _in_bounds(self, x: int, y: int, grid: np.ndarray) -> bool:
        h, w = grid.shape
        return 0 <= x < w and 0 <= y < h

    def _inside_border(self, x: int, y: int, grid: np.ndarray) -> bool:
        h, w = grid.shape
        return 0 < x < w - 1 and 0 < y < h - 1

    def _shuffled_offsets(self) -> List[Coord]:
        order = self.rng.permutation(len(CARVE_OFFSETS))
        return [CARVE_OFFSETS[int(i)] for i in order]

    def _carve(self, grid: np.ndarray, start: Coord) -> None:
        # Explicit stack of (cell, directions not yet tried); same visiting
        # order as the recursive formulation.
        sx, sy = start
        grid[sy, sx] = PATH
        stack: List[Tuple[Coord, List[Coord]]] = [(start, self._shuffled_offsets())]
        while stack:
            (x, y), remaining = stack[-1]
            if not remaining:
                stack.pop()
                continue
            dx, dy = remaining.pop(0)
            nx, ny = x + dx, y + dy
            if self._inside_border(nx, ny, grid) and grid[ny, nx] == WALL:
                grid[y + dy // 2, x + dx // 2] = PATH
                grid[ny, nx] = PATH
                stack.append(((nx, ny), self._shuffled_offsets()))

    def _place_goal(self, grid: np.ndarray) -> Coord:
        h, w = grid.shape
        # bottom-right quadrant, scanning up and left
        for y in range(h - 2, h // 2, -1):
            for x in range(w - 2, w // 2, -1):
                if grid[y, x] == PATH:
                    grid[y, x] = GOAL
                    return (x, y)
        logger.warning('no open cell in goal quadrant of %dx%d maze; forcing corner goal', w, h)
        grid[h - 2, w - 2] = GOAL
        return (w - 2, h - 2)

    def generate(self) -> np.ndarray:
        w, h = self.cfg.width, self.cfg.height
        grid = np.full((h, w), WALL, dtype=np.int8)
        self._carve(grid, START)
        goal = self._place_goal(grid)
        logger.debug('generated %dx%d maze, goal at %s', w, h, goal)
        return grid


def generate(width: int, height: int, seed: Optional[int] = None) -> np.ndarray:
    return MazeGenerator(MazeConfig(width=width, height=height, seed=seed)).generate()


def describe(grid: np.ndarray, seed: Optional[int] = None) -> Dict:
    grid = np.asarray(grid)
    h, w = grid.shape
    goal = find_goal(grid)
    return {
        'width': w,
        'height': h,
        'seed': seed,
        'grid': grid.tolist(),
        'start': START,
        'goal': goal,
        'shortest_path': shortest_path(grid, START, goal) if goal else [],
    }


def find_goal(grid: np.ndarray) -> Optional[Coord]:
    ys, xs = np.nonzero(np.asarray(grid) == GOAL)
    if len(xs) == 0:
        return None
    return (int(xs[0]), int(ys[0]))


def open_neighbors(grid: np.ndarray, x: int, y: int) -> List[Coord]:
    h, w = grid.shape
    res = []
    for dx, dy in STEP_OFFSETS:
        nx, ny = x + dx, y + dy
        if 0 <= nx < w and 0 <= ny < h and grid[ny, nx] != WALL:
            res.append((nx, ny))
    return res


def shortest_path(grid: np.ndarray, start: Coord, goal: Coord) -> List[Coord]:
    """BFS over non-wall cells. Returns the cells from start to goal inclusive,
    or an empty list when goal is unreachable."""
    grid = np.asarray(grid)
    q = deque([start])
    prev: Dict[Coord, Optional[Coord]] = {start: None}
    while q:
        cur = q.popleft()
        if cur == goal:
            break
        for nxt in open_neighbors(grid, *cur):
            if nxt not in prev:
                prev[nxt] = cur
                q.append(nxt)
    if goal not in prev:
        return []
    path = []
    cur = goal
    while cur is not None:
        path.append(cur)
        cur = prev[cur]
    return list(reversed(path))
