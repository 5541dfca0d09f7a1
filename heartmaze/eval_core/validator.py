from typing import Any, Dict, List, Set, Tuple

import numpy as np

from heartmaze.maze_gen.generator import (
    GOAL, MIN_SIDE, START, WALL, find_goal, open_neighbors, shortest_path,
)

Coord = Tuple[int, int]


class MazeValidator:
    """Structural checks on a generated grid, plus replay checks on a move path."""

    def __init__(self, grid):
        self.grid = np.asarray(grid, dtype=np.int8)
        self.goal = find_goal(self.grid)

    def check_structure(self) -> Dict[str, Any]:
        err = self._structure_error()
        if err:
            return {'ok': False, 'error': err}
        return {'ok': True, 'error': ''}

    def _structure_error(self) -> str:
        h, w = self.grid.shape
        if h % 2 == 0 or w % 2 == 0:
            return 'even_dimensions'
        if h < MIN_SIDE or w < MIN_SIDE:
            return 'too_small'
        if self.grid[START[1], START[0]] == WALL:
            return 'start_not_path'
        border = np.concatenate([self.grid[0, :], self.grid[-1, :], self.grid[:, 0], self.grid[:, -1]])
        if np.any(border != WALL):
            return 'border_breach'
        if int(np.count_nonzero(self.grid == GOAL)) != 1:
            return 'goal_count'
        visited = self._reachable(START)
        if self.goal not in visited:
            return 'unreachable_goal'
        if len(visited) != int(np.count_nonzero(self.grid != WALL)):
            return 'unreachable_cells'
        # spanning tree: edges == nodes - 1 on the open-cell graph
        if self._edge_count(visited) != len(visited) - 1:
            return 'not_a_tree'
        return ''

    def _reachable(self, start: Coord) -> Set[Coord]:
        seen = {start}
        stack = [start]
        while stack:
            x, y = stack.pop()
            for nxt in open_neighbors(self.grid, x, y):
                if nxt not in seen:
                    seen.add(nxt)
                    stack.append(nxt)
        return seen

    def _edge_count(self, cells: Set[Coord]) -> int:
        # count right and down links only so each edge is seen once
        edges = 0
        for x, y in cells:
            if (x + 1, y) in cells:
                edges += 1
            if (x, y + 1) in cells:
                edges += 1
        return edges

    def validate_path(self, path: List[Coord]) -> Dict[str, Any]:
        err = self._path_error(path)
        if err:
            return {'ok': False, 'error': err, 'steps': 0, 'optimal': False}
        steps = len(path) - 1
        best = shortest_path(self.grid, START, self.goal)
        return {'ok': True, 'error': '', 'steps': steps, 'optimal': steps == len(best) - 1}

    def _path_error(self, path: List[Coord]) -> str:
        if not path:
            return 'empty_path'
        if tuple(path[0]) != START:
            return 'wrong_start'
        h, w = self.grid.shape
        for i in range(1, len(path)):
            x0, y0 = path[i-1]
            x1, y1 = path[i]
            if abs(x0-x1) + abs(y0-y1) != 1:
                return 'illegal_move'
            if not (0 <= x1 < w and 0 <= y1 < h):
                return 'out_of_maze'
            if self.grid[y1, x1] == WALL:
                return 'wall_collision'
        if self.goal is None or tuple(path[-1]) != self.goal:
            return 'wrong_goal'
        return ''
