"""Game state for one maze session.

`GameState` owns the grid, the player position, the move counter and the
won flag. `attempt_move` is a pure transition that returns a `MoveResult`;
it never renders, plays sound, or switches scenes. Callers inspect the
status and drive those collaborators themselves.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

import numpy as np

from heartmaze.config.difficulty import DifficultyProfile, get_profile
from heartmaze.maze_gen.generator import (
    GOAL, START, WALL, MazeConfig, MazeGenerator, find_goal,
)

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class MoveStatus(str, Enum):
    MOVED = 'moved'
    BLOCKED = 'blocked'
    WON = 'won'
    ALREADY_WON = 'already_won'


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class Phase(str, Enum):
    IDLE = 'idle'
    PLAYING = 'playing'
    WON = 'won'


@dataclass(frozen=True)
class MoveResult:
    status: MoveStatus
    position: Coord
    move_count: int

    @property
    def final_moves(self) -> Optional[int]:
        return self.move_count if self.status is MoveStatus.WON else None

    @property
    def changed(self) -> bool:
        return self.status in (MoveStatus.MOVED, MoveStatus.WON)


@dataclass(frozen=True)
class _Snapshot:
    profile: DifficultyProfile
    grid: np.ndarray
    position: Coord
    move_count: int
    won: bool


class GameState:
    def __init__(self, difficulty: str = 'easy', seed: Optional[int] = None):
        self._snap: _Snapshot = self._fresh(get_profile(difficulty), seed)

    @classmethod
    def new(cls, difficulty: str = 'easy', seed: Optional[int] = None) -> 'GameState':
        return cls(difficulty, seed)

    @staticmethod
    def _fresh(profile: DifficultyProfile, seed: Optional[int]) -> _Snapshot:
        cfg = MazeConfig(width=profile.width, height=profile.height, seed=seed)
        grid = MazeGenerator(cfg).generate()
        grid.setflags(write=False)
        return _Snapshot(profile=profile, grid=grid, position=START, move_count=0, won=False)

    def reset(self, difficulty: Optional[str] = None, seed: Optional[int] = None) -> None:
        """Start a new maze. Without a label the current difficulty is kept."""
        profile = get_profile(difficulty) if difficulty is not None else self._snap.profile
        # the whole snapshot is built before it replaces the old one
        self._snap = self._fresh(profile, seed)
        logger.info('new %s maze (%dx%d)', profile.name, profile.width, profile.height)

    # read side, consumed by renderers

    @property
    def difficulty(self) -> str:
        return self._snap.profile.name

    @property
    def profile(self) -> DifficultyProfile:
        return self._snap.profile

    @property
    def grid(self) -> np.ndarray:
        return self._snap.grid

    @property
    def width(self) -> int:
        return self._snap.grid.shape[1]

    @property
    def height(self) -> int:
        return self._snap.grid.shape[0]

    @property
    def position(self) -> Coord:
        return self._snap.position

    @property
    def move_count(self) -> int:
        return self._snap.move_count

    @property
    def won(self) -> bool:
        return self._snap.won

    @property
    def goal(self) -> Optional[Coord]:
        return find_goal(self._snap.grid)

    @property
    def phase(self) -> Phase:
        if self._snap.won:
            return Phase.WON
        if self._snap.move_count == 0:
            return Phase.IDLE
        return Phase.PLAYING

    def snapshot(self) -> Dict:
        return {
            'difficulty': self.difficulty,
            'width': self.width,
            'height': self.height,
            'grid': self.grid.tolist(),
            'position': self.position,
            'goal': self.goal,
            'move_count': self.move_count,
            'won': self.won,
        }

    # write side

    def move(self, direction: Direction) -> MoveResult:
        return self.attempt_move(direction.dx, direction.dy)

    def attempt_move(self, dx: int, dy: int) -> MoveResult:
        if abs(dx) + abs(dy) != 1:
            raise ValueError(f'move must be a unit step, got ({dx}, {dy})')
        snap = self._snap
        if snap.won:
            return MoveResult(MoveStatus.ALREADY_WON, snap.position, snap.move_count)
        x, y = snap.position
        nx, ny = x + dx, y + dy
        h, w = snap.grid.shape
        if nx < 0 or nx >= w or ny < 0 or ny >= h:
            logger.debug('move to (%d, %d) blocked: out of bounds', nx, ny)
            return MoveResult(MoveStatus.BLOCKED, snap.position, snap.move_count)
        cell = snap.grid[ny, nx]
        if cell == WALL:
            logger.debug('move to (%d, %d) blocked: wall', nx, ny)
            return MoveResult(MoveStatus.BLOCKED, snap.position, snap.move_count)
        won = bool(cell == GOAL)
        self._snap = _Snapshot(
            profile=snap.profile,
            grid=snap.grid,
            position=(nx, ny),
            move_count=snap.move_count + 1,
            won=won,
        )
        if won:
            logger.info('goal reached in %d moves', self._snap.move_count)
            return MoveResult(MoveStatus.WON, (nx, ny), self._snap.move_count)
        return MoveResult(MoveStatus.MOVED, (nx, ny), self._snap.move_count)
