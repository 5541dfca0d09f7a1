"""Random perfect mazes and a small move/win state machine on top of them."""

from heartmaze.common.errors import ConfigurationError
from heartmaze.game.state import Direction, GameState, MoveResult, MoveStatus
from heartmaze.maze_gen.generator import GOAL, PATH, WALL, MazeConfig, MazeGenerator, generate

__version__ = '0.1.0'

__all__ = [
    'ConfigurationError', 'Direction', 'GameState', 'MoveResult', 'MoveStatus',
    'GOAL', 'PATH', 'WALL', 'MazeConfig', 'MazeGenerator', 'generate',
]
