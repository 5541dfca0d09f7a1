from .generator import (
    GOAL,
    PATH,
    START,
    WALL,
    MazeConfig,
    MazeGenerator,
    describe,
    find_goal,
    generate,
    shortest_path,
)

__all__ = [
    'GOAL', 'PATH', 'START', 'WALL',
    'MazeConfig', 'MazeGenerator',
    'describe', 'find_goal', 'generate', 'shortest_path',
]
