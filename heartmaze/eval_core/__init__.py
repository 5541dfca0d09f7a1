from .validator import MazeValidator

__all__ = ['MazeValidator']
