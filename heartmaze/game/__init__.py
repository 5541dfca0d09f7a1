from .state import Direction, GameState, MoveResult, MoveStatus, Phase
from .session import Scene, Session

__all__ = ['Direction', 'GameState', 'MoveResult', 'MoveStatus', 'Phase', 'Scene', 'Session']
