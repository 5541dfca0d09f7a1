from .difficulty import DIFFICULTY_PROFILES, DifficultyProfile, get_profile

__all__ = ['DIFFICULTY_PROFILES', 'DifficultyProfile', 'get_profile']
