from dataclasses import dataclass
from typing import Dict

from heartmaze.common.errors import ConfigurationError


@dataclass(frozen=True)
class DifficultyProfile:
    name: str
    width: int
    height: int
    cell_size: int  # display only


DIFFICULTY_PROFILES: Dict[str, DifficultyProfile] = {
    'easy': DifficultyProfile('easy', 9, 9, 32),
    'medium': DifficultyProfile('medium', 13, 13, 28),
    'hard': DifficultyProfile('hard', 17, 17, 24),
}


def get_profile(label: str) -> DifficultyProfile:
    key = label.strip().lower() if isinstance(label, str) else label
    try:
        return DIFFICULTY_PROFILES[key]
    except (KeyError, TypeError):
        choices = ', '.join(DIFFICULTY_PROFILES)
        raise ConfigurationError(f'unknown difficulty {label!r} (expected one of: {choices})') from None
