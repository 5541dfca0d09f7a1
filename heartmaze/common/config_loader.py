from pathlib import Path
from typing import Dict, Optional
import os
import yaml

from heartmaze.common.errors import ConfigurationError

DEFAULTS: Dict = {
    'difficulty': 'easy',
    'seed': None,
    'log_level': 'INFO',
    'output_dir': 'outputs',
    'cell_px': None,
}

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')

# env var -> config key
ENV_KEYS = {
    'HEARTMAZE_DIFFICULTY': 'difficulty',
    'HEARTMAZE_SEED': 'seed',
    'HEARTMAZE_LOG_LEVEL': 'log_level',
    'HEARTMAZE_OUTPUT_DIR': 'output_dir',
}


def _read_yaml(path: Path) -> Dict:
    data = yaml.safe_load(path.read_text(encoding='utf-8')) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f'{path}: expected a mapping at top level')
    return data


def load_config(path: Optional[str] = None) -> Dict:
    base = Path(path) if path else Path('config/config.yaml')
    local = base.with_name('local.yaml')
    cfg: Dict = dict(DEFAULTS)
    if base.exists():
        cfg.update(_read_yaml(base))
    elif path:
        raise ConfigurationError(f'config file not found: {path}')
    if local.exists():
        cfg.update(_read_yaml(local))
    # Pull overrides from environment
    for env, key in ENV_KEYS.items():
        if os.getenv(env) is not None:
            cfg[key] = os.getenv(env)
    return normalize(cfg)


def normalize(cfg: Dict) -> Dict:
    out = dict(cfg)
    seed = out.get('seed')
    if seed in ('', 'none', 'None'):
        seed = None
    if seed is not None:
        try:
            seed = int(seed)
        except (TypeError, ValueError):
            raise ConfigurationError(f'seed must be an integer, got {seed!r}') from None
    out['seed'] = seed
    if out.get('cell_px') is not None:
        try:
            out['cell_px'] = int(out['cell_px'])
        except (TypeError, ValueError):
            raise ConfigurationError(f"cell_px must be an integer, got {out['cell_px']!r}") from None
    out['difficulty'] = str(out.get('difficulty') or 'easy').lower()
    level = str(out.get('log_level') or 'INFO').upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {out['log_level']!r}")
    out['log_level'] = level
    return out
