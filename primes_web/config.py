"""
Configuration defaults and YAML loading.

Defaults live here; a YAML file (passed explicitly, or named by the
PRIMES_WEB_CONFIG environment variable) overrides them section by section.
"""

import copy
import os
from pathlib import Path
from typing import Dict, Optional, Union

import yaml

from .errors import InvalidArgument
from .validation import MAX_SAFE_INTEGER

CONFIG_ENV_VAR = 'PRIMES_WEB_CONFIG'

DEFAULT_CONFIG = {
    'low_set': {
        'max_range': MAX_SAFE_INTEGER,
        'autostart': True,
    },
    'ranges': {
        'segment_size': 10**6,
        'num_workers': 1,
    },
    'logging': {
        'level': 'INFO',
    },
}


def load_config(path: Optional[Union[str, Path]] = None) -> Dict:
    """
    Load configuration, merging a YAML file over the defaults.

    Parameters
    ----------
    path : str or Path, optional
        YAML file to read. When None, only the defaults are returned.

    Returns
    -------
    dict
        Nested dict with 'low_set', 'ranges' and 'logging' sections.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path is None:
        return config

    with open(path) as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise InvalidArgument(f"config file {path} must contain a mapping")

    for section, values in loaded.items():
        if not isinstance(values, dict):
            raise InvalidArgument(f"config section {section!r} must be a mapping")
        config.setdefault(section, {}).update(values)

    return config


def env_config() -> Dict:
    """Load configuration from the file named by PRIMES_WEB_CONFIG, if set."""
    return load_config(os.getenv(CONFIG_ENV_VAR))
