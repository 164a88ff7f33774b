"""
config.py
=========

Engine settings and YAML loading for search configurations.

Settings are plain dataclasses; YAML files are optional and a missing file
falls back to defaults.
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml

from .models import SearchConfiguration

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class EngineSettings:
    """Knobs of the search engine that are not part of a single query."""

    # Candles after a matched window used to judge what happened next
    outcome_length: int = 80
    max_results: int = 200

    # Percent move beyond which an outcome counts as bullish/bearish
    outcome_band_pct: float = 2.0

    # Clip reported scores to [0, 100]
    clamp_scores: bool = False

    def __post_init__(self):
        if self.outcome_length < 1:
            raise ValueError(f"outcome_length must be positive, got {self.outcome_length}")
        if self.max_results < 1:
            raise ValueError(f"max_results must be positive, got {self.max_results}")
        if self.outcome_band_pct < 0:
            raise ValueError(f"outcome_band_pct must be non-negative, got {self.outcome_band_pct}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'EngineSettings':
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown engine settings: {', '.join(sorted(unknown))}")
        return cls(**dict(data))


def _read_yaml(path: PathLike) -> Dict[str, Any]:
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.error(f"Configuration file not found: {path}")
        return {}
    logger.info(f"Loaded configuration from {path}")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {path} must be a mapping, got {type(data).__name__}")
    return data


def load_engine_settings(path: PathLike) -> EngineSettings:
    """Load EngineSettings from the ``engine`` section of a YAML file."""
    data = _read_yaml(path)
    return EngineSettings.from_dict(data.get('engine') or {})


def load_search_config(path: PathLike) -> SearchConfiguration:
    """Load a SearchConfiguration from the ``search`` section of a YAML file.

    Unlike engine settings there is no sensible default search, so a missing
    file or section is an error.
    """
    data = _read_yaml(path)
    section = data.get('search')
    if not section:
        raise ValueError(f"No 'search' section in {path}")
    return SearchConfiguration.from_dict(section)
