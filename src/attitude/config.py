"""
===============================================================================
ATTITUDE - Configuration
===============================================================================
Settings for the command-line front end, loaded from a YAML file whose
sections overlay the defaults below. The core value types take no
configuration; everything here concerns presentation, seeding and logging.

Example file (config/attitude_config.yaml):

    output:
      precision: 6
    random:
      seed: 42
    logging:
      level: INFO
===============================================================================
"""

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutputConfig:
    """
    Output formatting.

    Attributes:
        precision: Digits after the decimal point when printing numbers.
    """
    precision: int = 6


@dataclass(frozen=True)
class RandomConfig:
    """
    Random generation.

    Attributes:
        seed: Seed for numpy.random.default_rng. None draws fresh entropy.
    """
    seed: Optional[int] = None


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging setup.

    Attributes:
        level: Name of the root logging level (DEBUG, INFO, WARNING, ...).
    """
    level: str = 'WARNING'


@dataclass(frozen=True)
class Config:
    """Top-level configuration, one attribute per YAML section."""
    output: OutputConfig = field(default_factory=OutputConfig)
    random: RandomConfig = field(default_factory=RandomConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_SECTIONS = {f.name: f.default_factory for f in fields(Config)}


def _overlay(section: str, base: Any, values: Any) -> Any:
    """Return ``base`` with the keys of ``values`` replaced."""
    if not isinstance(values, dict):
        raise ValueError(
            f"Config section '{section}' must be a mapping, got {type(values).__name__}"
        )
    known = {f.name for f in fields(base)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(
            f"Unknown key(s) in config section '{section}': {sorted(unknown)}"
        )
    for key, value in values.items():
        if not _VALIDATORS[key](value):
            raise ValueError(
                f"Invalid value for '{section}.{key}': {value!r}"
            )
    return replace(base, **values)


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid count or seed
    return isinstance(value, int) and not isinstance(value, bool)


_VALIDATORS = {
    'precision': lambda v: _is_int(v) and v >= 0,
    'seed': lambda v: v is None or (_is_int(v) and v >= 0),
    'level': lambda v: isinstance(v, str) and isinstance(
        logging.getLevelName(v.upper()), int),
}


def config_from_dict(data: Optional[Dict[str, Any]]) -> Config:
    """
    Build a Config from a parsed YAML mapping.

    Args:
        data: Mapping of section name to section mapping. None or an empty
              mapping gives the defaults.

    Returns:
        The resulting configuration.

    Raises:
        ValueError: On unknown sections or keys, or a non-mapping section.
    """
    if not data:
        return Config()
    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

    unknown = set(data) - set(_SECTIONS)
    if unknown:
        raise ValueError(f"Unknown config section(s): {sorted(unknown)}")

    sections = {
        name: _overlay(name, factory(), data[name]) if data.get(name) is not None
        else factory()
        for name, factory in _SECTIONS.items()
    }
    return Config(**sections)


def load_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML file. None returns the defaults.

    Returns:
        The loaded configuration.

    Raises:
        FileNotFoundError: If ``config_path`` does not exist.
        ValueError: If the file content is not a valid configuration.
    """
    if config_path is None:
        return Config()

    config_path = Path(config_path)
    logger.debug("Reading configuration from: %s", config_path)
    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)
    return config_from_dict(data)
