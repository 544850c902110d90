"""Stamp configuration loaded from YAML, the environment and CLI arguments.

Precedence, highest first: CLI arguments, GITSTAMP_* environment
variables, the YAML config file, built-in defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

_TRUE = ("1", "true", "yes", "on")


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE


def _positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be a positive integer, got {value!r}") from exc
    if number <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return number


@dataclass(frozen=True)
class StampConfig:
    """Settings for publishing a resolved version."""

    pattern: str = Constants.DEFAULT_PATTERN
    nightly: bool = False
    reference: str = Constants.DEFAULT_REFERENCE
    hash_length: int = Constants.HASH_LENGTH

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "StampConfig":
        """Create config from a parsed config file; unknown keys are ignored.

        Raises:
            ValueError: If pattern is not a string or hash_length is not a positive integer.
        """
        config = cls()
        pattern = data.get("pattern")
        if pattern is not None:
            # YAML reads an unquoted 00.00 as the float 0.0
            if not isinstance(pattern, str):
                raise ValueError(f"pattern must be a quoted string such as '00.00.0', got {pattern!r}")
            config = replace(config, pattern=pattern)
        if "nightly" in data and data["nightly"] is not None:
            config = replace(config, nightly=_as_bool(data["nightly"]))
        if data.get("reference"):
            config = replace(config, reference=str(data["reference"]))
        if data.get("hash_length") is not None:
            config = replace(config, hash_length=_positive_int(data["hash_length"], "hash_length"))
        return config

    def with_env(self, environ: Optional[Mapping[str, str]] = None) -> "StampConfig":
        """Apply GITSTAMP_* environment overrides."""
        env = os.environ if environ is None else environ
        config = self
        if env.get(Constants.ENV_PATTERN):
            config = replace(config, pattern=env[Constants.ENV_PATTERN])
        if env.get(Constants.ENV_NIGHTLY):
            config = replace(config, nightly=_as_bool(env[Constants.ENV_NIGHTLY]))
        if env.get(Constants.ENV_REFERENCE):
            config = replace(config, reference=env[Constants.ENV_REFERENCE])
        return config

    def with_args(self, args: Any) -> "StampConfig":
        """Apply CLI overrides.

        Args:
            args: Parsed CLI arguments namespace.

        Returns:
            StampConfig instance.
        """
        config = self
        if getattr(args, "PATTERN", None):
            config = replace(config, pattern=args.PATTERN)
        if getattr(args, "NIGHTLY", False):
            config = replace(config, nightly=True)
        if getattr(args, "REFERENCE", None):
            config = replace(config, reference=args.REFERENCE)
        return config


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Load the ``gitstamp`` section (or the whole document) of a YAML config file.

    Args:
        config_path: Path to YAML config file.

    Returns:
        Config dict, empty when the file is missing.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
    """
    if not config_path or not os.path.isfile(config_path):
        return {}

    with open(config_path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    if not isinstance(data, dict):
        logger.warning("Ignoring config file without a mapping: %s", config_path)
        return {}
    section = data.get("gitstamp", data)
    return section if isinstance(section, dict) else {}


def load_config(args: Any, location: str = ".", environ: Optional[Mapping[str, str]] = None) -> StampConfig:
    """Build the effective StampConfig for a run.

    An explicit ``--config`` path wins; otherwise ``gitstamp.yml`` in the
    target directory is used when present.
    """
    config_path = getattr(args, "CONFIG", None)
    if config_path:
        if not os.path.isfile(config_path):
            logger.warning("Config file not found: %s", config_path)
    else:
        config_path = os.path.join(location, Constants.CONFIG_FILE)

    data = load_config_file(config_path)
    if data:
        logger.debug("Loaded config from: %s", config_path)
    return StampConfig.from_mapping(data).with_env(environ).with_args(args)
