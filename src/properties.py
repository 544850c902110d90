"""Publish a resolved version as ``git.*`` build properties.

The properties are returned as a plain mapping for the caller to hand to
whatever consumes them; nothing is written to process-wide state.
"""

from __future__ import annotations

import json
from typing import Dict, Optional

from constants import Constants, OutputFormats
from stamp_config import StampConfig

try:
    from src.versioning.models import ResolvedVersion, Version
except ImportError:
    from versioning.models import ResolvedVersion, Version


def effective_version(resolved: ResolvedVersion, config: StampConfig) -> Version:
    """Version to publish; nightly builds move on to the next patch."""
    if config.nightly:
        return resolved.version.next_patch()
    return resolved.version


def build_properties(
    resolved: ResolvedVersion,
    config: StampConfig,
    build_number: Optional[int] = None,
) -> Dict[str, str]:
    """Return the property mapping for a resolved version.

    Args:
        resolved: Resolution result
        config: Stamp settings (mask, nightly)
        build_number: Overrides the ordinal carried by resolved

    Returns:
        Ordered mapping of property name to value
    """
    version = effective_version(resolved, config)
    number = resolved.build_ordinal if build_number is None else build_number
    return {
        Constants.PROP_COMMIT_DATE: resolved.iso_time,
        Constants.PROP_COMMIT_HASH: resolved.commit_hash,
        Constants.PROP_COMMIT_BRANCH: resolved.branch_name,
        Constants.PROP_BUILD_NUMBER: str(number),
        Constants.PROP_TAG: resolved.tag_name,
        Constants.PROP_VERSION: version.format(config.pattern),
        Constants.PROP_RELEASE: version.format(Constants.RELEASE_PATTERN),
    }


def _env_name(key: str) -> str:
    return key.upper().replace(".", "_")


def render_properties(properties: Dict[str, str], output_format: str) -> str:
    """Render properties as ``key=value`` lines, JSON, or shell ``KEY=value`` lines."""
    if output_format == OutputFormats.JSON.value:
        return json.dumps(properties, ensure_ascii=False, indent=4)
    if output_format == OutputFormats.ENV.value:
        return "\n".join(f"{_env_name(key)}={value}" for key, value in properties.items())
    return "\n".join(f"{key}={value}" for key, value in properties.items())
