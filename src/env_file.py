"""Substitute GIT_* tokens in build environment files.

Lines such as ``GIT_VERSION = 01.02.3`` (qmake ``.pri`` style) are
rewritten in place with the resolved values; all other lines are kept.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List

from constants import Constants
from properties import effective_version
from stamp_config import StampConfig

try:
    from src.versioning.models import ResolvedVersion
except ImportError:
    from versioning.models import ResolvedVersion

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"(GIT_\w+)[^=]*=.*")


def token_values(resolved: ResolvedVersion, config: StampConfig) -> Dict[str, str]:
    """Values for the supported tokens."""
    version = effective_version(resolved, config)
    return {
        "GIT_VERSION": version.format(config.pattern),
        "GIT_RELEASE": version.format(Constants.RELEASE_PATTERN),
        "GIT_BRANCH": resolved.branch_name,
        "GIT_TAG": resolved.tag_name,
        "GIT_HASH": resolved.commit_hash,
        "GIT_DATE": resolved.simple_time,
    }


def rewrite_lines(lines: List[str], values: Dict[str, str]) -> List[str]:
    """Return lines with every known GIT_* assignment replaced; unknown tokens stay verbatim."""
    rewritten = []
    for line in lines:
        match = TOKEN_PATTERN.search(line)
        if match and match.group(1) in values:
            rewritten.append(f"{match.group(1)}\t= {values[match.group(1)]}")
        else:
            rewritten.append(line)
    return rewritten


def rewrite_env_file(path: str, resolved: ResolvedVersion, config: StampConfig) -> int:
    """Rewrite the GIT_* assignments of an environment file in place.

    Args:
        path: Environment file to update
        resolved: Resolution result
        config: Stamp settings (mask, nightly)

    Returns:
        Number of lines changed

    Raises:
        OSError: If the file cannot be read or written.
    """
    with open(path, "r", encoding="utf-8") as fh:
        lines = fh.read().splitlines()

    rewritten = rewrite_lines(lines, token_values(resolved, config))
    changed = sum(1 for old, new in zip(lines, rewritten) if old != new)

    with open(path, "w", encoding="utf-8") as fh:
        for line in rewritten:
            fh.write(line + "\n")

    logger.info("Updated %d line(s) in %s", changed, path)
    return changed
