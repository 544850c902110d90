"""Version text parsing utilities.

Patterns handed to :func:`parse` must expose the named groups ``major``,
``minor``, ``patch``, ``name`` and ``build``; ``patch``, ``name`` and
``build`` may be optional in the pattern.
"""

import re
from typing import Optional, Pattern, Union

from .errors import FormatError
from .models import Version

_LABEL = r"[a-zA-Z0-9.]+"

VERSION_PATTERN = re.compile(
    r"(?P<major>\d+)\.(?P<minor>\d+)(?:\.(?P<patch>\d+))?"
    rf"(?:-(?P<name>{_LABEL}))?(?:\+(?P<build>{_LABEL}))?",
    re.ASCII,
)

# Tag names may also use '/' between components, e.g. "release/2.1/3".
TAG_PATTERN = re.compile(
    r"(?P<major>\d+)[./](?P<minor>\d+)(?:[./](?P<patch>\d+))?"
    rf"(?:-(?P<name>{_LABEL}))?(?:\+(?P<build>{_LABEL}))?",
    re.ASCII,
)


def _compile(pattern: Union[str, Pattern[str]]) -> Pattern[str]:
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


def parse(
    text: Optional[str],
    pattern: Union[str, Pattern[str]] = VERSION_PATTERN,
    exact: bool = False,
) -> Version:
    """Parse a version from text.

    Args:
        text: Text holding a version, possibly surrounded by other content.
        pattern: Regex with the named groups listed in the module docstring.
        exact: When True the pattern must match the whole text.

    Returns:
        Parsed Version

    Raises:
        FormatError: If the pattern does not match.
    """
    if text is None:
        raise FormatError("'None' is not a valid version")

    regex = _compile(pattern)
    match = regex.fullmatch(text) if exact else regex.search(text)
    if not match:
        raise FormatError(f"'{text}' is not a valid version")

    patch = match.group("patch")
    return Version(
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=None if patch is None else int(patch),
        name=match.group("name"),
        build=match.group("build"),
    )


def parse_strict(text: Optional[str]) -> Version:
    """Parse text that must be exactly a version, without any surrounding characters."""
    return parse(text, VERSION_PATTERN, exact=True)


def parse_tag(tag_name: str) -> Version:
    """Parse the version embedded in a tag name such as ``v2.1.0`` or ``release/2.1``."""
    return parse(tag_name, TAG_PATTERN)
