"""Data models for versioning and tag resolution."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from functools import total_ordering
from typing import Any, Optional, Tuple

FORMAT_PATTERN = re.compile(r"(0+)\.(0+)(?:\.(0+))?(?:-(0+))?(?:\+(0+))?")
SIMPLE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S %z"


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """Semantic version value (https://semver.org/spec/v2.0.0.html).

    Depending on the software the components are read differently. For an
    API, MAJOR marks incompatible changes, MINOR backwards compatible
    additions and PATCH backwards compatible fixes. For released client
    software MAJOR is usually the year and MINOR the month of the release.

    Examples of accepted text::

        19.12
        19.12.1
        19.12.1-rc1
        19.12-beta1+build.1.2

    Only ``(major, minor, patch)`` take part in equality and ordering; the
    pre-release ``name`` and ``build`` metadata are carried verbatim. An
    absent patch (``None``) is distinct from ``0`` and orders below it.
    """
    major: int
    minor: int
    patch: Optional[int] = None
    name: Optional[str] = None
    build: Optional[str] = None

    def __post_init__(self):
        if self.major < 0 or self.minor < 0:
            raise ValueError(f"Version components must be non-negative: {self.major}.{self.minor}")
        if self.patch is not None and self.patch < 0:
            raise ValueError(f"Patch must be non-negative or absent: {self.patch}")

    @classmethod
    def of(
        cls,
        major: int,
        minor: int,
        patch: Optional[int] = None,
        name: Optional[str] = None,
        build: Optional[str] = None,
    ) -> "Version":
        """Build a version directly from its components."""
        return cls(major, minor, patch, name, build)

    @property
    def key(self) -> Tuple[int, int, int]:
        """Ordering key; an absent patch sorts before any explicit patch."""
        return (self.major, self.minor, -1 if self.patch is None else self.patch)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.key < other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def next_patch(self) -> "Version":
        """Return the following patch version without labels."""
        patch = 0 if self.patch is None else self.patch + 1
        return Version(self.major, self.minor, patch)

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}"
        if self.patch is not None:
            text += f".{self.patch}"
        if self.name is not None:
            text += f"-{self.name}"
        if self.build is not None:
            text += f"+{self.build}"
        return text

    def format(self, mask: str) -> str:
        """Render the version against a zero-padded mask like ``00.00.0``.

        The digit runs give the minimum width of major, minor and patch. A
        ``-0`` or ``+0`` block only enables the pre-release name or build
        metadata, which are appended verbatim. A mask that does not have
        this shape falls back to the default rendering.
        """
        match = FORMAT_PATTERN.search(mask or "")
        if not match:
            return str(self)

        major, minor, patch, name, build = match.groups()
        text = f"{self.major:0{len(major)}d}.{self.minor:0{len(minor)}d}"
        if patch is not None:
            text += f".{(self.patch or 0):0{len(patch)}d}"
        if name is not None and self.name is not None:
            text += f"-{self.name}"
        if build is not None and self.build is not None:
            text += f"+{self.build}"
        return text


def default_string(version: Version) -> str:
    """Return the default rendering of a version."""
    return str(version)


def formatted(version: Version, mask: str) -> str:
    """Return the version rendered against a mask."""
    return version.format(mask)


@dataclass(frozen=True)
class CommitMetadata:
    """Identity of a commit as reported by the repository layer."""
    hash: str
    author_time: datetime
    branch: str


@dataclass(frozen=True)
class TagCandidate:
    """A reachable, parseable tag competing to describe the reference commit."""
    tag_name: str
    commit_distance: int
    version: Version
    commit: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class ResolvedVersion:
    """Resolution outcome handed to the build integration."""
    commit_hash: str
    branch_name: str
    commit_time: datetime
    tag_name: str
    version: Version
    build_ordinal: int
    commit_distance: int = 0

    @property
    def iso_time(self) -> str:
        """Commit time as ISO-8601 with its UTC offset."""
        return self.commit_time.isoformat()

    @property
    def simple_time(self) -> str:
        """Commit time as ``YYYY-MM-DD HH:MM:SS +ZZZZ``."""
        return self.commit_time.strftime(SIMPLE_TIME_FORMAT)

    def __str__(self) -> str:
        return self.version.format("00.00.0")
