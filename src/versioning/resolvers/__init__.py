"""Resolvers turning repository state into a version."""

from .base import CommitAncestry, CommitHandle
from .tags import TagResolver

__all__ = [
    "CommitAncestry",
    "CommitHandle",
    "TagResolver",
]
