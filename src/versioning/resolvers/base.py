"""Abstract commit ancestry capability consumed by the tag resolver."""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Tuple

from ..models import CommitMetadata

# Commit handles are opaque to the resolver; any hashable object works.
CommitHandle = Any


class CommitAncestry(ABC):
    """Read-only view of a repository's commit graph and tags.

    Implementations wrap a concrete version-control backend. All methods
    must leave the repository unmodified.
    """

    @abstractmethod
    def resolve_reference(self, reference: str = "HEAD") -> CommitHandle:
        """Return the commit a reference points at.

        Raises:
            NotFoundError: If the reference does not exist.
        """

    @abstractmethod
    def is_ancestor(self, candidate: CommitHandle, reference: CommitHandle) -> bool:
        """Return True when candidate is reference or one of its ancestors."""

    @abstractmethod
    def distance(self, candidate: CommitHandle, reference: CommitHandle) -> int:
        """Return the number of commits separating candidate from reference.

        Zero when both are the same commit; candidate is expected to be an
        ancestor of reference.
        """

    @abstractmethod
    def list_tags(self) -> Iterable[Tuple[str, CommitHandle]]:
        """Yield ``(tag name, target commit)`` for every tag."""

    @abstractmethod
    def commit_metadata(self, handle: CommitHandle) -> CommitMetadata:
        """Return full hash, author time with offset and current branch label."""
