"""End-to-end resolution of the version at a repository reference."""

import logging
from typing import Callable, ContextManager, Optional

from .build_number import build_ordinal
from .models import ResolvedVersion
from .resolvers import CommitAncestry, TagResolver

logger = logging.getLogger(__name__)

HASH_LENGTH = 9

RepositoryOpener = Callable[[str], ContextManager[CommitAncestry]]


def _default_opener() -> RepositoryOpener:
    # Imported lazily so the version model stays usable without GitPython.
    try:
        from src.repository.git_access import open_repository
    except ImportError:
        from repository.git_access import open_repository
    return open_repository


class VersionResolutionService:
    """Resolve a repository location to a ResolvedVersion.

    Each call opens its own repository handle and releases it on every
    exit path; the service keeps no state between calls.
    """

    def __init__(
        self,
        opener: Optional[RepositoryOpener] = None,
        hash_length: int = HASH_LENGTH,
        clock: Callable[[], int] = build_ordinal,
    ):
        """Initialize the service.

        Args:
            opener: Context manager factory yielding a CommitAncestry for a location
            hash_length: Number of hash characters kept in the result
            clock: Source of the build ordinal
        """
        self.opener = opener or _default_opener()
        self.hash_length = hash_length
        self.clock = clock

    def resolve(self, location: str, reference: str = "HEAD") -> Optional[ResolvedVersion]:
        """Resolve the version at reference.

        Args:
            location: Path inside the repository
            reference: Commit-ish to describe (defaults to HEAD)

        Returns:
            ResolvedVersion, or None when no reachable tag parses as a version

        Raises:
            NotFoundError: If no repository or reference exists at location.
        """
        with self.opener(location) as ancestry:
            commit = ancestry.resolve_reference(reference)
            metadata = ancestry.commit_metadata(commit)
            best = TagResolver(ancestry).resolve(commit)

        if best is None:
            logger.info("No version tag reachable from %s in '%s'", reference, location)
            return None

        return ResolvedVersion(
            commit_hash=metadata.hash[: self.hash_length],
            branch_name=metadata.branch,
            commit_time=metadata.author_time,
            tag_name=best.tag_name,
            version=best.version,
            build_ordinal=self.clock(),
            commit_distance=best.commit_distance,
        )
