"""GitPython backed commit ancestry access.

Opens a local repository read-only and answers the ancestry, distance and
tag queries used by the tag resolver.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Tuple

from git import Repo
from git.exc import BadName, BadObject, GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from git.objects import Commit

# Support being imported as either "src.repository.git_access" or "repository.git_access"
try:
    from ..versioning.errors import NotFoundError
    from ..versioning.models import CommitMetadata
    from ..versioning.resolvers.base import CommitAncestry
except Exception:  # ImportError or relative depth issues when imported as "repository..."
    from versioning.errors import NotFoundError
    from versioning.models import CommitMetadata
    from versioning.resolvers.base import CommitAncestry

logger = logging.getLogger(__name__)


class GitCommitAncestry(CommitAncestry):
    """CommitAncestry over an open GitPython Repo; commit handles are Commit objects."""

    def __init__(self, repo: Repo):
        self.repo = repo

    def resolve_reference(self, reference: str = "HEAD") -> Commit:
        try:
            return self.repo.commit(reference)
        except (BadName, BadObject, GitCommandError, ValueError) as exc:
            raise NotFoundError(f"Reference '{reference}' not found in {self.repo.working_dir}") from exc

    def is_ancestor(self, candidate: Commit, reference: Commit) -> bool:
        return self.repo.is_ancestor(candidate, reference)

    def distance(self, candidate: Commit, reference: Commit) -> int:
        """Count commits reachable from reference but not from candidate."""
        if candidate == reference:
            return 0
        count = self.repo.git.rev_list("--count", f"{candidate.hexsha}..{reference.hexsha}")
        return int(count)

    def list_tags(self) -> Iterator[Tuple[str, Commit]]:
        for tag in self.repo.tags:
            try:
                commit = tag.commit
            except ValueError as exc:
                # Tags on trees or blobs have no commit to describe.
                logger.debug("Skipping tag %s: %s", tag.name, exc)
                continue
            yield tag.name, commit

    def commit_metadata(self, handle: Commit) -> CommitMetadata:
        return CommitMetadata(
            hash=handle.hexsha,
            author_time=handle.authored_datetime,
            branch=self.current_branch(),
        )

    def current_branch(self) -> str:
        """Name of the checked out branch, or the HEAD hash when detached."""
        try:
            return self.repo.active_branch.name
        except TypeError:
            return self.repo.head.commit.hexsha


@contextmanager
def open_repository(location: str) -> Iterator[GitCommitAncestry]:
    """Open the repository containing location and close it on exit.

    Raises:
        NotFoundError: If location is not inside a git repository.
    """
    try:
        repo = Repo(location, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as exc:
        raise NotFoundError(f"No git repository found at '{location}'") from exc
    try:
        yield GitCommitAncestry(repo)
    finally:
        repo.close()
