"""Tag resolver selecting the tag that best describes a reference commit."""

import logging
from typing import Iterable, List, Optional, Pattern, Union

# Support being imported as either "src.versioning.resolvers.tags" or "versioning.resolvers.tags"
try:
    from ...common.logging_utils import extra_context, is_debug_enabled
except Exception:  # ImportError or relative depth issues when imported as "versioning..."
    from common.logging_utils import extra_context, is_debug_enabled
from ..models import TagCandidate
from ..parser import TAG_PATTERN, parse
from .base import CommitAncestry, CommitHandle

logger = logging.getLogger(__name__)


class TagResolver:
    """Pick the nearest reachable tag, preferring the larger version on ties."""

    def __init__(self, ancestry: CommitAncestry, pattern: Union[str, Pattern[str]] = TAG_PATTERN):
        """Initialize the resolver.

        Args:
            ancestry: Commit graph and tag access for one repository
            pattern: Version regex applied to tag names (embedded match)
        """
        self.ancestry = ancestry
        self.pattern = pattern

    def fetch_candidates(self, reference: CommitHandle) -> List[TagCandidate]:
        """Collect every tag reachable from reference whose name parses as a version.

        Tags that fail to parse, are not ancestors of reference, or make the
        backend raise are dropped; one bad tag never aborts the scan.

        Args:
            reference: Commit the version is resolved for

        Returns:
            Unranked list of candidates
        """
        candidates = []
        for tag_name, commit in self.ancestry.list_tags():
            try:
                candidate = self._candidate(tag_name, commit, reference)
            except Exception as exc:  # pylint: disable=broad-exception-caught
                logger.debug(
                    "Skipping tag %s: %s",
                    tag_name,
                    exc,
                    extra=extra_context(
                        event="tag_skipped",
                        component="tag_resolver",
                        outcome="error",
                        target=tag_name,
                    ),
                )
                continue
            if candidate is not None:
                candidates.append(candidate)
        return candidates

    def _candidate(self, tag_name: str, commit: CommitHandle, reference: CommitHandle) -> Optional[TagCandidate]:
        """Build a candidate for one tag, or None when it is not reachable."""
        version = parse(tag_name, self.pattern)
        if not self.ancestry.is_ancestor(commit, reference):
            if is_debug_enabled(logger):
                logger.debug(
                    "Tag %s is not reachable",
                    tag_name,
                    extra=extra_context(event="tag_unreachable", component="tag_resolver", target=tag_name),
                )
            return None
        distance = self.ancestry.distance(commit, reference)
        return TagCandidate(tag_name=tag_name, commit_distance=distance, version=version, commit=commit)

    @staticmethod
    def rank(candidates: Iterable[TagCandidate]) -> List[TagCandidate]:
        """Order candidates by distance ascending, then version descending.

        Tag name breaks the remaining ties so the order is stable for
        tags such as ``1.2.0`` and ``v1.2.0`` on the same commit.
        """
        ranked = sorted(candidates, key=lambda c: c.tag_name)
        ranked.sort(key=lambda c: c.version, reverse=True)
        ranked.sort(key=lambda c: c.commit_distance)
        return ranked

    def pick(self, candidates: Iterable[TagCandidate]) -> Optional[TagCandidate]:
        """Return the best ranked candidate, or None when there is none."""
        ranked = self.rank(candidates)
        if not ranked:
            return None
        return ranked[0]

    def resolve(self, reference: CommitHandle) -> Optional[TagCandidate]:
        """Return the tag that best describes reference, or None if no tag qualifies."""
        candidates = self.fetch_candidates(reference)
        best = self.pick(candidates)
        if is_debug_enabled(logger):
            logger.debug(
                "Tag resolution finished",
                extra=extra_context(
                    event="tag_resolution",
                    component="tag_resolver",
                    outcome="found" if best else "none",
                    candidate_count=len(candidates),
                    target=best.tag_name if best else None,
                ),
            )
        return best
