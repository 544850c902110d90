"""Tests for TagResolver reachability, distance and selection."""

import pytest

from src.versioning.models import TagCandidate, Version
from src.versioning.resolvers import TagResolver
from memory_graph import MemoryGraph, linear


@pytest.fixture
def history():
    """c1 <- c2 <- c3 <- c4 on main, with side branch s1 off c2."""
    parents = linear("c1", "c2", "c3", "c4")
    parents["s1"] = ["c2"]
    return parents


def resolve(parents, tags, reference="c4"):
    graph = MemoryGraph(parents, tags, head=reference)
    return TagResolver(graph).resolve(reference)


class TestFetchCandidates:
    """Reachability, distance and parse filtering."""

    def test_distance_zero_on_reference(self, history):
        graph = MemoryGraph(history, [("1.0.0", "c4")])
        [candidate] = TagResolver(graph).fetch_candidates("c4")
        assert candidate.commit_distance == 0
        assert candidate.version == Version.of(1, 0, 0)

    def test_distance_grows_with_ancestry(self, history):
        graph = MemoryGraph(history, [("1.0.0", "c1"), ("1.1.0", "c3")])
        by_name = {c.tag_name: c for c in TagResolver(graph).fetch_candidates("c4")}
        assert by_name["1.1.0"].commit_distance == 1
        assert by_name["1.0.0"].commit_distance == 3
        assert by_name["1.0.0"].commit_distance > by_name["1.1.0"].commit_distance

    def test_unreachable_tag_dropped(self, history):
        graph = MemoryGraph(history, [("9.0.0", "s1"), ("1.0.0", "c1")])
        names = [c.tag_name for c in TagResolver(graph).fetch_candidates("c4")]
        assert names == ["1.0.0"]

    def test_unparseable_tag_dropped(self, history):
        graph = MemoryGraph(history, [("release-final", "c4"), ("2.1.0", "c3")])
        names = [c.tag_name for c in TagResolver(graph).fetch_candidates("c4")]
        assert names == ["2.1.0"]

    def test_backend_failure_drops_only_that_tag(self, history):
        class Flaky(MemoryGraph):
            def distance(self, candidate, reference):
                if candidate == "c3":
                    raise RuntimeError("object store hiccup")
                return super().distance(candidate, reference)

        graph = Flaky(history, [("2.0.0", "c3"), ("1.0.0", "c1")])
        names = [c.tag_name for c in TagResolver(graph).fetch_candidates("c4")]
        assert names == ["1.0.0"]


class TestSelection:
    """Nearest tag wins; larger version breaks ties."""

    def test_nearest_tag_wins_over_larger_version(self, history):
        best = resolve(history, [("5.0.0", "c1"), ("1.1.0", "c3")])
        assert best.tag_name == "1.1.0"

    def test_same_commit_prefers_larger_version(self, history):
        best = resolve(history, [("1.2.0", "c4"), ("1.3.0", "c4")])
        assert best.version == Version.of(1, 3, 0)
        assert best.commit_distance == 0

    def test_equidistant_merge_parents_prefer_larger_version(self):
        parents = {"base": [], "a": ["base"], "b": ["base"], "merge": ["a", "b"]}
        best = resolve(parents, [("2.0.0", "a"), ("2.4.1", "b")], reference="merge")
        assert best.tag_name == "2.4.1"

    def test_prefixed_tag_names(self, history):
        best = resolve(history, [("v1.0", "c2"), ("release/1.1", "c3")])
        assert best.tag_name == "release/1.1"
        assert best.version == Version.of(1, 1)

    def test_malformed_tag_does_not_block(self, history):
        best = resolve(history, [("release-final", "c4"), ("2.1.0", "c4")])
        assert best.version == Version.of(2, 1, 0)

    def test_no_reachable_tag_returns_none(self, history):
        assert resolve(history, [("9.0.0", "s1")]) is None

    def test_no_tags_returns_none(self, history):
        assert resolve(history, []) is None

    def test_rank_is_deterministic_for_equal_versions(self):
        a = TagCandidate("v1.2.0", 0, Version.of(1, 2, 0))
        b = TagCandidate("1.2.0", 0, Version.of(1, 2, 0))
        assert TagResolver.rank([a, b])[0].tag_name == "1.2.0"
        assert TagResolver.rank([b, a])[0].tag_name == "1.2.0"

    def test_rank_orders_distance_then_version(self):
        candidates = [
            TagCandidate("1.0.0", 2, Version.of(1, 0, 0)),
            TagCandidate("0.9.0", 1, Version.of(0, 9, 0)),
            TagCandidate("0.9.1", 1, Version.of(0, 9, 1)),
        ]
        assert [c.tag_name for c in TagResolver.rank(candidates)] == ["0.9.1", "0.9.0", "1.0.0"]

    def test_pick_empty(self, history):
        assert TagResolver(MemoryGraph(history)).pick([]) is None
