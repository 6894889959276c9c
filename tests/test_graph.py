"""Tests for graph.py: node construction, path fallback, dependent edges."""

from __future__ import annotations

from skilltree.graph import build_graph, dependency_graph, node_index
from skilltree.models import DEFAULT_PATH, Exercise, Path

# ─── Helpers ──────────────────────────────────────────────────────────────────


def make_exercise(slug: str, *deps: str, path_slug: str | None = None) -> Exercise:
    """Create a minimal Exercise for testing."""
    return Exercise(slug=slug, dependencies=deps, path_slug=path_slug)


PATHS = [
    Path(slug="foundations", name="Foundations", color="#2da44e"),
    Path(slug="security", name="Security", color="#cf222e"),
]


class TestPathResolution:
    def test_matching_path(self) -> None:
        nodes = build_graph([make_exercise("a", path_slug="security")], PATHS)
        assert nodes[0].path.slug == "security"

    def test_unmatched_path_falls_back_to_first(self) -> None:
        nodes = build_graph([make_exercise("a", path_slug="ghost")], PATHS)
        assert nodes[0].path.slug == "foundations"

    def test_missing_path_slug_falls_back_to_first(self) -> None:
        nodes = build_graph([make_exercise("a")], PATHS)
        assert nodes[0].path.slug == "foundations"

    def test_no_paths_uses_default(self) -> None:
        nodes = build_graph([make_exercise("a", path_slug="security")], [])
        assert nodes[0].path == DEFAULT_PATH


class TestDependents:
    def test_inverse_of_dependencies(self) -> None:
        nodes = build_graph(
            [
                make_exercise("root"),
                make_exercise("left", "root"),
                make_exercise("right", "root"),
                make_exercise("join", "left", "right"),
            ],
            PATHS,
        )
        index = node_index(nodes)
        assert index["root"].dependents == ["left", "right"]
        assert index["left"].dependents == ["join"]
        assert index["right"].dependents == ["join"]
        assert index["join"].dependents == []

    def test_symmetry(self) -> None:
        nodes = build_graph(
            [
                make_exercise("a"),
                make_exercise("b", "a"),
                make_exercise("c", "a", "b"),
                make_exercise("d", "c"),
            ],
            PATHS,
        )
        index = node_index(nodes)
        for node in nodes:
            for dep in node.dependencies:
                assert node.slug in index[dep].dependents
            for dependent in node.dependents:
                assert node.slug in index[dependent].dependencies

    def test_forward_reference(self) -> None:
        nodes = build_graph([make_exercise("b", "a"), make_exercise("a")], PATHS)
        assert node_index(nodes)["a"].dependents == ["b"]

    def test_unknown_dependency_skipped(self) -> None:
        nodes = build_graph([make_exercise("a", "ghost")], PATHS)
        assert nodes[0].dependencies == ["ghost"]
        assert nodes[0].dependents == []

    def test_positions_start_at_origin(self) -> None:
        nodes = build_graph([make_exercise("a"), make_exercise("b", "a")], PATHS)
        assert all(n.position.x == 0 and n.position.y == 0 for n in nodes)

    def test_empty_input(self) -> None:
        assert build_graph([], PATHS) == []


class TestDependencyGraph:
    def test_edges_point_to_dependents(self) -> None:
        nodes = build_graph(
            [make_exercise("a"), make_exercise("b", "a"), make_exercise("c", "b", "ghost")],
            PATHS,
        )
        graph = dependency_graph(nodes)
        assert set(graph.nodes) == {"a", "b", "c"}
        assert set(graph.edges) == {("a", "b"), ("b", "c")}

    def test_cycle_is_kept(self) -> None:
        nodes = build_graph([make_exercise("a", "b"), make_exercise("b", "a")], PATHS)
        graph = dependency_graph(nodes)
        assert set(graph.edges) == {("a", "b"), ("b", "a")}
