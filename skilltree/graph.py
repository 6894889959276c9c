"""Build the skill tree node graph from exercise and path records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import networkx as nx

from .models import DEFAULT_PATH, Path, SkillTreeNode

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .models import Exercise

logger = logging.getLogger(__name__)


def _resolve_path(exercise: Exercise, path_map: dict[str, Path], paths: Sequence[Path]) -> Path:
    """Find the exercise's path, falling back to the first path or the default."""
    if exercise.path_slug and exercise.path_slug in path_map:
        return path_map[exercise.path_slug]
    if paths:
        logger.debug(
            "Exercise '%s' has no matching path (%r), using '%s'",
            exercise.slug, exercise.path_slug, paths[0].slug,
        )
        return paths[0]
    return DEFAULT_PATH


def build_graph(exercises: Iterable[Exercise], paths: Sequence[Path]) -> list[SkillTreeNode]:
    """Convert exercises into nodes with symmetric dependency/dependent edges.

    Positions are left at the origin; see ``layout.resolve_layout``.
    Unknown dependency slugs are kept on the node but never produce a
    dependent entry.

    Args:
        exercises: Exercise records, in display order
        paths: Available learning paths

    Returns:
        One node per exercise, in input order
    """
    paths = list(paths)
    path_map = {path.slug: path for path in paths}

    # First pass: one node per exercise
    nodes = [
        SkillTreeNode(
            exercise=exercise,
            path=_resolve_path(exercise, path_map, paths),
            dependencies=list(exercise.dependencies),
        )
        for exercise in exercises
    ]

    # Second pass: dependents are the inverse of dependencies
    index = node_index(nodes)
    edge_count = 0
    for node in nodes:
        for dep_slug in node.dependencies:
            dep_node = index.get(dep_slug)
            if dep_node is None:
                logger.debug("Skipping unknown dependency '%s' of '%s'", dep_slug, node.slug)
                continue
            dep_node.dependents.append(node.slug)
            edge_count += 1

    logger.info("Built skill tree graph: %d nodes, %d edges", len(nodes), edge_count)
    return nodes


def node_index(nodes: Iterable[SkillTreeNode]) -> dict[str, SkillTreeNode]:
    """Map slugs to nodes (first occurrence wins on duplicate slugs)."""
    index: dict[str, SkillTreeNode] = {}
    for node in nodes:
        index.setdefault(node.slug, node)
    return index


def dependency_graph(nodes: Iterable[SkillTreeNode]) -> nx.DiGraph:
    """Directed graph with an edge dependency -> dependent for every resolved edge."""
    graph: nx.DiGraph = nx.DiGraph()
    nodes = list(nodes)
    for node in nodes:
        graph.add_node(node.slug)
    for node in nodes:
        for dependent in node.dependents:
            graph.add_edge(node.slug, dependent)
    return graph
