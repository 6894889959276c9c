"""Drag propagation and the caller-owned position overlay."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import networkx as nx

from .graph import dependency_graph, node_index
from .models import Point

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .models import SkillTreeNode

logger = logging.getLogger(__name__)


def transitive_dependents(target_slug: str, nodes: Sequence[SkillTreeNode]) -> list[str]:
    """Find every node that depends on the target, directly or indirectly.

    The target itself is never part of the result, even on a cycle.

    Returns:
        Slugs in node order
    """
    graph = dependency_graph(nodes)
    if target_slug not in graph:
        return []
    reachable = nx.descendants(graph, target_slug)
    seen: set[str] = set()
    result = []
    for node in nodes:
        if node.slug in reachable and node.slug not in seen:
            seen.add(node.slug)
            result.append(node.slug)
    return result


def propagate_drag(
    dragged_slug: str,
    new_position: Point,
    nodes: Sequence[SkillTreeNode],
) -> dict[str, Point]:
    """Move a node and translate all of its transitive dependents with it.

    Args:
        dragged_slug: Slug of the node being dragged
        new_position: Absolute position for the dragged node
        nodes: All nodes, with their current positions

    Returns:
        Mapping of slug -> new position for the dragged node and every
        transitive dependent; empty when the slug is unknown
    """
    dragged = node_index(nodes).get(dragged_slug)
    if dragged is None:
        return {}

    offset = new_position - dragged.position
    dependent_slugs = set(transitive_dependents(dragged_slug, nodes))

    new_positions = {dragged_slug: new_position}
    moved = []
    for node in nodes:
        if node.slug in dependent_slugs and node.slug not in new_positions:
            new_positions[node.slug] = node.position + offset
            moved.append(node.slug)

    logger.debug(
        "Node '%s' moved by (%s, %s) to (%s, %s); %d dependents moved: %s",
        dragged_slug, offset.x, offset.y, new_position.x, new_position.y,
        len(moved), moved,
    )
    return new_positions


def apply_overlay(
    nodes: Sequence[SkillTreeNode],
    overlay: Mapping[str, Point],
) -> list[SkillTreeNode]:
    """Return copies of nodes with overlay positions substituted.

    The input nodes are not modified.
    """
    return [
        dataclasses.replace(node, position=overlay[node.slug]) if node.slug in overlay else node
        for node in nodes
    ]


@dataclass
class DragSession:
    """A drag gesture in progress on one node."""

    slug: str
    start: Point

    def position_for(self, pointer_delta: Point) -> Point:
        return self.start + pointer_delta


@dataclass
class PositionOverlay:
    """Custom node positions layered over the resolved layout.

    Positions only apply while drag mode is enabled; turning drag mode
    off discards them so the resolved layout shows again.
    """

    drag_mode: bool = False
    positions: dict[str, Point] = field(default_factory=dict)

    def set_drag_mode(self, enabled: bool) -> None:
        self.drag_mode = enabled
        if not enabled:
            self.positions.clear()

    def apply(self, nodes: Sequence[SkillTreeNode]) -> list[SkillTreeNode]:
        """Nodes as they should be displayed."""
        if not self.drag_mode:
            return list(nodes)
        return apply_overlay(nodes, self.positions)

    def drag(self, slug: str, new_position: Point, nodes: Sequence[SkillTreeNode]) -> dict[str, Point]:
        """Move ``slug`` to ``new_position`` and record the propagated positions.

        ``nodes`` are the resolver's nodes; existing overlay positions are
        taken into account. Does nothing outside drag mode.
        """
        if not self.drag_mode:
            return {}
        moved = propagate_drag(slug, new_position, self.apply(nodes))
        self.positions.update(moved)
        return moved

    def begin_drag(self, slug: str, nodes: Sequence[SkillTreeNode]) -> DragSession | None:
        if not self.drag_mode:
            return None
        node = node_index(self.apply(nodes)).get(slug)
        if node is None:
            return None
        return DragSession(slug=slug, start=node.position)

    def drag_by(
        self,
        session: DragSession,
        pointer_delta: Point,
        nodes: Sequence[SkillTreeNode],
    ) -> dict[str, Point]:
        """Handle a pointer move measured from where the gesture started."""
        return self.drag(session.slug, session.position_for(pointer_delta), nodes)

    def load(self, stored: Mapping[str, Point | dict[str, float] | tuple[float, float]]) -> None:
        """Restore positions from a persisted ``slug -> {x, y}`` mapping.

        Entries that do not describe a point are dropped.
        """
        positions = {}
        for slug, value in stored.items():
            point = Point.from_value(value)
            if point is None:
                logger.debug("Skipping stored position for '%s': %r", slug, value)
                continue
            positions[slug] = point
        self.positions = positions

    def to_dict(self) -> dict[str, dict[str, float]]:
        return {slug: {"x": p.x, "y": p.y} for slug, p in self.positions.items()}
