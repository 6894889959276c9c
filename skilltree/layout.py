"""Layout algorithms for skill tree graphs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .graph import build_graph, node_index
from .models import Point

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .models import Exercise, Path, SkillTreeNode

logger = logging.getLogger(__name__)


@dataclass
class LayoutConfig:
    """Configuration for relative layout resolution."""

    # Absolute position of a root exercise that declares no position
    root_offset: Point = field(default_factory=lambda: Point(0, 0))
    # Offset below the anchor for a dependent that declares no position
    dependent_offset: Point = field(default_factory=lambda: Point(0, 50))


@dataclass
class CanvasConfig:
    """Configuration for canvas sizing."""

    padding: float = 80
    min_width: float = 1400
    min_height: float = 1200


@dataclass
class CanvasBounds:
    """Canvas size and the offset to translate node coordinates by."""

    width: float
    height: float
    offset_x: float
    offset_y: float


def select_anchor(node: SkillTreeNode, index: dict[str, SkillTreeNode]) -> SkillTreeNode | None:
    """Pick the dependency with the largest x + y.

    Ties go to the dependency listed first. Unknown slugs are ignored;
    returns None when no dependency resolves.
    """
    anchor: SkillTreeNode | None = None
    for dep_slug in node.dependencies:
        dep_node = index.get(dep_slug)
        if dep_node is None:
            continue
        if anchor is None or (
            dep_node.position.x + dep_node.position.y > anchor.position.x + anchor.position.y
        ):
            anchor = dep_node
    return anchor


def resolve_layout(nodes: Sequence[SkillTreeNode], config: LayoutConfig | None = None) -> None:
    """Calculate absolute positions for all nodes from their relative offsets.

    This modifies nodes in-place. Each dependency is resolved before its
    dependents (depth-first, memoized). A node reached again while it is
    still being resolved, which only happens on a dependency cycle, keeps
    its current position.

    The walk uses an explicit stack, so chain length is not bounded by
    the interpreter's recursion limit. A node is pushed once to expand
    its dependencies and once more to be placed after them.
    """
    if config is None:
        config = LayoutConfig()

    index = node_index(nodes)
    positioned: set[str] = set()
    in_progress: set[str] = set()

    # Start every pass from the same placeholder so repeated passes agree
    for node in nodes:
        node.position = Point()

    def place(node: SkillTreeNode) -> None:
        offset = node.exercise.position
        if not node.dependencies:
            node.position = offset if offset is not None else config.root_offset
        else:
            anchor = select_anchor(node, index)
            base = anchor.position if anchor is not None else Point()
            node.position = base + (offset if offset is not None else config.dependent_offset)
        positioned.add(node.slug)

    def calc_position(start: SkillTreeNode) -> None:
        stack: list[tuple[SkillTreeNode, bool]] = [(start, False)]
        while stack:
            node, expanded = stack.pop()
            slug = node.slug
            if slug in positioned:
                continue

            if expanded:
                in_progress.discard(slug)
                place(node)
                continue

            if slug in in_progress:
                logger.debug("Dependency cycle reached '%s', keeping its current position", slug)
                continue

            if not node.dependencies:
                place(node)
                continue

            in_progress.add(slug)
            stack.append((node, True))
            # Reversed so the first listed dependency is resolved first
            for dep_slug in reversed(node.dependencies):
                dep_node = index.get(dep_slug)
                if dep_node is not None and dep_node.slug not in positioned:
                    stack.append((dep_node, False))

    for node in nodes:
        calc_position(node)


def create_skill_tree(
    exercises: Iterable[Exercise],
    paths: Sequence[Path],
    config: LayoutConfig | None = None,
) -> list[SkillTreeNode]:
    """Build the node graph and resolve its layout in one step."""
    nodes = build_graph(exercises, paths)
    resolve_layout(nodes, config)
    return nodes


def compute_canvas_bounds(
    nodes: Sequence[SkillTreeNode],
    config: CanvasConfig | None = None,
) -> CanvasBounds:
    """Size a canvas so that every node center fits with padding.

    The canvas always includes the origin and never shrinks below the
    configured minimum size.
    """
    if config is None:
        config = CanvasConfig()

    if not nodes:
        return CanvasBounds(
            width=config.min_width,
            height=config.min_height,
            offset_x=0,
            offset_y=0,
        )

    min_x = min(n.position.x for n in nodes)
    max_x = max(n.position.x for n in nodes)
    min_y = min(n.position.y for n in nodes)
    max_y = max(n.position.y for n in nodes)

    width = max(max_x - min(min_x, 0) + config.padding * 2, config.min_width)
    height = max(max_y - min(min_y, 0) + config.padding * 2, config.min_height)

    return CanvasBounds(
        width=width,
        height=height,
        offset_x=min(min_x, 0) - config.padding,
        offset_y=min(min_y, 0) - config.padding,
    )
