"""Obstacle-avoiding connector routing between skill tree nodes."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .graph import node_index
from .models import ObstacleNode, Point

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from .models import SkillTreeNode

logger = logging.getLogger(__name__)


@dataclass
class RoutingConfig:
    """Configuration for connector routing."""

    node_radius: float = 30.0
    # Extra space kept between a connector and any obstacle circle
    clearance: float = 15.0
    # Fraction of the vertical distance before the bend (downward routes)
    descend_split: float = 0.6
    # Fraction of the horizontal distance before the bend (upward routes)
    ascend_split: float = 0.5
    # Bend fractions of the wider fallback route
    wide_descend_split: float = 0.3
    wide_ascend_split: float = 0.7


def _l_route(start: Point, end: Point, descend_split: float, ascend_split: float) -> list[Point]:
    """Orthogonal route with a single bend segment."""
    dx = end.x - start.x
    dy = end.y - start.y

    if dy > 0:
        # Moving downward: down, across, down
        mid_y = start.y + dy * descend_split
        return [start, Point(start.x, mid_y), Point(end.x, mid_y), end]

    # Moving upward: across, up, across
    mid_x = start.x + dx * ascend_split
    return [start, Point(mid_x, start.y), Point(mid_x, end.y), end]


def direct_path(start: Point, end: Point, config: RoutingConfig | None = None) -> list[Point]:
    """Default L-shaped route between two anchor points."""
    if config is None:
        config = RoutingConfig()
    return _l_route(start, end, config.descend_split, config.ascend_split)


def routing_strategies(start: Point, end: Point, config: RoutingConfig | None = None) -> list[list[Point]]:
    """Fallback routes, in the order they are tried."""
    if config is None:
        config = RoutingConfig()
    return [
        # Horizontal first
        [start, Point(end.x, start.y), end],
        # Vertical first
        [start, Point(start.x, end.y), end],
        # Wider arc
        _l_route(start, end, config.wide_descend_split, config.wide_ascend_split),
    ]


def line_intersects_circle(
    line_start: Point,
    line_end: Point,
    circle: ObstacleNode,
    clearance: float = 0.0,
) -> bool:
    """Check if a line segment touches a circle inflated by ``clearance``."""
    radius = circle.radius + clearance

    dx = line_end.x - line_start.x
    dy = line_end.y - line_start.y

    # Zero-length segment: point-in-circle
    if dx == 0 and dy == 0:
        distance = math.sqrt((line_start.x - circle.x) ** 2 + (line_start.y - circle.y) ** 2)
        return distance <= radius

    fx = line_start.x - circle.x
    fy = line_start.y - circle.y

    # |start + t*d - center|^2 = r^2
    a = dx * dx + dy * dy
    b = 2 * (fx * dx + fy * dy)
    c = (fx * fx + fy * fy) - radius * radius

    discriminant = b * b - 4 * a * c
    if discriminant < 0:
        return False

    discriminant_sqrt = math.sqrt(discriminant)
    t1 = (-b - discriminant_sqrt) / (2 * a)
    t2 = (-b + discriminant_sqrt) / (2 * a)

    return 0 <= t1 <= 1 or 0 <= t2 <= 1


def path_intersects_obstacles(
    path: Sequence[Point],
    obstacles: Sequence[ObstacleNode],
    clearance: float = 0.0,
) -> bool:
    """Check if any segment of a polyline touches any obstacle."""
    if len(path) < 2 or not obstacles:
        return False

    for seg_start, seg_end in zip(path, path[1:]):
        for obstacle in obstacles:
            if line_intersects_circle(seg_start, seg_end, obstacle, clearance):
                return True
    return False


def route_path(
    from_point: Point,
    to_point: Point,
    obstacles: Sequence[ObstacleNode],
    node_radius: float | None = None,
    config: RoutingConfig | None = None,
) -> list[Point]:
    """Route a connector from the bottom of one node to the top of another.

    Tries the direct L-route, then each fallback strategy, returning the
    first that clears every obstacle. When none does, the direct route is
    returned anyway.

    Args:
        from_point: Center of the source node
        to_point: Center of the target node
        obstacles: Footprints to avoid; must not include source or target
        node_radius: Distance from center to anchor point (defaults to config)
        config: Routing configuration

    Returns:
        Polyline of at least two points
    """
    if config is None:
        config = RoutingConfig()
    if node_radius is None:
        node_radius = config.node_radius

    start = Point(from_point.x, from_point.y + node_radius)
    end = Point(to_point.x, to_point.y - node_radius)

    direct = direct_path(start, end, config)
    if not obstacles or not path_intersects_obstacles(direct, obstacles, config.clearance):
        return direct

    for i, strategy in enumerate(routing_strategies(start, end, config), start=1):
        if not path_intersects_obstacles(strategy, obstacles, config.clearance):
            logger.debug("Direct route blocked, using fallback strategy %d", i)
            return strategy

    logger.debug(
        "No clear route from (%s, %s) to (%s, %s), using direct route",
        start.x, start.y, end.x, end.y,
    )
    return direct


def nodes_to_obstacles(
    nodes: Iterable[SkillTreeNode],
    exclude: Iterable[str] = (),
    radius: float = 30.0,
) -> list[ObstacleNode]:
    """Project nodes onto obstacle circles.

    Visibility is deliberately not consulted, so filtering never moves
    a connector.
    """
    excluded = set(exclude)
    return [
        ObstacleNode(x=node.position.x, y=node.position.y, radius=radius)
        for node in nodes
        if node.slug not in excluded
    ]


def route_edges(
    nodes: Sequence[SkillTreeNode],
    config: RoutingConfig | None = None,
) -> dict[tuple[str, str], list[Point]]:
    """Route every dependency -> dependent connector.

    Returns:
        Mapping of (dependency slug, dependent slug) -> polyline, in node order
    """
    if config is None:
        config = RoutingConfig()

    index = node_index(nodes)
    routes: dict[tuple[str, str], list[Point]] = {}

    for node in nodes:
        for dep_slug in node.dependencies:
            dep_node = index.get(dep_slug)
            if dep_node is None:
                continue
            obstacles = nodes_to_obstacles(nodes, (dep_slug, node.slug), config.node_radius)
            routes[(dep_slug, node.slug)] = route_path(
                dep_node.position, node.position, obstacles, config.node_radius, config
            )

    return routes
