"""SVG renderer using drawsvg."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import drawsvg as draw

from .graph import node_index
from .layout import CanvasConfig, LayoutConfig, compute_canvas_bounds, create_skill_tree
from .models import ExerciseStatus
from .pathfinding import RoutingConfig, route_edges
from .visibility import FilterState, apply_visibility

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from .drag import PositionOverlay
    from .models import Exercise, Path, Point, SkillTreeNode


class Theme:
    """Color theme for skill trees."""

    def __init__(
        self,
        background: str = "#0d1117",
        node_fill: str = "#21262d",
        text_color: str = "#e6edf3",
        development_color: str = "#f97316",
        node_radius: float = 28,
        highlight_radius: float = 34,
        connector_opacity: float = 0.6,
        show_labels: bool = True,
    ):
        self.background = background
        self.node_fill = node_fill
        self.text_color = text_color
        self.development_color = development_color
        self.node_radius = node_radius
        self.highlight_radius = highlight_radius
        self.connector_opacity = connector_opacity
        self.show_labels = show_labels


DEFAULT_THEME = Theme()

FONT_FAMILY = "Inter, -apple-system, BlinkMacSystemFont, sans-serif"


class SkillTreeRenderer:
    """Renders positioned skill tree nodes to SVG."""

    def __init__(
        self,
        theme: Theme | None = None,
        canvas: CanvasConfig | None = None,
        routing: RoutingConfig | None = None,
    ):
        self.theme = theme or DEFAULT_THEME
        self.canvas = canvas or CanvasConfig()
        self.routing = routing or RoutingConfig()

    def render(
        self,
        nodes: Sequence[SkillTreeNode],
        visibility: Mapping[str, float] | None = None,
        highlighted: str | None = None,
    ) -> draw.Drawing:
        """Render nodes (with final positions) to an SVG Drawing object."""
        visibility = visibility or {}
        bounds = compute_canvas_bounds(nodes, self.canvas)

        d = draw.Drawing(bounds.width, bounds.height)
        d.append(
            draw.Rectangle(
                0, 0, bounds.width, bounds.height,
                fill=self.theme.background,
            )
        )

        content = draw.Group(transform=f"translate({-bounds.offset_x}, {-bounds.offset_y})")

        # Connectors first so nodes sit on top
        index = node_index(nodes)
        for (dep_slug, slug), points in route_edges(nodes, self.routing).items():
            self._render_connector(
                content,
                points,
                color=index[dep_slug].path.color,
                visibility=visibility.get(slug, 1.0),
                is_highlighted=highlighted in (dep_slug, slug),
            )

        for node in nodes:
            self._render_node(
                content,
                node,
                visibility=visibility.get(node.slug, 1.0),
                is_highlighted=node.slug == highlighted,
            )

        d.append(content)
        return d

    def _render_connector(
        self,
        d: draw.Group,
        points: list[Point],
        color: str,
        visibility: float,
        is_highlighted: bool,
    ) -> None:
        """Render one routed connector with an arrowhead at its end."""
        if len(points) < 2:
            return

        opacity = (0.9 if is_highlighted else self.theme.connector_opacity) * visibility
        stroke_width = 3 if is_highlighted else 2

        path = draw.Path(
            stroke=color,
            stroke_width=stroke_width,
            fill="none",
            opacity=opacity,
            stroke_linecap="round",
            stroke_linejoin="round",
        )
        path.M(points[0].x, points[0].y)
        for point in points[1:]:
            path.L(point.x, point.y)
        d.append(path)

        last, prev = points[-1], points[-2]
        angle = math.atan2(last.y - prev.y, last.x - prev.x)
        self._draw_arrowhead(d, last.x, last.y, angle, 4 * stroke_width, color, opacity)

    def _render_node(
        self,
        d: draw.Group,
        node: SkillTreeNode,
        visibility: float,
        is_highlighted: bool,
    ) -> None:
        """Render a single node."""
        x, y = node.position.x, node.position.y
        radius = self.theme.highlight_radius if is_highlighted else self.theme.node_radius
        in_development = node.exercise.status is ExerciseStatus.IN_DEVELOPMENT

        group = draw.Group(opacity=visibility)

        # In-development ring
        if in_development:
            group.append(
                draw.Circle(
                    x, y, radius + 12,
                    fill="none",
                    stroke=self.theme.development_color,
                    stroke_width=1,
                    stroke_dasharray="4,3",
                    opacity=0.6,
                )
            )

        # Highlight ring
        if is_highlighted:
            group.append(
                draw.Circle(
                    x, y, radius + 6,
                    fill="none",
                    stroke=node.path.color,
                    stroke_width=2,
                    opacity=0.5,
                )
            )

        group.append(
            draw.Circle(
                x, y, radius,
                fill=self.theme.development_color if in_development else self.theme.node_fill,
                stroke=node.path.color,
                stroke_width=2,
            )
        )

        if self.theme.show_labels:
            group.append(
                draw.Text(
                    node.exercise.name or node.slug,
                    12,
                    x, y + radius + 20,
                    fill=self.theme.text_color,
                    font_family=FONT_FAMILY,
                    font_weight="500",
                    text_anchor="middle",
                )
            )

        d.append(group)

    def _draw_arrowhead(
        self,
        d: draw.Group,
        x: float,
        y: float,
        angle: float,
        size: float,
        color: str,
        opacity: float,
    ) -> None:
        """Draw an arrowhead at the given position and angle."""
        p1_x = x - size * math.cos(angle - math.pi / 6)
        p1_y = y - size * math.sin(angle - math.pi / 6)
        p2_x = x - size * math.cos(angle + math.pi / 6)
        p2_y = y - size * math.sin(angle + math.pi / 6)

        d.append(
            draw.Lines(
                x, y,
                p1_x, p1_y,
                p2_x, p2_y,
                x, y,
                fill=color,
                stroke="none",
                opacity=opacity,
            )
        )


def render_to_svg(
    exercises: Iterable[Exercise],
    paths: Sequence[Path],
    filename: str | None = None,
    filters: FilterState | None = None,
    search_term: str = "",
    overlay: PositionOverlay | None = None,
    layout_config: LayoutConfig | None = None,
    renderer: SkillTreeRenderer | None = None,
) -> str:
    """Lay out and render a skill tree to SVG.

    Args:
        exercises: Exercise records
        paths: Learning paths
        filename: Optional filename to save to (without extension)
        filters: Active filters, used for dimming only
        search_term: Active search term, used for dimming only
        overlay: Custom positions from dragging
        layout_config: Layout configuration
        renderer: Renderer to use instead of the default one

    Returns:
        SVG content as string
    """
    nodes = create_skill_tree(exercises, paths, layout_config)
    if overlay is not None:
        nodes = overlay.apply(nodes)

    visibility = apply_visibility(nodes, filters or FilterState(), search_term)

    renderer = renderer or SkillTreeRenderer()
    drawing = renderer.render(nodes, visibility)

    if filename:
        drawing.save_svg(f"{filename}.svg")

    return drawing.as_svg()
