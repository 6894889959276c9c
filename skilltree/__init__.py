"""skilltree - Layout, drag propagation and connector routing for skill trees.

Example usage:
    from skilltree import Exercise, Path, create_skill_tree, route_edges

    paths = [Path(slug="actions", name="Actions", color="#2da44e")]
    exercises = [
        Exercise(slug="intro"),
        Exercise(slug="workflows", path_slug="actions", dependencies=("intro",)),
    ]

    nodes = create_skill_tree(exercises, paths)
    routes = route_edges(nodes)
"""

from .drag import (
    DragSession,
    PositionOverlay,
    apply_overlay,
    propagate_drag,
    transitive_dependents,
)
from .graph import (
    build_graph,
    dependency_graph,
    node_index,
)
from .layout import (
    CanvasBounds,
    CanvasConfig,
    LayoutConfig,
    compute_canvas_bounds,
    create_skill_tree,
    resolve_layout,
)
from .models import (
    DEFAULT_PATH,
    Difficulty,
    Exercise,
    ExerciseStatus,
    ObstacleNode,
    Path,
    Point,
    SkillTreeNode,
)
from .pathfinding import (
    RoutingConfig,
    line_intersects_circle,
    nodes_to_obstacles,
    path_intersects_obstacles,
    route_edges,
    route_path,
)
from .renderer import (
    DEFAULT_THEME,
    SkillTreeRenderer,
    Theme,
    render_to_svg,
)
from .visibility import (
    FilterState,
    VisibilityConfig,
    apply_visibility,
    calculate_visibility,
    matches_search_term,
    node_visibility,
)

__version__ = "0.1.0"

__all__ = [
    # Models
    "Exercise",
    "ExerciseStatus",
    "Difficulty",
    "Path",
    "DEFAULT_PATH",
    "Point",
    "SkillTreeNode",
    "ObstacleNode",
    # Graph
    "build_graph",
    "dependency_graph",
    "node_index",
    # Layout
    "LayoutConfig",
    "CanvasConfig",
    "CanvasBounds",
    "resolve_layout",
    "create_skill_tree",
    "compute_canvas_bounds",
    # Dragging
    "propagate_drag",
    "transitive_dependents",
    "apply_overlay",
    "PositionOverlay",
    "DragSession",
    # Routing
    "RoutingConfig",
    "route_path",
    "route_edges",
    "nodes_to_obstacles",
    "line_intersects_circle",
    "path_intersects_obstacles",
    # Visibility
    "FilterState",
    "VisibilityConfig",
    "calculate_visibility",
    "node_visibility",
    "apply_visibility",
    "matches_search_term",
    # Rendering
    "render_to_svg",
    "SkillTreeRenderer",
    "Theme",
    "DEFAULT_THEME",
    # Version
    "__version__",
]
