"""Example usage of skilltree."""

from skilltree import (
    Exercise,
    FilterState,
    Path,
    Point,
    PositionOverlay,
    create_skill_tree,
    render_to_svg,
)

PATHS = [
    Path(slug="foundations", name="Foundations", description="Start here", color="#2da44e"),
    Path(slug="automation", name="Automation", description="CI/CD with Actions", color="#bf8700"),
    Path(slug="security", name="Security", description="Secure your code", color="#cf222e"),
]

EXERCISES = [
    Exercise.from_dict({"slug": "introduction", "name": "Introduction", "pathSlug": "foundations"}),
    Exercise.from_dict({
        "slug": "markdown", "name": "Markdown", "pathSlug": "foundations",
        "dependencies": ["introduction"], "position": {"x": -120, "y": 100},
    }),
    Exercise.from_dict({
        "slug": "pull-requests", "name": "Pull Requests", "pathSlug": "foundations",
        "dependencies": ["introduction"], "position": {"x": 120, "y": 100},
    }),
    Exercise.from_dict({
        "slug": "actions", "name": "Hello Actions", "pathSlug": "automation",
        "dependencies": ["pull-requests"], "difficulty": "Beginner",
    }),
    Exercise.from_dict({
        "slug": "publish-packages", "name": "Publish Packages", "pathSlug": "automation",
        "dependencies": ["actions", "markdown"], "status": "development",
        "products": ["Actions", "Packages"],
    }),
    Exercise.from_dict({
        "slug": "code-scanning", "name": "Code Scanning", "pathSlug": "security",
        "dependencies": ["pull-requests"], "position": {"x": 120, "y": 100},
        "status": "scheduled", "difficulty": "Advanced",
    }),
]


def basic_example():
    """Render the resolved layout."""
    render_to_svg(EXERCISES, PATHS, filename="output/skill_tree")
    print("Skill tree saved to output/skill_tree.svg")


def filtered_example():
    """Dim everything outside the automation path."""
    render_to_svg(
        EXERCISES,
        PATHS,
        filename="output/skill_tree_filtered",
        filters=FilterState(paths=["automation"]),
    )
    print("Filtered skill tree saved to output/skill_tree_filtered.svg")


def dragged_example():
    """Drag 'pull-requests' to the right; its dependents follow."""
    nodes = create_skill_tree(EXERCISES, PATHS)
    overlay = PositionOverlay(drag_mode=True)
    overlay.drag("pull-requests", Point(300, 100), nodes)
    render_to_svg(EXERCISES, PATHS, filename="output/skill_tree_dragged", overlay=overlay)
    print("Dragged skill tree saved to output/skill_tree_dragged.svg")


if __name__ == "__main__":
    import logging
    from pathlib import Path as FilePath

    logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")
    FilePath("output").mkdir(exist_ok=True)

    basic_example()
    filtered_example()
    dragged_example()
