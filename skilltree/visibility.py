"""Filter and search based node dimming."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .models import ExerciseStatus

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import Exercise, Path, SkillTreeNode


@dataclass
class FilterState:
    """Active filter selections; an empty list disables that filter."""

    paths: list[str] = field(default_factory=list)
    products: list[str] = field(default_factory=list)
    difficulties: list[str] = field(default_factory=list)
    statuses: list[str] = field(default_factory=list)


@dataclass
class VisibilityConfig:
    """Opacity levels used for dimming."""

    # Opacity of a node that misses the search term
    search_miss: float = 0.15
    # Opacity of a node matching none of the active category filters
    filter_floor: float = 0.25
    # Opacity of a node whose status is filtered out
    status_miss: float = 0.25


def matches_search_term(exercise: Exercise, path: Path, search_term: str) -> bool:
    """Case-insensitive substring match over the exercise's text fields."""
    if not search_term.strip():
        return True

    term = search_term.lower()
    fields = [
        exercise.name,
        exercise.description,
        exercise.status.value,
        exercise.raw_status,
        exercise.difficulty.value if exercise.difficulty else None,
        exercise.slug,
        path.name,
        path.description,
        *exercise.products,
        *exercise.dependencies,
    ]
    return any(f and term in f.lower() for f in fields)


def _status_matches(exercise: Exercise, selected: str) -> bool:
    """Compare a status filter entry with the exercise, aliases included.

    Unrecognised entries only match exercises authored with the same text.
    """
    if ExerciseStatus.parse(selected) is not exercise.status:
        return False
    if exercise.status is not ExerciseStatus.UNKNOWN:
        return True
    entry = selected.strip().lower()
    return entry == ExerciseStatus.UNKNOWN.value or entry == exercise.raw_status.lower()


def calculate_visibility(
    exercise: Exercise,
    path: Path,
    filters: FilterState,
    search_term: str = "",
    config: VisibilityConfig | None = None,
) -> float:
    """Opacity of an exercise in [0, 1] under the current filters.

    A non-empty search term overrides the filters entirely. Otherwise a
    status mismatch dims to a fixed level, and visibility rises linearly
    from the floor with the share of active path/product/difficulty
    filters the exercise matches.
    """
    if config is None:
        config = VisibilityConfig()

    if search_term and search_term.strip():
        return 1.0 if matches_search_term(exercise, path, search_term) else config.search_miss

    if filters.statuses:
        if not any(_status_matches(exercise, s) for s in filters.statuses):
            return config.status_miss

    matches: list[bool] = []
    if filters.paths:
        matches.append(exercise.path_slug is not None and exercise.path_slug in filters.paths)
    if filters.products:
        matches.append(any(p in filters.products for p in exercise.products))
    if filters.difficulties:
        matches.append(
            exercise.difficulty is not None and exercise.difficulty.value in filters.difficulties
        )

    if not matches:
        return 1.0

    share = sum(matches) / len(matches)
    return config.filter_floor + (1 - config.filter_floor) * share


def apply_visibility(
    nodes: Sequence[SkillTreeNode],
    filters: FilterState,
    search_term: str = "",
    config: VisibilityConfig | None = None,
) -> dict[str, float]:
    """Opacity for every node, keyed by slug."""
    return {
        node.slug: node_visibility(node, filters, search_term, config)
        for node in nodes
    }


def node_visibility(
    node: SkillTreeNode,
    filters: FilterState,
    search_term: str = "",
    config: VisibilityConfig | None = None,
) -> float:
    """Opacity of a node under the current filters."""
    return calculate_visibility(node.exercise, node.path, filters, search_term, config)
