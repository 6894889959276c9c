"""Data models for skill tree graphs."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ExerciseStatus(Enum):
    """Publication status of an exercise."""

    ACTIVE = "active"
    SCHEDULED = "scheduled"
    TENTATIVE = "tentative"
    IN_DEVELOPMENT = "in-development"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | ExerciseStatus | None) -> ExerciseStatus:
        """Resolve a raw status string, falling back to UNKNOWN."""
        if isinstance(value, ExerciseStatus):
            return value
        if not value or not isinstance(value, str):
            return cls.UNKNOWN
        normalized = value.strip().lower()
        normalized = _STATUS_ALIASES.get(normalized, normalized)
        for status in cls:
            if status.value == normalized:
                return status
        return cls.UNKNOWN


_STATUS_ALIASES = {
    "development": "in-development",
    "in-progress": "in-development",
}


class Difficulty(Enum):
    """Difficulty level of an exercise."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"

    @classmethod
    def parse(cls, value: str | Difficulty | None) -> Difficulty | None:
        if isinstance(value, Difficulty):
            return value
        if not value or not isinstance(value, str):
            return None
        for level in cls:
            if level.value.lower() == value.strip().lower():
                return level
        return None


@dataclass(frozen=True)
class Point:
    """A 2-D point or offset."""

    x: float = 0
    y: float = 0

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> tuple[float, float]:
        return self.x, self.y

    @classmethod
    def from_value(cls, value: Point | dict[str, float] | tuple[float, float] | None) -> Point | None:
        """Coerce a dict, pair or Point into a Point.

        A missing, null or non-numeric coordinate counts as 0. Anything
        that is not a dict or a two-item pair gives None, so the layout
        default applies.
        """
        if value is None or isinstance(value, Point):
            return value
        if isinstance(value, dict):
            return cls(_coordinate(value.get("x")), _coordinate(value.get("y")))
        if isinstance(value, (list, tuple)) and len(value) == 2:
            return cls(_coordinate(value[0]), _coordinate(value[1]))
        return None


def _coordinate(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0.0
    return result if math.isfinite(result) else 0.0


@dataclass(frozen=True)
class Path:
    """A learning path grouping related exercises."""

    slug: str
    name: str = ""
    description: str = ""
    color: str = "#0969da"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Path:
        return cls(
            slug=data["slug"],
            name=data.get("name", ""),
            description=data.get("description", ""),
            color=data.get("color", "#0969da"),
        )


DEFAULT_PATH = Path(
    slug="default",
    name="Default",
    description="Default learning path",
    color="#0969da",
)


@dataclass(frozen=True)
class Exercise:
    """A single exercise in the skill tree.

    ``position`` is an offset relative to the anchor dependency, or the
    absolute position for exercises without dependencies. ``None`` means
    the layout default applies. ``raw_status`` keeps the status text as
    authored, which stays searchable when it maps to UNKNOWN.
    """

    slug: str
    status: ExerciseStatus = ExerciseStatus.ACTIVE
    name: str = ""
    description: str = ""
    icon: str = ""
    repository_url: str = ""
    issue_url: str = ""
    path_slug: str | None = None
    dependencies: tuple[str, ...] = ()
    position: Point | None = None
    products: tuple[str, ...] = ()
    difficulty: Difficulty | None = None
    raw_status: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Exercise:
        """Build an Exercise from a raw (camelCase) record.

        Only ``slug`` is required; every other field has a fallback.
        """
        slug = data["slug"]
        if not slug:
            raise ValueError("Exercise record has an empty slug")
        status = data.get("status")
        return cls(
            slug=slug,
            status=ExerciseStatus.parse(status),
            raw_status=status.strip() if isinstance(status, str) else "",
            name=data.get("name", slug),
            description=data.get("description", ""),
            icon=data.get("icon", ""),
            repository_url=data.get("repositoryUrl", ""),
            issue_url=data.get("issueUrl", ""),
            path_slug=data.get("pathSlug"),
            dependencies=tuple(data.get("dependencies") or ()),
            position=Point.from_value(data.get("position")),
            products=tuple(data.get("products") or ()),
            difficulty=Difficulty.parse(data.get("difficulty")),
        )


@dataclass
class SkillTreeNode:
    """An exercise placed in the graph with resolved edges.

    ``position`` is absolute and filled in by the layout resolver.
    """

    exercise: Exercise
    path: Path
    dependencies: list[str] = field(default_factory=list)
    dependents: list[str] = field(default_factory=list)
    position: Point = field(default_factory=Point)

    @property
    def slug(self) -> str:
        return self.exercise.slug


@dataclass(frozen=True)
class ObstacleNode:
    """Circular footprint of a node, used for connector routing."""

    x: float
    y: float
    radius: float
