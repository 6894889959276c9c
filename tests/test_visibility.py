"""Tests for visibility.py: search matching and filter-based dimming."""

from __future__ import annotations

import pytest

from skilltree.layout import create_skill_tree
from skilltree.models import Difficulty, Exercise, ExerciseStatus, Path
from skilltree.visibility import (
    FilterState,
    VisibilityConfig,
    apply_visibility,
    calculate_visibility,
    matches_search_term,
)

# ─── Helpers ──────────────────────────────────────────────────────────────────

PATH = Path(slug="automation", name="Automation", description="CI/CD workflows")


def make_exercise(**kwargs) -> Exercise:
    defaults = dict(
        slug="hello-actions",
        name="Hello Actions",
        description="Write your first workflow",
        status=ExerciseStatus.ACTIVE,
        path_slug="automation",
        dependencies=("introduction",),
        products=("Actions",),
        difficulty=Difficulty.BEGINNER,
    )
    defaults.update(kwargs)
    return Exercise(**defaults)


class TestMatchesSearchTerm:
    @pytest.mark.parametrize(
        "term",
        ["hello", "FIRST WORKFLOW", "active", "beginner", "hello-actions", "automation", "ci/cd", "actions", "intro"],
    )
    def test_matching_fields(self, term: str) -> None:
        assert matches_search_term(make_exercise(), PATH, term)

    def test_no_match(self) -> None:
        assert not matches_search_term(make_exercise(), PATH, "kubernetes")

    def test_blank_term_matches(self) -> None:
        assert matches_search_term(make_exercise(), PATH, "   ")

    def test_missing_difficulty(self) -> None:
        assert not matches_search_term(make_exercise(difficulty=None), PATH, "beginner")

    def test_unrecognised_status_text_is_searchable(self) -> None:
        exercise = make_exercise(status=ExerciseStatus.UNKNOWN, raw_status="retired")
        assert matches_search_term(exercise, PATH, "RETIRED")


class TestSearchMode:
    def test_hit_is_fully_visible(self) -> None:
        assert calculate_visibility(make_exercise(), PATH, FilterState(), "hello") == 1.0

    def test_miss_is_dimmed_not_hidden(self) -> None:
        assert calculate_visibility(make_exercise(), PATH, FilterState(), "kubernetes") == pytest.approx(0.15)

    def test_search_overrides_filters(self) -> None:
        filters = FilterState(paths=["security"], statuses=["scheduled"])
        assert calculate_visibility(make_exercise(), PATH, filters, "hello") == 1.0

    def test_whitespace_search_uses_filters(self) -> None:
        filters = FilterState(statuses=["scheduled"])
        assert calculate_visibility(make_exercise(), PATH, filters, "  ") == pytest.approx(0.25)


class TestFilterMode:
    def test_no_filters(self) -> None:
        assert calculate_visibility(make_exercise(), PATH, FilterState()) == 1.0

    def test_status_match_is_case_insensitive(self) -> None:
        assert calculate_visibility(make_exercise(), PATH, FilterState(statuses=["Active"])) == 1.0

    def test_status_alias_in_filter(self) -> None:
        exercise = Exercise.from_dict({"slug": "wip", "status": "development"})
        assert calculate_visibility(exercise, PATH, FilterState(statuses=["development"])) == 1.0
        assert calculate_visibility(exercise, PATH, FilterState(statuses=["in-development"])) == 1.0

    def test_unrecognised_status_filter(self) -> None:
        retired = Exercise.from_dict({"slug": "old", "status": "retired"})
        draft = Exercise.from_dict({"slug": "new", "status": "draft"})
        filters = FilterState(statuses=["Retired"])
        assert calculate_visibility(retired, PATH, filters) == 1.0
        assert calculate_visibility(draft, PATH, filters) == pytest.approx(0.25)
        assert calculate_visibility(draft, PATH, FilterState(statuses=["unknown"])) == 1.0

    def test_status_mismatch(self) -> None:
        filters = FilterState(statuses=["scheduled"], paths=["automation"])
        assert calculate_visibility(make_exercise(), PATH, filters) == pytest.approx(0.25)

    def test_all_categories_match(self) -> None:
        filters = FilterState(paths=["automation"], products=["Actions"], difficulties=["Beginner"])
        assert calculate_visibility(make_exercise(), PATH, filters) == pytest.approx(1.0)

    def test_no_category_matches(self) -> None:
        filters = FilterState(paths=["security"], products=["Codespaces"])
        assert calculate_visibility(make_exercise(), PATH, filters) == pytest.approx(0.25)

    def test_partial_match_interpolates(self) -> None:
        filters = FilterState(paths=["automation"], products=["Codespaces"])
        assert calculate_visibility(make_exercise(), PATH, filters) == pytest.approx(0.625)

    def test_one_of_three(self) -> None:
        filters = FilterState(paths=["security"], products=["Actions"], difficulties=["Advanced"])
        assert calculate_visibility(make_exercise(), PATH, filters) == pytest.approx(0.5)

    def test_missing_fields_do_not_match(self) -> None:
        exercise = make_exercise(path_slug=None, products=(), difficulty=None)
        filters = FilterState(paths=["automation"], products=["Actions"], difficulties=["Beginner"])
        assert calculate_visibility(exercise, PATH, filters) == pytest.approx(0.25)

    def test_custom_floor(self) -> None:
        config = VisibilityConfig(filter_floor=0.5)
        filters = FilterState(paths=["security"])
        assert calculate_visibility(make_exercise(), PATH, filters, config=config) == pytest.approx(0.5)


class TestApplyVisibility:
    def test_keyed_by_slug(self) -> None:
        nodes = create_skill_tree(
            [make_exercise(), make_exercise(slug="scanning", path_slug="security", name="Code Scanning")],
            [PATH, Path(slug="security", name="Security")],
        )
        visibility = apply_visibility(nodes, FilterState(paths=["security"]))
        assert visibility == {"hello-actions": pytest.approx(0.25), "scanning": 1.0}

    def test_nodes_untouched(self) -> None:
        nodes = create_skill_tree([make_exercise()], [PATH])
        before = [n.position for n in nodes]
        apply_visibility(nodes, FilterState(paths=["security"]), "nothing")
        assert [n.position for n in nodes] == before
