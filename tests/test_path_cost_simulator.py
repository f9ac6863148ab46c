"""Mini README: Tests for the serpentine path cost simulator.

Structure:
    * closed-form pins for tree-free plots;
    * hand-computed sweeps exercising every canopy branch;
    * budget truncation, including where each charge is attributed;
    * properties: idempotence, unlimited budgets, monotone canopy cost;
    * run-charged sweeps agree with a plain cell-by-cell sweep.
"""

from __future__ import annotations

import random

import pytest

from canopyscan.survey_planning import (
    FullSurvey,
    InvalidBudgetError,
    InvalidPlotError,
    PathCostSimulator,
    Plot,
    TreePlacement,
    TruncatedSurvey,
    bare_plot_distance,
    build_grid_index,
    plan_survey,
)


@pytest.mark.parametrize(
    "width,length,expected",
    [(1, 1, 1), (3, 1, 21), (1, 2, 12), (1, 3, 22), (2, 2, 33), (3, 4, 114)],
)
def test_tree_free_plots_match_closed_form(width: int, length: int, expected: int) -> None:
    assert bare_plot_distance(width, length) == expected
    assert plan_survey(width, length, []) == FullSurvey(total_distance=expected)


def test_single_cell_is_takeoff_only() -> None:
    assert plan_survey(1, 1, []) == FullSurvey(total_distance=1)


def test_single_tree_plot_without_budget() -> None:
    result = plan_survey(2, 2, [TreePlacement(x=2, y=1, height=5)])
    assert result == FullSurvey(total_distance=38)


def test_single_tree_plot_truncated_on_takeoff() -> None:
    result = plan_survey(2, 2, [TreePlacement(x=2, y=1, height=5)], budget=1)
    assert result == TruncatedSurvey(budget=1, stopped_at=(1, 1))
    assert result.as_dict() == {"distance": 1, "rest": {"x": 1, "y": 1}}


def test_fully_planted_row_adjusts_between_canopies() -> None:
    """Takeoff climbs onto (2, 1); the row-end step adjusts by |4 - 3| then descends."""

    trees = [(1, 1, 2), (2, 1, 4), (3, 1, 3)]
    assert plan_survey(1, 3, trees) == FullSurvey(total_distance=31)


def test_first_climb_costs_one_extra_unit() -> None:
    """Bare to tree climbs once (+1 +7) and tree to bare descends (+7)."""

    assert plan_survey(1, 5, [(3, 1, 7)]) == FullSurvey(total_distance=57)


def test_later_climbs_skip_the_ascent_unit() -> None:
    trees = [(3, 1, 7), (5, 1, 2)]
    assert plan_survey(1, 6, trees) == FullSurvey(total_distance=71)


def test_even_rows_sweep_right_to_left() -> None:
    """A tree at (1, 2) is the last cell of row 2 and is met at the row end."""

    assert plan_survey(2, 3, [(1, 2, 4)]) == FullSurvey(total_distance=58)


@pytest.mark.parametrize(
    "width,length,budget,stopped_at",
    [
        (1, 5, 15, (3, 1)),
        (2, 3, 25, (3, 2)),
        (1, 3, 20, (2, 1)),
        (1, 3, 21, (3, 1)),
        (1, 4, 31, (4, 1)),
        (2, 4, 72, (1, 2)),
        (3, 1, 20, (1, 3)),
    ],
)
def test_budget_truncation_reports_stopping_cell(
    width: int, length: int, budget: int, stopped_at
) -> None:
    result = plan_survey(width, length, [], budget=budget)
    assert result == TruncatedSurvey(budget=budget, stopped_at=stopped_at)


def test_budget_equal_to_distance_is_not_exceeded() -> None:
    assert plan_survey(2, 4, [], budget=73) == FullSurvey(total_distance=73)


@pytest.mark.parametrize("budget", [None, 0, -5, "0", "-1", ""])
def test_non_positive_budget_sweeps_everything(budget) -> None:
    trees = [(3, 1, 7), (5, 1, 2)]
    assert plan_survey(1, 6, trees, budget=budget) == FullSurvey(total_distance=71)


def test_budget_below_baseline_always_truncates() -> None:
    trees = [(2, 1, 9), (3, 2, 4), (4, 2, 6), (1, 3, 12)]
    baseline = bare_plot_distance(3, 4)
    for budget in range(1, baseline):
        result = plan_survey(3, 4, trees, budget=budget)
        assert isinstance(result, TruncatedSurvey)
        assert result.budget == budget
        x, y = result.stopped_at
        assert 1 <= x <= 4
        assert 1 <= y <= 3


def test_string_budget_from_query_is_accepted() -> None:
    assert plan_survey(2, 2, [(2, 1, 5)], budget="1") == TruncatedSurvey(budget=1, stopped_at=(1, 1))


def test_malformed_budget_is_rejected_before_validation() -> None:
    with pytest.raises(InvalidBudgetError):
        plan_survey(0, 0, [], budget="ten")


def test_invalid_plot_is_rejected() -> None:
    with pytest.raises(InvalidPlotError):
        plan_survey(0, 3, [])


def test_planning_is_idempotent() -> None:
    trees = [(2, 1, 9), (3, 2, 4), (4, 2, 6), (1, 3, 12)]
    assert plan_survey(3, 4, trees, budget=90) == plan_survey(3, 4, trees, budget=90)
    assert plan_survey(3, 4, trees) == plan_survey(3, 4, list(reversed(trees)))


def test_taller_isolated_tree_never_shortens_the_flight() -> None:
    """An isolated tree costs one climb unit plus its height up and down."""

    baseline = bare_plot_distance(3, 4)
    for height in range(1, 31):
        result = plan_survey(3, 4, [(2, 2, height)])
        assert result == FullSurvey(total_distance=baseline + 1 + 2 * height)


def test_trees_never_reduce_distance_below_baseline() -> None:
    baseline = bare_plot_distance(3, 4)
    for height in range(1, 31):
        result = plan_survey(3, 4, [(2, 2, height), (3, 2, 10)])
        assert result.total_distance >= baseline


def test_largest_tree_free_plot_uses_closed_form() -> None:
    assert plan_survey(50_000, 50_000, []) == FullSurvey(total_distance=25_000_049_991)


def test_fully_planted_plot_adjusts_across_both_directions() -> None:
    """Every step is a canopy adjustment; even rows run right to left."""

    heights = {
        (1, 1): 2, (2, 1): 4, (3, 1): 3,
        (1, 2): 5, (2, 2): 1, (3, 2): 6,
        (1, 3): 7, (2, 3): 7, (3, 3): 2,
    }
    trees = [(x, y, height) for (x, y), height in heights.items()]

    assert plan_survey(3, 3, trees) == FullSurvey(total_distance=115)
    assert plan_survey(3, 3, trees, budget=60) == TruncatedSurvey(budget=60, stopped_at=(2, 2))


def test_budget_runs_out_between_trees() -> None:
    assert plan_survey(1, 10, [(8, 1, 3)], budget=45) == TruncatedSurvey(
        budget=45, stopped_at=(6, 1)
    )


def test_long_rows_with_trees_are_charged_by_run() -> None:
    """One tree per row on 50000-column rows finishes without visiting each cell."""

    trees = [(1, y, 5) for y in range(1, 2001)]
    result = plan_survey(2000, 50_000, trees)
    assert result == FullSurvey(total_distance=1_000_011_987)


class _CellByCellSimulator(PathCostSimulator):
    """Reference sweep applying the full step rules at every cell."""

    def _sweep_row(self, y, state) -> None:
        columns = self._row_columns(y)
        for x in columns:
            destination = x + columns.step
            row_end = destination == columns[-1]
            self._step(
                (x, y),
                (destination, y),
                state,
                takeoff=(x, y) == (1, 1),
                row_end=row_end,
            )
            if row_end:
                break


def test_run_charging_matches_cell_by_cell_sweep() -> None:
    rng = random.Random(20261017)
    for _ in range(400):
        width, length = rng.randint(1, 5), rng.randint(1, 9)
        density = rng.random()
        trees = [
            (x, y, rng.randint(1, 30))
            for y in range(1, width + 1)
            for x in range(1, length + 1)
            if rng.random() < density
        ]
        grid = build_grid_index(Plot(width=width, length=length), trees)
        reference = _CellByCellSimulator(grid).run()
        assert PathCostSimulator(grid).run() == reference

        for budget in rng.sample(range(1, reference.total_distance + 5), k=5):
            expected = _CellByCellSimulator(grid).run(budget=budget)
            assert PathCostSimulator(grid).run(budget=budget) == expected
