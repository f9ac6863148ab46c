"""Mini README: Serpentine survey path cost simulation.

Structure:
    * FullSurvey / TruncatedSurvey - the two possible planning results.
    * TraversalState - running distance and the one-shot climb flag.
    * PathCostSimulator - sweeps the plot row by row and applies cost rules.
    * bare_row_distance / bare_plot_distance - closed forms for tree-free rows.
    * plan_survey - entry point used by interfaces and the CLI.

The drone sweeps odd rows left to right and even rows right to left. Every
visited cell issues one step towards the next column in the row's direction:

    * takeoff (first step): 1 ascent unit, plus the canopy ahead if any;
    * horizontal step: 10 units, plus the canopy adjustment between the
      current and next cell;
    * row-end step (the next column is the row's last): a further 10 units to
      the boundary, the descent from the current canopy and 1 ascent unit for
      the row change. The last cell is absorbed and the sweep moves on.

A positive budget is checked after every individual charge. Once it is
overrun the simulation stops and reports the cell the charge belongs to.

Only steps touching a tree, the takeoff and the row end need the full rules.
The bare-to-bare steps between them cost exactly one horizontal unit each and
are charged as a run, so a row costs time proportional to its trees rather
than its length.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Union

from ..logging_utils import get_logger
from .budget import NO_BUDGET, budget_exceeded, parse_budget
from .grid import (
    MAX_PLOT_DIMENSION,
    MAX_TREE_HEIGHT,
    Cell,
    GridIndex,
    Plot,
    TreePlacement,
    build_grid_index,
)

LOGGER = get_logger(__name__)

HORIZONTAL_UNIT = 10
ASCENT_UNIT = 1


@dataclass(slots=True, frozen=True)
class FullSurvey:
    """Distance flown when the whole plot was swept."""

    total_distance: int

    def as_dict(self) -> Dict[str, object]:
        return {"distance": self.total_distance}


@dataclass(slots=True, frozen=True)
class TruncatedSurvey:
    """Budget-limited result naming the cell where the budget ran out."""

    budget: int
    stopped_at: Cell

    def as_dict(self) -> Dict[str, object]:
        x, y = self.stopped_at
        return {"distance": self.budget, "rest": {"x": x, "y": y}}


SurveyResult = Union[FullSurvey, TruncatedSurvey]


class _BudgetExhausted(Exception):
    """Internal signal unwinding the sweep once the budget is overrun."""

    def __init__(self, cell: Cell) -> None:
        super().__init__(cell)
        self.cell = cell


@dataclass(slots=True)
class TraversalState:
    """Mutable bookkeeping for a single sweep."""

    budget: int = NO_BUDGET
    total_distance: int = 0
    has_climbed: bool = False

    def charge(self, amount: int, cell: Cell) -> None:
        """Add ``amount`` to the running distance, attributing it to ``cell``."""

        self.total_distance += amount
        if budget_exceeded(self.total_distance, self.budget):
            raise _BudgetExhausted(cell)


def bare_row_distance(y: int, length: int) -> int:
    """Distance of a tree-free row ``y`` in a plot ``length`` columns long."""

    if y == 1:
        # Takeoff replaces the first horizontal unit.
        return ASCENT_UNIT if length == 1 else HORIZONTAL_UNIT * length - 8
    return HORIZONTAL_UNIT if length == 1 else HORIZONTAL_UNIT * length + 1


def bare_plot_distance(width: int, length: int) -> int:
    """Closed-form distance for sweeping a plot with no trees."""

    return bare_row_distance(1, length) + (width - 1) * bare_row_distance(2, length)


class PathCostSimulator:
    """Sweep a plot in boustrophedon order and total the flight distance."""

    def __init__(self, grid: GridIndex) -> None:
        self.grid = grid

    def run(self, budget: int = NO_BUDGET) -> SurveyResult:
        """Simulate the full sweep, stopping early if ``budget`` is overrun."""

        state = TraversalState(budget=budget)
        try:
            for y in range(1, self.grid.plot.width + 1):
                self._sweep_row(y, state)
        except _BudgetExhausted as exhausted:
            LOGGER.debug(
                "Budget %s exhausted at %s after %s units",
                budget,
                exhausted.cell,
                state.total_distance,
            )
            return TruncatedSurvey(budget=budget, stopped_at=exhausted.cell)
        return FullSurvey(total_distance=state.total_distance)

    def _row_columns(self, y: int) -> range:
        length = self.grid.plot.length
        if y % 2 == 1:
            return range(1, length + 1)
        return range(length, 0, -1)

    def _sweep_row(self, y: int, state: TraversalState) -> None:
        if not self.grid.row_has_trees(y):
            # Charges are non-negative, so the row total bounds every partial sum.
            row_distance = bare_row_distance(y, self.grid.plot.length)
            if not budget_exceeded(state.total_distance + row_distance, state.budget):
                state.total_distance += row_distance
                return

        columns = self._row_columns(y)
        last_column = columns[-1]
        # Sweep positions are indexes into ``columns``; the row's final cell is
        # absorbed by the row-end step, so the last step starts one before it.
        final_position = max(len(columns) - 2, 0)
        events = {final_position}
        if y == 1:
            events.add(0)
        for x in self.grid.tree_columns(y):
            position = columns.index(x)
            events.update((position - 1, position))

        position = 0
        for event in sorted(p for p in events if 0 <= p <= final_position):
            self._fly_bare_run(columns, position, event, y, state)
            x = columns[event]
            destination = x + columns.step
            self._step(
                (x, y),
                (destination, y),
                state,
                takeoff=(x, y) == (1, 1),
                row_end=destination == last_column,
            )
            position = event + 1

    def _fly_bare_run(
        self, columns: range, start: int, stop: int, y: int, state: TraversalState
    ) -> None:
        """Charge the bare-to-bare steps at sweep positions ``start..stop-1``."""

        steps = stop - start
        if steps <= 0:
            return
        run_distance = HORIZONTAL_UNIT * steps
        if budget_exceeded(state.total_distance + run_distance, state.budget):
            steps_within_budget = (state.budget - state.total_distance) // HORIZONTAL_UNIT
            state.total_distance += HORIZONTAL_UNIT * (steps_within_budget + 1)
            raise _BudgetExhausted((columns[start + steps_within_budget], y))
        state.total_distance += run_distance

    def _step(
        self,
        current: Cell,
        destination: Cell,
        state: TraversalState,
        *,
        takeoff: bool,
        row_end: bool,
    ) -> None:
        here = self.grid.lookup(*current)
        ahead = self.grid.lookup(*destination)

        if takeoff:
            state.charge(ASCENT_UNIT, current)
            if ahead is not None:
                state.has_climbed = True
                state.charge(ahead, current)
        else:
            state.charge(HORIZONTAL_UNIT, current)
            if here is not None and ahead is not None:
                state.charge(abs(here - ahead), current)
            elif ahead is not None:
                if not state.has_climbed:
                    state.has_climbed = True
                    state.charge(ASCENT_UNIT, current)
                state.charge(ahead, current)
            elif here is not None and not row_end:
                state.charge(here, current)

        if row_end:
            state.charge(HORIZONTAL_UNIT, current)
            if here is not None:
                state.charge(here, destination)
            state.charge(ASCENT_UNIT, destination)


def plan_survey(
    width: int,
    length: int,
    trees: Iterable[Union[TreePlacement, Sequence[int]]],
    budget: Optional[Union[int, str]] = None,
    *,
    max_dimension: int = MAX_PLOT_DIMENSION,
    max_height: int = MAX_TREE_HEIGHT,
) -> SurveyResult:
    """Plan a survey flight over a ``width`` x ``length`` estate.

    ``budget`` may be an integer or an integer string; a missing, zero or
    negative budget sweeps the whole plot. Raises ``InvalidBudgetError`` before
    any simulation when the budget is malformed, and ``InvalidPlotError``,
    ``InvalidTreeError`` or ``DuplicatePositionError`` for bad estate data.
    """

    limit = parse_budget(budget)
    grid = build_grid_index(
        Plot(width=width, length=length),
        trees,
        max_dimension=max_dimension,
        max_height=max_height,
    )
    LOGGER.info(
        "Planning survey over %s x %s estate with %s trees (budget=%s)",
        width,
        length,
        len(grid),
        limit or "none",
    )
    return PathCostSimulator(grid).run(budget=limit)
