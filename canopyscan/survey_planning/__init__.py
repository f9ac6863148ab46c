"""Mini README: Survey flight planning for plantation estates.

Exports the grid model, budget helpers, and the serpentine path cost
simulator. Interfaces should call ``plan_survey`` and serialise the returned
``FullSurvey`` or ``TruncatedSurvey`` with ``as_dict``.
"""

from .budget import budget_exceeded, parse_budget
from .errors import (
    DuplicatePositionError,
    InvalidBudgetError,
    InvalidPlotError,
    InvalidTreeError,
    SurveyPlanningError,
)
from .grid import GridIndex, Plot, TreePlacement, build_grid_index, validate_plot, validate_tree
from .simulator import (
    FullSurvey,
    PathCostSimulator,
    SurveyResult,
    TruncatedSurvey,
    bare_plot_distance,
    plan_survey,
)

__all__ = [
    "DuplicatePositionError",
    "FullSurvey",
    "GridIndex",
    "InvalidBudgetError",
    "InvalidPlotError",
    "InvalidTreeError",
    "PathCostSimulator",
    "Plot",
    "SurveyPlanningError",
    "SurveyResult",
    "TreePlacement",
    "TruncatedSurvey",
    "bare_plot_distance",
    "budget_exceeded",
    "build_grid_index",
    "parse_budget",
    "plan_survey",
    "validate_plot",
    "validate_tree",
]
