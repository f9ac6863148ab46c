"""Mini README: Error types raised while validating and planning surveys.

All errors derive from ``ValueError`` so interfaces can translate any of them
into a client error without importing each class individually.
"""

from __future__ import annotations


class SurveyPlanningError(ValueError):
    """Base class for invalid survey planning input."""


class InvalidPlotError(SurveyPlanningError):
    """Raised when an estate's width or length falls outside the accepted range."""


class InvalidTreeError(SurveyPlanningError):
    """Raised when a tree lies outside its plot or has an unsupported height."""


class DuplicatePositionError(SurveyPlanningError):
    """Raised when two trees claim the same grid cell."""


class InvalidBudgetError(SurveyPlanningError):
    """Raised when a flight-distance budget is not an integer."""
