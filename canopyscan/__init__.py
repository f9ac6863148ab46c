"""Mini README: Core package initialiser for the Canopyscan survey planner.

Canopyscan estimates how far a survey drone flies when sweeping a plantation
estate in a serpentine pattern. The package re-exports the planning entry
point and the logging helper; the web interface and storage live in their own
subpackages so importing the planner never pulls in FastAPI.
"""

from .logging_utils import get_logger
from .survey_planning import plan_survey

__all__ = ["get_logger", "plan_survey"]
