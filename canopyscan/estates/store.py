"""Mini README: Estate and tree storage for the survey service.

Structure:
    * Estate / TreeRecord - stored estate and tree records.
    * EstateSnapshot - plot plus trees read together for one plan request.
    * EstateStore - protocol the web interface depends on.
    * InMemoryEstateStore - thread-safe dictionary-backed implementation.
    * PlotNotFoundError - raised for unknown estate identifiers.

The in-memory store keeps the service self-contained for demos and tests.
A persistent backend only has to satisfy ``EstateStore``; the planner never
talks to storage directly.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass
from typing import Dict, List, Protocol, Tuple

from ..logging_utils import get_logger
from ..survey_planning import (
    DuplicatePositionError,
    Plot,
    TreePlacement,
    validate_plot,
    validate_tree,
)
from ..survey_planning.grid import MAX_PLOT_DIMENSION, MAX_TREE_HEIGHT

LOGGER = get_logger(__name__)


class PlotNotFoundError(KeyError):
    """Raised when an estate identifier is not registered."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "estate not found"


@dataclass(slots=True)
class Estate:
    """Registered plantation estate."""

    estate_id: str
    width: int
    length: int
    name: str = ""

    @property
    def plot(self) -> Plot:
        return Plot(width=self.width, length=self.length)


@dataclass(slots=True)
class TreeRecord:
    """Tree stored against an estate."""

    tree_id: str
    estate_id: str
    x: int
    y: int
    height: int

    def placement(self) -> TreePlacement:
        return TreePlacement(x=self.x, y=self.y, height=self.height)


@dataclass(slots=True, frozen=True)
class EstateSnapshot:
    """Consistent view of an estate's plot and trees."""

    plot: Plot
    trees: Tuple[TreePlacement, ...]


class EstateStore(Protocol):
    """Storage operations consumed by the web interface and survey planner."""

    def create_estate(self, width: int, length: int, *, name: str = "") -> Estate:
        ...

    def add_tree(self, estate_id: str, x: int, y: int, height: int) -> TreeRecord:
        ...

    def summarise_heights(self, estate_id: str) -> Dict[str, int]:
        ...

    def get_plot_dimensions(self, estate_id: str) -> Tuple[int, int]:
        ...

    def list_trees(self, estate_id: str) -> List[TreePlacement]:
        ...

    def snapshot(self, estate_id: str) -> EstateSnapshot:
        ...


def _median(sorted_heights: List[int]) -> int:
    """Integer median; even-sized samples floor the mean of the middle pair."""

    count = len(sorted_heights)
    middle = count // 2
    if count % 2 == 1:
        return sorted_heights[middle]
    return (sorted_heights[middle - 1] + sorted_heights[middle]) // 2


class InMemoryEstateStore:
    """Keep estates and trees in process memory."""

    def __init__(
        self,
        *,
        max_dimension: int = MAX_PLOT_DIMENSION,
        max_height: int = MAX_TREE_HEIGHT,
    ) -> None:
        self.max_dimension = max_dimension
        self.max_height = max_height
        self._estates: Dict[str, Estate] = {}
        self._trees: Dict[str, Dict[Tuple[int, int], TreeRecord]] = {}
        self._lock = threading.Lock()
        LOGGER.debug(
            "Initialised InMemoryEstateStore max_dimension=%s max_height=%s",
            max_dimension,
            max_height,
        )

    def create_estate(self, width: int, length: int, *, name: str = "") -> Estate:
        """Register a new estate after validating its size."""

        validate_plot(width, length, max_dimension=self.max_dimension)
        estate = Estate(estate_id=str(uuid.uuid4()), width=width, length=length, name=name)
        with self._lock:
            self._estates[estate.estate_id] = estate
            self._trees[estate.estate_id] = {}
        LOGGER.info("Created estate %s (%s x %s)", estate.estate_id, width, length)
        return estate

    def _require_estate(self, estate_id: str) -> Estate:
        estate = self._estates.get(estate_id)
        if estate is None:
            raise PlotNotFoundError(f"Estate {estate_id} not found")
        return estate

    def get_estate(self, estate_id: str) -> Estate:
        """Retrieve an estate, raising ``PlotNotFoundError`` when unknown."""

        with self._lock:
            return self._require_estate(estate_id)

    def add_tree(self, estate_id: str, x: int, y: int, height: int) -> TreeRecord:
        """Plant a tree at ``(x, y)``; positions are unique per estate."""

        with self._lock:
            estate = self._require_estate(estate_id)
            placement = validate_tree(
                estate.plot,
                TreePlacement(x=x, y=y, height=height),
                max_height=self.max_height,
            )
            trees = self._trees[estate_id]
            if placement.position in trees:
                raise DuplicatePositionError(
                    f"Estate {estate_id} already has a tree at ({x}, {y})"
                )
            record = TreeRecord(
                tree_id=str(uuid.uuid4()), estate_id=estate_id, x=x, y=y, height=height
            )
            trees[placement.position] = record
        LOGGER.debug("Planted tree %s at (%s, %s) height=%s", record.tree_id, x, y, height)
        return record

    def get_plot_dimensions(self, estate_id: str) -> Tuple[int, int]:
        """Return ``(width, length)`` for the estate."""

        estate = self.get_estate(estate_id)
        return (estate.width, estate.length)

    def list_trees(self, estate_id: str) -> List[TreePlacement]:
        """Return tree placements ordered by row, then column."""

        with self._lock:
            self._require_estate(estate_id)
            records = list(self._trees[estate_id].values())
        return [record.placement() for record in sorted(records, key=lambda r: (r.y, r.x))]

    def snapshot(self, estate_id: str) -> EstateSnapshot:
        """Read plot and trees under one lock so the plan sees a single state."""

        with self._lock:
            estate = self._require_estate(estate_id)
            trees = tuple(record.placement() for record in self._trees[estate_id].values())
        return EstateSnapshot(plot=estate.plot, trees=trees)

    def summarise_heights(self, estate_id: str) -> Dict[str, int]:
        """Aggregate canopy statistics for an estate."""

        with self._lock:
            self._require_estate(estate_id)
            heights = sorted(record.height for record in self._trees[estate_id].values())
        if not heights:
            return {"tree_count": 0, "max_height": 0, "min_height": 0, "median_height": 0}
        return {
            "tree_count": len(heights),
            "max_height": heights[-1],
            "min_height": heights[0],
            "median_height": _median(heights),
        }
