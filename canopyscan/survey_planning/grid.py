"""Mini README: Plot geometry and the sparse canopy lookup used by the simulator.

Structure:
    * Plot - estate dimensions (``width`` rows by ``length`` columns).
    * TreePlacement - a single tree at a 1-based ``(x, y)`` cell.
    * GridIndex - immutable ``(x, y) -> height`` lookup with per-row tree columns.
    * validate_plot / build_grid_index - validation and index construction.

Coordinates are 1-based: ``x`` is the column in ``1..length`` and ``y`` the
row in ``1..width``. Cells outside the plot simply have no tree, which lets
the simulator look one column past the row boundary without special cases.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..logging_utils import get_logger
from .errors import DuplicatePositionError, InvalidPlotError, InvalidTreeError

LOGGER = get_logger(__name__)

MAX_PLOT_DIMENSION = 50_000
MAX_TREE_HEIGHT = 30

Cell = Tuple[int, int]


@dataclass(slots=True, frozen=True)
class Plot:
    """Rectangular estate measured in grid cells."""

    width: int
    length: int

    @property
    def cell_count(self) -> int:
        return self.width * self.length


@dataclass(slots=True, frozen=True)
class TreePlacement:
    """Tree planted at a grid cell with its canopy height."""

    x: int
    y: int
    height: int

    @classmethod
    def coerce(cls, entry: Union["TreePlacement", Sequence[int]]) -> "TreePlacement":
        """Accept either a placement or an ``(x, y, height)`` triple."""

        if isinstance(entry, TreePlacement):
            return entry
        try:
            x, y, height = entry
        except (TypeError, ValueError) as error:
            raise InvalidTreeError(f"Tree record must be (x, y, height), got {entry!r}") from error
        return cls(x=x, y=y, height=height)

    @property
    def position(self) -> Cell:
        return (self.x, self.y)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_plot(width: int, length: int, *, max_dimension: int = MAX_PLOT_DIMENSION) -> Plot:
    """Return a ``Plot`` or raise ``InvalidPlotError`` for out-of-range sizes."""

    if not (_is_int(width) and _is_int(length)):
        raise InvalidPlotError(f"Estate size must be whole cells, got {width!r} x {length!r}")
    if not (1 <= width <= max_dimension and 1 <= length <= max_dimension):
        raise InvalidPlotError(
            f"Estate size {width} x {length} outside 1..{max_dimension}"
        )
    return Plot(width=width, length=length)


def validate_tree(
    plot: Plot, tree: TreePlacement, *, max_height: int = MAX_TREE_HEIGHT
) -> TreePlacement:
    """Check a tree sits inside the plot with a supported canopy height."""

    if not (_is_int(tree.x) and _is_int(tree.y) and _is_int(tree.height)):
        raise InvalidTreeError(f"Tree fields must be integers, got {tree!r}")
    if not (1 <= tree.x <= plot.length and 1 <= tree.y <= plot.width):
        raise InvalidTreeError(
            f"Tree at ({tree.x}, {tree.y}) is outside the {plot.width} x {plot.length} estate"
        )
    if not 1 <= tree.height <= max_height:
        raise InvalidTreeError(f"Tree height {tree.height} outside 1..{max_height}")
    return tree


class GridIndex:
    """Read-only canopy lookup over a bounded plot."""

    __slots__ = ("plot", "_heights", "_row_columns")

    def __init__(self, plot: Plot, heights: Mapping[Cell, int]) -> None:
        self.plot = plot
        self._heights = MappingProxyType(dict(heights))
        row_columns: Dict[int, List[int]] = {}
        for x, y in self._heights:
            row_columns.setdefault(y, []).append(x)
        self._row_columns: Mapping[int, Tuple[int, ...]] = MappingProxyType(
            {y: tuple(sorted(columns)) for y, columns in row_columns.items()}
        )

    def lookup(self, x: int, y: int) -> Optional[int]:
        """Return the tree height at ``(x, y)`` or ``None`` for a bare cell."""

        return self._heights.get((x, y))

    def row_has_trees(self, y: int) -> bool:
        return y in self._row_columns

    def tree_columns(self, y: int) -> Tuple[int, ...]:
        """Columns holding a tree in row ``y``, ascending."""

        return self._row_columns.get(y, ())

    def __len__(self) -> int:
        return len(self._heights)


def build_grid_index(
    plot: Plot,
    trees: Iterable[Union[TreePlacement, Sequence[int]]],
    *,
    max_dimension: int = MAX_PLOT_DIMENSION,
    max_height: int = MAX_TREE_HEIGHT,
) -> GridIndex:
    """Validate the plot and tree list, then index trees by position."""

    plot = validate_plot(plot.width, plot.length, max_dimension=max_dimension)
    heights: Dict[Cell, int] = {}
    for entry in trees:
        tree = validate_tree(plot, TreePlacement.coerce(entry), max_height=max_height)
        if tree.position in heights:
            raise DuplicatePositionError(f"More than one tree at ({tree.x}, {tree.y})")
        heights[tree.position] = tree.height
    LOGGER.debug(
        "Indexed %s trees over %s x %s estate", len(heights), plot.width, plot.length
    )
    return GridIndex(plot, heights)
