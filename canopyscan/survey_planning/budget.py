"""Mini README: Flight-distance budget helpers.

``budget_exceeded`` is the pure predicate the simulator consults after every
charge; ``parse_budget`` normalises caller input (typically the
``max-distance`` query string) into an integer where ``0`` means unlimited.
"""

from __future__ import annotations

from typing import Optional, Union

from .errors import InvalidBudgetError

NO_BUDGET = 0


def budget_exceeded(total: int, budget: int) -> bool:
    """Return True when a positive budget has been overrun."""

    return budget > 0 and total > budget


def parse_budget(value: Optional[Union[int, str]]) -> int:
    """Coerce a caller-supplied budget into an integer."""

    if value is None:
        return NO_BUDGET
    if isinstance(value, bool):
        raise InvalidBudgetError(f"Budget must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return NO_BUDGET
        try:
            return int(text)
        except ValueError as error:
            raise InvalidBudgetError(f"Budget must be an integer, got {value!r}") from error
    raise InvalidBudgetError(f"Budget must be an integer, got {value!r}")
