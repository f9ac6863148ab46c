"""Mini README: Estate storage package for Canopyscan.

Groups the storage protocol consumed by the web interface together with the
default in-memory implementation. Swap in a persistent backend by providing
an object that satisfies ``EstateStore``.
"""

from .store import (
    Estate,
    EstateSnapshot,
    EstateStore,
    InMemoryEstateStore,
    PlotNotFoundError,
    TreeRecord,
)

__all__ = [
    "Estate",
    "EstateSnapshot",
    "EstateStore",
    "InMemoryEstateStore",
    "PlotNotFoundError",
    "TreeRecord",
]
