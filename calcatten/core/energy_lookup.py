"""Nearest-energy lookup in a tabulated, ascending energy grid.

No interpolation: callers read the coefficient at the returned index.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from calcatten.core.errors import MissingField

logger = logging.getLogger(__name__)


def neighbour_indices(
    sorted_energies: Sequence[float] | np.ndarray,
    query: float,
) -> tuple[int, int]:
    """Lower and upper neighbours of *query*, clamped into the table.

    ``ub`` is the first entry strictly greater than *query* and
    ``lb = ub - 1``.  Below the first entry both resolve to 0; at or above
    the last entry both resolve to ``n - 1``.
    """
    energies = np.asarray(sorted_energies, dtype=float)
    n = len(energies)
    if n == 0:
        raise MissingField("Energy table is empty")
    ub = int(np.searchsorted(energies, query, side="right"))
    lb = ub - 1
    return min(max(lb, 0), n - 1), min(ub, n - 1)


def closest_index(
    sorted_energies: Sequence[float] | np.ndarray,
    query: float,
) -> int:
    """Index of the tabulated energy closest to *query*.

    Ties go to the upper neighbour.

    Args:
        sorted_energies: Non-empty tabulated energies, ascending.
        query: Energy to look up, in the table's unit.

    Returns:
        Index into *sorted_energies*.

    Raises:
        MissingField: If *sorted_energies* is empty.
    """
    energies = np.asarray(sorted_energies, dtype=float)
    lb, ub = neighbour_indices(energies, query)
    logger.info(
        "  Closest energies in data for %g: %g %g",
        query, energies[lb], energies[ub],
    )
    if abs(energies[ub] - query) > abs(energies[lb] - query):
        return lb
    return ub
