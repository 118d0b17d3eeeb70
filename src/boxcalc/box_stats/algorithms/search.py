"""
Search and interpolation helpers shared by the binner and the aggregator.

All functions take plain sequences or numpy arrays and never mutate them.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from boxcalc.box_stats.conventions import (
    DEFAULT_MIN_DIFF,
    DISTINCT_TOLERANCE_DIVISOR,
    ROUNDING_ERROR,
)


def distinct_vals(values: Sequence[float]) -> tuple[list[float], float]:
    """
    Sorted distinct finite values and the minimum gap between them.

    A value closer than span / n / 10000 to its sorted neighbour is treated
    as a duplicate of it, so rounding noise does not split a position, and
    only gaps above that tolerance count towards the minimum gap.
    With a single distinct value the gap is the span (DEFAULT_MIN_DIFF when
    the span is 0).

    Returns:
        (distinct, min_diff). ``distinct`` is empty when no value is finite.
    """
    arr = np.asarray(values, dtype=float)
    arr = np.sort(arr[np.isfinite(arr)])
    if arr.size == 0:
        return [], DEFAULT_MIN_DIFF

    last = arr.size - 1
    min_diff = float(arr[last] - arr[0]) or DEFAULT_MIN_DIFF
    err_diff = min_diff / (last or 1) / DISTINCT_TOLERANCE_DIVISOR

    distinct = [float(arr[0])]
    for prev, v in zip(arr[:-1], arr[1:]):
        diff = v - prev
        if diff > err_diff:
            min_diff = min(min_diff, float(diff))
            distinct.append(float(v))
    return distinct, min_diff


def make_bins(distinct: Sequence[float], half_width: float) -> np.ndarray:
    """Bin edges: each distinct value minus half_width, then the last plus half_width."""
    d = np.asarray(distinct, dtype=float)
    return np.append(d - half_width, d[-1] + half_width)


def find_bin(val: float, bins: Sequence[float], linelow: bool = False) -> int:
    """
    Index of the last edge <= val (last edge < val when ``linelow``).

    ``bins`` must be sorted ascending. ``val`` is nudged by the mean bin size
    times ROUNDING_ERROR before searching. Returns -1 when val lies before
    the first edge.
    """
    edges = np.asarray(bins, dtype=float)
    n = edges.size
    bin_size = (edges[-1] - edges[0]) / (n - 1) if n > 1 else 1.0
    val = val + bin_size * ROUNDING_ERROR * (-1 if linelow else 1)
    side = "left" if linelow else "right"
    return int(np.searchsorted(edges, val, side=side)) - 1


def interp(arr: Sequence[float], fraction: float) -> float:
    """
    Linear-interpolated quantile of a sorted array.

    The rank is ``fraction * len(arr) - 0.5``; ranks outside the array clamp
    to the first/last element, otherwise the two bracketing values are
    blended by the fractional part of the rank.

    Raises:
        ValueError: If fraction is not a finite number.
    """
    if not math.isfinite(fraction):
        raise ValueError("fraction should be a finite number")
    n = fraction * len(arr) - 0.5
    if n < 0:
        return float(arr[0])
    if n > len(arr) - 1:
        return float(arr[-1])
    frac = n % 1
    return float(frac * arr[math.ceil(n)] + (1 - frac) * arr[math.floor(n)])
