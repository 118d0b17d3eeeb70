"""
Position binning: groups raw samples by distinct position.

Step 1: find the distinct positions and half the minimum gap between them.
Step 2: build one bin per distinct position.
Step 3: drop samples with a non-numeric value or position, or whose bin is
        out of range, and collect the rest per bin.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

import numpy as np

from boxcalc.box_stats.algorithms.search import distinct_vals, find_bin, make_bins
from boxcalc.box_stats.box_record import Sample
from boxcalc.box_stats.trace_state import item_at


@dataclass
class PositionBins:
    """Distinct positions, the bin half width and the samples of each bin."""
    distinct: list[float]
    half_width: float
    samples: list[list[Sample]]


def bin_samples(
    pos: Sequence[float],
    vals: Sequence[float],
    *,
    length: Optional[int] = None,
    text: Any = None,
    hovertext: Any = None,
) -> PositionBins:
    """
    Assign each sample to the bin of its position.

    Args:
        pos: Position coordinates (NaN for invalid), one per sample.
        vals: Value coordinates (NaN for invalid), one per sample.
        length: Number of samples to consider. Defaults to len(vals).
        text, hovertext: Optional per-point arrays copied onto each Sample.

    Returns:
        PositionBins with one (possibly empty) sample list per distinct position.
    """
    pos_arr = np.asarray(pos, dtype=float)
    val_arr = np.asarray(vals, dtype=float)
    n_available = min(len(pos_arr), len(val_arr))
    length = n_available if length is None else min(length, n_available)

    distinct, min_diff = distinct_vals(pos_arr[:length])
    half_width = min_diff / 2
    samples: list[list[Sample]] = [[] for _ in distinct]
    if not distinct:
        return PositionBins(distinct=distinct, half_width=half_width, samples=samples)

    edges = make_bins(distinct, half_width)
    n_bins = len(distinct)
    for i in range(length):
        v = val_arr[i]
        p = pos_arr[i]
        if not (np.isfinite(v) and np.isfinite(p)):
            continue
        n = find_bin(p, edges)
        if 0 <= n < n_bins:
            samples[n].append(Sample(
                v=float(v),
                i=i,
                text=item_at(text, i),
                hovertext=item_at(hovertext, i),
            ))
    return PositionBins(distinct=distinct, half_width=half_width, samples=samples)
