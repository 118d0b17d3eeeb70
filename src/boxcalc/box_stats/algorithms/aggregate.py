"""
Box statistics from raw samples.

For each position bin the samples are sorted by value and reduced to:
  - min / max, mean and population standard deviation
  - median and quartiles (linear, exclusive or inclusive convention)
  - fences: the most extreme samples still within 1.5 IQR of the quartiles
  - suspected-outlier bounds at 3 IQR (informational, not clipped to data)
  - notch bounds: median +/- 1.57 IQR / sqrt(N)
  - pts (all samples) and pts2 (samples drawn as points)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Sequence

import numpy as np

from boxcalc.box_stats.algorithms.search import find_bin, interp
from boxcalc.box_stats.box_record import BoxRecord, Sample
from boxcalc.box_stats.conventions import FENCE_IQR, NOTCH_FACTOR, OUTLIER_IQR
from boxcalc.box_stats.trace_state import PointsMode, QuartileMethod


def quartiles(vals: Sequence[float], method: QuartileMethod) -> tuple[float, float]:
    """
    (q1, q3) of sorted values.

    exclusive/inclusive split the array around the middle element and take
    the median of each half; they only apply to odd N (and exclusive needs
    N > 1). Every other case uses linear interpolation at 0.25 / 0.75.
    """
    n = len(vals)
    if n % 2 and method == QuartileMethod.EXCLUSIVE and n > 1:
        # middle element in neither half
        lower = vals[:n // 2]
        upper = vals[n // 2 + 1:]
        return interp(lower, 0.5), interp(upper, 0.5)
    if n % 2 and method == QuartileMethod.INCLUSIVE:
        # middle element in both halves
        lower = vals[:n // 2 + 1]
        upper = vals[n // 2:]
        return interp(lower, 0.5), interp(upper, 0.5)
    return interp(vals, 0.25), interp(vals, 0.75)


def fences(vals: Sequence[float], q1: float, q3: float) -> tuple[float, float]:
    """Lower/upper fence: last samples inside 1.5 IQR of the quartiles."""
    n = len(vals)
    lower_threshold = (1 + FENCE_IQR) * q1 - FENCE_IQR * q3
    upper_threshold = (1 + FENCE_IQR) * q3 - FENCE_IQR * q1
    lf = min(q1, vals[min(find_bin(lower_threshold, vals, linelow=True) + 1, n - 1)])
    uf = max(q3, vals[max(find_bin(upper_threshold, vals), 0)])
    return float(lf), float(uf)


def point_filter(mode: PointsMode, lf: float, uf: float) -> Callable[[Sample], bool]:
    """Predicate selecting the samples of pts that go into pts2."""
    if mode == PointsMode.ALL:
        return lambda pt: True
    if mode in (PointsMode.NONE, PointsMode.OUTLIERS, PointsMode.SUSPECTED_OUTLIERS):
        return lambda pt: pt.v < lf or pt.v > uf
    raise ValueError(f"Unknown points mode: {mode!r}")


def flag_far_outliers(record: BoxRecord) -> None:
    """Mark pts2 samples beyond the 3 IQR bounds (suspectedoutliers mode)."""
    for pt in record.pts2:
        pt.far_outlier = pt.v < record.lo or pt.v > record.uo


def aggregate_box(
    pos: float,
    samples: list[Sample],
    *,
    pos_letter: str,
    quartilemethod: QuartileMethod = QuartileMethod.LINEAR,
    boxpoints: PointsMode = PointsMode.OUTLIERS,
) -> BoxRecord:
    """
    Compute the BoxRecord of one non-empty position bin.

    Args:
        pos: Position coordinate of the bin.
        samples: Samples of the bin, in any order. Sorted in place by value.
        pos_letter: "x" or "y", the axis the position binds to.
        quartilemethod: Quartile convention.
        boxpoints: Points mode deciding pts2.

    Raises:
        ValueError: If samples is empty.
    """
    if not samples:
        raise ValueError("aggregate_box needs at least one sample")

    samples.sort(key=lambda pt: pt.v)
    vals = [pt.v for pt in samples]
    n = len(vals)
    arr = np.asarray(vals, dtype=float)

    mean = float(arr.mean())
    sd = float(np.sqrt(np.sum((arr - mean) ** 2) / n))
    med = interp(vals, 0.5)
    q1, q3 = quartiles(vals, quartilemethod)
    lf, uf = fences(vals, q1, q3)

    mci = NOTCH_FACTOR * (q3 - q1) / math.sqrt(n)

    record = BoxRecord(
        pos=pos,
        pos_letter=pos_letter,
        min=vals[0],
        q1=q1,
        med=med,
        q3=q3,
        max=vals[-1],
        lf=lf,
        uf=uf,
        ln=med - mci,
        un=med + mci,
        mean=mean,
        sd=sd,
        lo=(1 + OUTLIER_IQR) * q1 - OUTLIER_IQR * q3,
        uo=(1 + OUTLIER_IQR) * q3 - OUTLIER_IQR * q1,
        pts=samples,
        vals=vals,
    )
    keep = point_filter(boxpoints, lf, uf)
    record.pts2 = [pt for pt in samples if keep(pt)]
    if boxpoints == PointsMode.SUSPECTED_OUTLIERS:
        flag_far_outliers(record)
    return record


@dataclass
class NotchExtent:
    """Lowest lower notch and highest upper notch across boxes."""
    min_ln: float = math.inf
    max_un: float = -math.inf

    def update(self, record: BoxRecord) -> None:
        self.min_ln = min(self.min_ln, record.ln)
        self.max_un = max(self.max_un, record.un)


def aggregate_bins(
    distinct: Sequence[float],
    samples_per_bin: Sequence[list[Sample]],
    *,
    pos_letter: str,
    quartilemethod: QuartileMethod = QuartileMethod.LINEAR,
    boxpoints: PointsMode = PointsMode.OUTLIERS,
) -> tuple[list[BoxRecord], NotchExtent]:
    """One BoxRecord per non-empty bin, in position order, plus the notch extent."""
    records: list[BoxRecord] = []
    notches = NotchExtent()
    for pos, samples in zip(distinct, samples_per_bin):
        if not samples:
            continue
        record = aggregate_box(
            pos,
            samples,
            pos_letter=pos_letter,
            quartilemethod=quartilemethod,
            boxpoints=boxpoints,
        )
        notches.update(record)
        records.append(record)
    return records, notches
