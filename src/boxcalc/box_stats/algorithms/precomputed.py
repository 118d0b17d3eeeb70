"""
Box records from precomputed statistics.

One record per row. A row is valid when q1 <= median <= q3 (all present);
supplied fences are accepted only when they extend the box outward, and a
notch span only when positive. Invalid rows are logged and drawn as a flat
line at a single representative value.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Optional, Sequence

from boxcalc.utils.logging import get_logger
from boxcalc.box_stats.box_record import BoxRecord, Sample
from boxcalc.box_stats.conventions import INVALID_PRECOMPUTED_MESSAGE
from boxcalc.box_stats.trace_state import BoxTrace, PointsMode, is_array, item_at

logger = get_logger(__name__)

# Per-row statistics read from the trace.
STAT_FIELDS = ("q1", "median", "q3", "lowerfence", "upperfence", "mean", "sd", "notchspan")


def row_value(trace: BoxTrace, key: str, i: int, d2c: Callable[[Any], Optional[float]]) -> Optional[float]:
    """Converted value of ``trace.<key>[i]``; None when missing or not numeric."""
    value = item_at(getattr(trace, key), i)
    if value is None:
        return None
    return d2c(value)


def row_outliers(trace: BoxTrace, i: int, d2c: Callable[[Any], Optional[float]]) -> list[Sample]:
    """Explicit outliers of row i as samples sorted by value."""
    row = item_at(trace.outliers, i)
    if not is_array(row):
        return []
    pts = []
    for raw in row:
        v = d2c(raw)
        if v is not None:
            pts.append(Sample(v=v, i=i))
    pts.sort(key=lambda pt: pt.v)
    return pts


def is_valid_row(q1: Optional[float], med: Optional[float], q3: Optional[float]) -> bool:
    return (
        med is not None and q1 is not None and q3 is not None
        and q1 <= med <= q3
    )


def fallback_value(q1: Optional[float], med: Optional[float], q3: Optional[float]) -> float:
    """Representative value of an invalid row: median, else quartile midpoint, else either quartile, else 0."""
    if med is not None:
        return med
    if q1 is not None:
        if q3 is not None:
            return (q1 + q3) / 2
        return q1
    if q3 is not None:
        return q3
    return 0.0


def precomputed_box(
    trace: BoxTrace,
    i: int,
    pos: float,
    *,
    pos_letter: str,
    d2c: Callable[[Any], Optional[float]],
) -> BoxRecord:
    """Build the record of precomputed row ``i`` (trace options must be resolved)."""
    stats = {key: row_value(trace, key, i, d2c) for key in STAT_FIELDS}
    q1, med, q3 = stats["q1"], stats["median"], stats["q3"]
    pts = row_outliers(trace, i, d2c)

    if is_valid_row(q1, med, q3):
        lowerfence = stats["lowerfence"]
        upperfence = stats["upperfence"]
        lf = lowerfence if lowerfence is not None and lowerfence <= q1 else q1
        uf = upperfence if upperfence is not None and upperfence >= q3 else q3

        ns = stats["notchspan"]
        ns = ns if ns is not None and ns > 0 else 0.0
        ln = med - ns
        un = med + ns

        vmin = lf
        vmax = uf
        if trace.boxpoints != PointsMode.NONE and pts:
            vmin = min(vmin, pts[0].v)
            vmax = max(vmax, pts[-1].v)
        if trace.notched:
            vmin = min(vmin, ln)
            vmax = max(vmax, un)

        return BoxRecord(
            pos=pos,
            pos_letter=pos_letter,
            min=vmin,
            q1=q1,
            med=med,
            q3=q3,
            max=vmax,
            lf=lf,
            uf=uf,
            ln=ln,
            un=un,
            mean=stats["mean"],
            sd=stats["sd"],
            pts=pts,
            pts2=pts,
        )

    logger.warning(INVALID_PRECOMPUTED_MESSAGE)
    v0 = fallback_value(q1, med, q3)
    # drawn as a line segment
    return BoxRecord(
        pos=pos,
        pos_letter=pos_letter,
        min=v0,
        q1=v0,
        med=v0,
        q3=v0,
        max=v0,
        lf=v0,
        uf=v0,
        ln=v0,
        un=v0,
        mean=v0,
        sd=v0,
        pts=pts,
        pts2=pts,
    )


def precomputed_boxes(
    trace: BoxTrace,
    pos: Sequence[float],
    *,
    pos_letter: str,
    d2c: Callable[[Any], Optional[float]],
) -> list[BoxRecord]:
    """One record per row with a numeric position, in row order."""
    records = []
    for i in range(trace.length):
        p = pos[i] if i < len(pos) else math.nan
        if p is None or not math.isfinite(p):
            continue
        records.append(precomputed_box(trace, i, float(p), pos_letter=pos_letter, d2c=d2c))
    return records
