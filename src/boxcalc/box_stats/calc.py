"""Box calc: trace data in, ordered box records out.

calc_box_trace() runs one trace through binning (or the precomputed-stats
path), aggregation and selection tagging. calc_box_traces() walks a list of
traces in order and hands each one its group slot explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

import numpy as np

from boxcalc.utils.logging import get_logger
from boxcalc.box_stats.algorithms.aggregate import aggregate_bins
from boxcalc.box_stats.algorithms.binning import bin_samples
from boxcalc.box_stats.algorithms.precomputed import precomputed_boxes
from boxcalc.box_stats.algorithms.search import distinct_vals
from boxcalc.box_stats.algorithms.selection import calc_selection
from boxcalc.box_stats.axis import find_extremes, is_numeric
from boxcalc.box_stats.box_config import BoxCalcDefaults
from boxcalc.box_stats.box_record import BoxCalcResult, BoxRecord, TraceMeta
from boxcalc.box_stats.conventions import HOVER_LABELS, MEAN_SD_LABEL
from boxcalc.box_stats.trace_state import (
    BoxMean,
    BoxTrace,
    Orientation,
    TraceType,
    array_len,
    supply_defaults,
)

logger = get_logger(__name__)


def get_pos(trace: BoxTrace, pos_letter: str, pos_axis: Any, num: int) -> np.ndarray:
    """
    Position coordinates, one per sample.

    Uses the position array when the trace has one. Otherwise every sample
    sits at x0/y0, else at ``name`` (category axes, or numeric names on a
    linear axis), else at the slot number ``num``.
    """
    values = getattr(trace, pos_letter)
    if array_len(values) > 0:
        return pos_axis.make_calcdata(values)

    pos0 = getattr(trace, pos_letter + "0")
    if pos0 is None:
        name = trace.name
        axis_type = getattr(pos_axis, "type", "linear")
        if name is not None and (
            axis_type == "category"
            or (is_numeric(name) and axis_type in ("linear", "log"))
        ):
            pos0 = name
        else:
            pos0 = num

    pos0c = pos_axis.d2c(pos0)
    return np.full(trace.length, np.nan if pos0c is None else pos0c, dtype=float)


def _labels(boxmean: Optional[BoxMean]) -> dict[str, str]:
    labels = dict(HOVER_LABELS)
    if boxmean == BoxMean.SD:
        labels["mean"] = MEAN_SD_LABEL
    return labels


def calc_box_trace(
    trace: BoxTrace,
    x_axis: Any,
    y_axis: Any,
    *,
    slot: int = 0,
    defaults: Optional[BoxCalcDefaults] = None,
) -> BoxCalcResult:
    """
    Compute the box records of one trace.

    Args:
        trace: Trace data and options; unresolved options are filled by
            supply_defaults().
        x_axis, y_axis: Axis collaborators providing d2c() and make_calcdata().
        slot: Ordinal of this trace among the traces of the same type sharing
            the axes. Used as fallback position and stored in the metadata.
        defaults: Defaults for unset options.

    Returns:
        BoxCalcResult. An empty result carries TraceMeta(empty=True).

    Raises:
        TypeError: If trace is not a BoxTrace.
    """
    if not isinstance(trace, BoxTrace):
        raise TypeError(f"calc_box_trace expects a BoxTrace, got {type(trace).__name__}")

    trace = supply_defaults(trace, defaults)
    if not trace.visible:
        return BoxCalcResult(records=[], meta=TraceMeta.empty_trace())

    if trace.orientation == Orientation.HORIZONTAL:
        val_axis, val_letter = x_axis, "x"
        pos_axis, pos_letter = y_axis, "y"
    else:
        val_axis, val_letter = y_axis, "y"
        pos_axis, pos_letter = x_axis, "x"

    pos = get_pos(trace, pos_letter, pos_axis, slot)
    distinct, min_diff = distinct_vals(pos[:trace.length])
    d_pos = min_diff / 2

    records: list[BoxRecord]
    if trace.has_precomputed_stats:
        records = precomputed_boxes(trace, pos, pos_letter=pos_letter, d2c=val_axis.d2c)
        value_range = find_extremes(
            [r.min for r in records] + [r.max for r in records]
        )
        # selection is not defined for precomputed rows
    else:
        raw_vals = getattr(trace, val_letter)
        if array_len(raw_vals) > 0:
            vals = val_axis.make_calcdata(raw_vals)
        else:
            vals = np.full(trace.length, np.nan)
        bins = bin_samples(
            pos,
            vals,
            length=trace.length,
            text=trace.text,
            hovertext=trace.hovertext,
        )
        records, notches = aggregate_bins(
            bins.distinct,
            bins.samples,
            pos_letter=pos_letter,
            quartilemethod=trace.quartilemethod,
            boxpoints=trace.boxpoints,
        )
        extent_vals = list(vals[:trace.length])
        if trace.notched:
            extent_vals += [notches.min_ln, notches.max_un]
        value_range = find_extremes(extent_vals)
        calc_selection(records, trace.selectedpoints, trace.ids)

    if not records:
        logger.debug(f"{trace.type.value} trace at slot {slot} has no boxes")
        return BoxCalcResult(records=[], meta=TraceMeta.empty_trace(), value_range=value_range)

    meta = TraceMeta(
        num=slot,
        d_pos=d_pos,
        pos_letter=pos_letter,
        val_letter=val_letter,
        labels=_labels(trace.boxmean),
    )
    records[0].meta = meta
    logger.debug(
        f"{trace.type.value} trace at slot {slot}: {len(records)} box(es), "
        f"precomputed={trace.has_precomputed_stats}"
    )
    return BoxCalcResult(records=records, meta=meta, value_range=value_range)


@dataclass
class TraceCalcOutput:
    """Results of calc_box_traces() and the slot count per trace type."""
    results: list[BoxCalcResult] = field(default_factory=list)
    counts: dict[TraceType, int] = field(default_factory=dict)


def calc_box_traces(
    traces: Sequence[BoxTrace],
    x_axis: Any,
    y_axis: Any,
    *,
    defaults: Optional[BoxCalcDefaults] = None,
) -> TraceCalcOutput:
    """
    Compute every trace in list order.

    Box and violin traces keep separate slot counters. Each trace receives
    the current count of non-empty traces of its type; the count advances
    only when the trace produced boxes.
    """
    out = TraceCalcOutput(counts={t: 0 for t in TraceType})
    for trace in traces:
        slot = out.counts[trace.type]
        result = calc_box_trace(trace, x_axis, y_axis, slot=slot, defaults=defaults)
        if not result.is_empty:
            out.counts[trace.type] = slot + 1
        out.results.append(result)
    return out
