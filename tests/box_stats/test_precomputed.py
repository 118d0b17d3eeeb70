"""Unit tests for the precomputed-stats path."""

import logging

import pandas as pd
import pytest

from boxcalc.box_stats.calc import calc_box_trace
from boxcalc.box_stats.conventions import INVALID_PRECOMPUTED_MESSAGE
from boxcalc.box_stats.trace_state import BoxTrace, PointsMode


def _warnings(caplog):
    return [r for r in caplog.records if r.levelno == logging.WARNING and r.getMessage() == INVALID_PRECOMPUTED_MESSAGE]


def test_invalid_row_degrades_to_flat_box_at_median(linear_axes, caplog):
    """q1=5, median=3, q3=8 violates q1 <= median <= q3."""
    caplog.set_level(logging.WARNING, logger="boxcalc")
    trace = BoxTrace(x=[0], q1=[5], median=[3], q3=[8])
    result = calc_box_trace(trace, *linear_axes)

    assert len(result.records) == 1
    box = result.records[0]
    for key in ("min", "q1", "med", "q3", "max", "lf", "uf", "ln", "un", "mean", "sd"):
        assert getattr(box, key) == 3
    assert len(_warnings(caplog)) == 1


@pytest.mark.parametrize(
    "q1, median, q3, expected",
    [
        ([2], ["abc"], [6], 4.0),
        ([2], [None], [None], 2.0),
        ([None], [None], [6], 6.0),
        ([None], ["x"], [None], 0.0),
    ],
)
def test_invalid_row_fallback_value(linear_axes, q1, median, q3, expected):
    result = calc_box_trace(BoxTrace(x=[1], q1=q1, median=median, q3=q3), *linear_axes)
    box = result.records[0]
    assert box.med == box.q1 == box.q3 == box.min == box.max == expected


def test_supplied_fence_only_accepted_outward(linear_axes):
    trace = BoxTrace(
        x=[0, 1],
        q1=[1, 1],
        median=[5, 5],
        q3=[9, 9],
        lowerfence=[2, -4],
        upperfence=[8, 12],
    )
    first, second = calc_box_trace(trace, *linear_axes).records
    assert first.lf == 1
    assert first.uf == 9
    assert second.lf == -4
    assert second.uf == 12
    assert (second.min, second.max) == (-4, 12)


def test_notchspan_sets_notches_and_widens_range(linear_axes):
    trace = BoxTrace(x=[0], q1=[4], median=[5], q3=[6], notchspan=[3])
    box = calc_box_trace(trace, *linear_axes).records[0]
    assert (box.ln, box.un) == (2, 8)
    # notched defaults to True when notchspan is given
    assert (box.min, box.max) == (2, 8)


def test_non_positive_notchspan_is_ignored(linear_axes):
    trace = BoxTrace(x=[0], q1=[4], median=[5], q3=[6], notchspan=[-1], notched=True)
    box = calc_box_trace(trace, *linear_axes).records[0]
    assert box.ln == box.un == 5


def test_outliers_sorted_and_widen_range(linear_axes):
    trace = BoxTrace(x=[0], q1=[4], median=[5], q3=[6], outliers=[[20, "bad", -5]])
    box = calc_box_trace(trace, *linear_axes).records[0]
    assert [pt.v for pt in box.pts2] == [-5.0, 20.0]
    assert all(pt.i == 0 for pt in box.pts2)
    assert box.pts is box.pts2
    assert (box.min, box.max) == (-5.0, 20.0)


def test_outliers_do_not_widen_range_without_points(linear_axes):
    trace = BoxTrace(
        x=[0], q1=[4], median=[5], q3=[6],
        outliers=[[20, -5]], boxpoints=PointsMode.NONE,
    )
    box = calc_box_trace(trace, *linear_axes).records[0]
    assert (box.min, box.max) == (4, 6)
    assert len(box.pts2) == 2


def test_outliers_kept_on_invalid_row(linear_axes):
    trace = BoxTrace(x=[0], q1=[6], median=[5], q3=[4], outliers=[[1, 10]])
    box = calc_box_trace(trace, *linear_axes).records[0]
    assert [pt.v for pt in box.pts] == [1.0, 10.0]
    assert box.min == box.max == 5


def test_rows_with_non_numeric_position_are_skipped(linear_axes):
    trace = BoxTrace(x=[0, None, 2], q1=[1, 1, 1], median=[2, 2, 2], q3=[3, 3, 3])
    result = calc_box_trace(trace, *linear_axes)
    assert [r.pos for r in result.records] == [0.0, 2.0]


def test_value_range_and_optional_mean_sd(linear_axes):
    trace = BoxTrace(
        x=[0, 1],
        q1=[1, 10],
        median=[2, 11],
        q3=[3, 12],
        mean=[2.5],
    )
    result = calc_box_trace(trace, *linear_axes)
    assert (result.value_range.min, result.value_range.max) == (1, 12)
    assert result.records[0].mean == 2.5
    assert result.records[1].mean is None
    assert result.records[0].sd is None
    assert result.records[0].lo is None


def test_horizontal_precomputed_uses_y_positions(linear_axes):
    trace = BoxTrace(y=[3], q1=[1], median=[2], q3=[3])
    result = calc_box_trace(trace, *linear_axes)
    assert result.meta.pos_letter == "y"
    assert result.meta.val_letter == "x"
    assert result.records[0].pos == 3.0


def test_mean_sd_label(linear_axes):
    trace = BoxTrace(x=[0], q1=[1], median=[2], q3=[3], mean=[2], sd=[1])
    result = calc_box_trace(trace, *linear_axes)
    assert result.meta.labels["mean"] == "mean ± σ:"


def test_series_from_filtered_dataframe_read_by_position(linear_axes):
    df = pd.DataFrame({
        "x": [0, 1, 2, 3],
        "q1": [1, 2, 3, 4],
        "m": [2, 3, 4, 5],
        "q3": [3, 4, 5, 6],
    })
    sub = df[df.x >= 2]
    trace = BoxTrace(x=sub.x, q1=sub.q1, median=sub.m, q3=sub.q3)
    result = calc_box_trace(trace, *linear_axes)

    assert [r.pos for r in result.records] == [2.0, 3.0]
    assert [r.q1 for r in result.records] == [3.0, 4.0]
    assert [r.med for r in result.records] == [4.0, 5.0]
    assert [r.q3 for r in result.records] == [5.0, 6.0]


def test_series_with_shuffled_index_keeps_rows_aligned(linear_axes):
    df = pd.DataFrame({"x": [0, 1, 2], "q1": [0, 10, 20], "m": [1, 11, 21], "q3": [2, 12, 22]})
    rev = df.iloc[::-1]
    trace = BoxTrace(x=rev.x, q1=rev.q1, median=rev.m, q3=rev.q3, outliers=pd.Series([[30], [], [5]], index=[7, 8, 9]))
    result = calc_box_trace(trace, *linear_axes)

    by_pos = {r.pos: r for r in result.records}
    assert by_pos[2.0].med == 21
    assert by_pos[0.0].med == 1
    assert [pt.v for pt in by_pos[2.0].pts] == [30.0]
    assert [pt.v for pt in by_pos[0.0].pts] == [5.0]
