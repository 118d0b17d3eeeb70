"""Unit tests for position binning."""

import numpy as np
import pandas as pd

from boxcalc.box_stats.algorithms.binning import bin_samples


def test_bin_samples_groups_by_distinct_position():
    """Positions [1, 1, 2, 2, 5] give 3 groups with counts [2, 2, 1]."""
    bins = bin_samples([1, 1, 2, 2, 5], [10.0, 11.0, 12.0, 13.0, 14.0])
    assert bins.distinct == [1.0, 2.0, 5.0]
    assert bins.half_width == 0.5
    assert [len(s) for s in bins.samples] == [2, 2, 1]
    assert [pt.i for pt in bins.samples[1]] == [2, 3]
    assert bins.samples[2][0].v == 14.0


def test_bin_samples_drops_non_numeric_values_and_positions():
    pos = [1.0, np.nan, 2.0, 2.0]
    vals = [10.0, 11.0, np.nan, 13.0]
    bins = bin_samples(pos, vals)
    assert bins.distinct == [1.0, 2.0]
    assert [[pt.i for pt in s] for s in bins.samples] == [[0], [3]]


def test_bin_samples_respects_length():
    bins = bin_samples([1, 2, 3], [1.0, 2.0, 3.0], length=2)
    assert bins.distinct == [1.0, 2.0]
    assert sum(len(s) for s in bins.samples) == 2


def test_bin_samples_copies_per_point_text():
    bins = bin_samples(
        [0, 0],
        [1.0, 2.0],
        text=["a", "b"],
        hovertext="not an array",
    )
    pts = bins.samples[0]
    assert [pt.text for pt in pts] == ["a", "b"]
    assert all(pt.hovertext is None for pt in pts)


def test_bin_samples_no_positions():
    bins = bin_samples([np.nan, np.nan], [1.0, 2.0])
    assert bins.distinct == []
    assert bins.samples == []


def test_bin_samples_reads_text_series_by_position():
    bins = bin_samples([0, 0], [1.0, 2.0], text=pd.Series(["a", "b"], index=[10, 11]))
    assert [pt.text for pt in bins.samples[0]] == ["a", "b"]
