"""Axis collaborators used by box calc.

The statistics engine needs only two things from an axis: converting one raw
value to a numeric coordinate (``d2c``) and converting an array of raw values
to a float array (``make_calcdata``). Invalid entries become None / NaN.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

import numpy as np
import pandas as pd

from boxcalc.box_stats.box_record import ValueRange


def is_numeric(value: Any) -> bool:
    """True for finite real numbers (bools excluded)."""
    if isinstance(value, bool) or value is None:
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


@dataclass
class LinearAxis:
    """Numeric axis: raw values are numbers or numeric strings."""
    type: str = "linear"

    def d2c(self, value: Any) -> Optional[float]:
        if isinstance(value, (bool, np.bool_)) or value is None:
            return None
        try:
            v = float(value)
        except (TypeError, ValueError):
            return None
        return v if math.isfinite(v) else None

    def make_calcdata(self, values: Iterable[Any]) -> np.ndarray:
        """Convert an array of raw values to floats, invalid entries -> NaN."""
        raw = pd.Series(list(values), dtype=object)
        # bools are not samples, same as d2c
        raw = raw.mask(raw.map(lambda v: isinstance(v, (bool, np.bool_))).astype(bool))
        s = pd.to_numeric(raw, errors="coerce")
        arr = np.array(s.to_numpy(dtype=float, na_value=np.nan), dtype=float)
        arr[~np.isfinite(arr)] = np.nan
        return arr


@dataclass
class CategoryAxis:
    """Categorical axis: each new category gets the next integer coordinate.

    Categories are registered in order of first appearance, so converting the
    same data twice yields the same coordinates.
    """
    type: str = "category"
    categories: list[Any] = field(default_factory=list)

    def d2c(self, value: Any) -> Optional[float]:
        if value is None or value is pd.NA or (isinstance(value, float) and math.isnan(value)):
            return None
        if value not in self.categories:
            self.categories.append(value)
        return float(self.categories.index(value))

    def make_calcdata(self, values: Iterable[Any]) -> np.ndarray:
        out = [self.d2c(v) for v in values]
        return np.array([np.nan if v is None else v for v in out], dtype=float)


def find_extremes(values: Iterable[Any], padded: bool = True) -> Optional[ValueRange]:
    """Min/max over the finite entries of ``values``; None when there are none."""
    arr = np.asarray([v for v in values if is_numeric(v)], dtype=float)
    if arr.size == 0:
        return None
    return ValueRange(min=float(arr.min()), max=float(arr.max()), padded=padded)
