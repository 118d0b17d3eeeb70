"""Box trace configuration.

This module defines the option enums and the BoxTrace dataclass that carries
one trace's data arrays and calc options, plus supply_defaults() which
resolves the derived fields (length, orientation, precomputed-stats mode)
before calc runs.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Sequence

import numpy as np
import pandas as pd

if TYPE_CHECKING:
    from boxcalc.box_stats.box_config import BoxCalcDefaults


class TraceType(Enum):
    """Trace kinds that share the box statistics engine."""
    BOX = "box"
    VIOLIN = "violin"


class Orientation(Enum):
    """'v': boxes along x, values on y. 'h': boxes along y, values on x."""
    VERTICAL = "v"
    HORIZONTAL = "h"


class QuartileMethod(Enum):
    """Quartile conventions for raw samples."""
    LINEAR = "linear"
    EXCLUSIVE = "exclusive"
    INCLUSIVE = "inclusive"


class PointsMode(Enum):
    """Which sample points are kept for rendering (pts2)."""
    NONE = "none"
    OUTLIERS = "outliers"
    SUSPECTED_OUTLIERS = "suspectedoutliers"
    ALL = "all"

    @classmethod
    def parse(cls, value: Any) -> "PointsMode":
        """Accept enum members, their values and False (no points)."""
        if isinstance(value, cls):
            return value
        if value is False or value is None:
            return cls.NONE
        return cls(str(value))


class BoxMean(Enum):
    """Mean marker drawn inside the box; only affects the hover label here."""
    NONE = "none"
    MEAN = "mean"
    SD = "sd"

    @classmethod
    def parse(cls, value: Any) -> "BoxMean":
        if isinstance(value, cls):
            return value
        if value is True:
            return cls.MEAN
        if value is False or value is None:
            return cls.NONE
        return cls(str(value))


# Trace fields holding per-point or per-row arrays.
ARRAY_FIELDS = (
    "x", "y", "ids", "text", "hovertext", "selectedpoints",
    "q1", "median", "q3", "lowerfence", "upperfence", "mean", "sd", "notchspan",
)


def is_array(value: Any) -> bool:
    """True for list/tuple/numpy array/pandas Series inputs."""
    return isinstance(value, (list, tuple, np.ndarray, pd.Series))


def array_len(value: Any) -> int:
    """Length of an array input, 0 for None or scalars."""
    if not is_array(value):
        return 0
    return len(value)


def _to_list(value: Any) -> Any:
    if isinstance(value, (np.ndarray, pd.Series)):
        return value.tolist()
    if isinstance(value, tuple):
        return list(value)
    return value


def item_at(values: Any, i: int) -> Any:
    """Entry i of an array input by position; None when missing."""
    if not is_array(values) or i >= len(values):
        return None
    if isinstance(values, pd.Series):
        return values.iloc[i]
    return values[i]


@dataclass
class BoxTrace:
    """Data arrays and calc options for one box (or violin) trace.

    Options left as None are resolved by supply_defaults(). The derived
    fields ``length`` and ``has_precomputed_stats`` are only meaningful on
    the copy returned by supply_defaults().
    """
    type: TraceType = TraceType.BOX
    x: Optional[Sequence[Any]] = None
    y: Optional[Sequence[Any]] = None
    x0: Any = None
    y0: Any = None
    name: Optional[str] = None
    orientation: Optional[Orientation] = None
    quartilemethod: Optional[QuartileMethod] = None
    boxpoints: Optional[PointsMode] = None
    notched: Optional[bool] = None
    boxmean: Optional[BoxMean] = None
    selectedpoints: Optional[Sequence[Any]] = None
    ids: Optional[Sequence[Any]] = None
    text: Any = None
    hovertext: Any = None
    # precomputed statistics, one entry per row
    q1: Optional[Sequence[Any]] = None
    median: Optional[Sequence[Any]] = None
    q3: Optional[Sequence[Any]] = None
    lowerfence: Optional[Sequence[Any]] = None
    upperfence: Optional[Sequence[Any]] = None
    mean: Optional[Sequence[Any]] = None
    sd: Optional[Sequence[Any]] = None
    notchspan: Optional[Sequence[Any]] = None
    outliers: Optional[Sequence[Any]] = None
    visible: bool = True
    # derived by supply_defaults
    length: int = 0
    has_precomputed_stats: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize BoxTrace to a JSON-friendly dictionary.

        Enums are stored by value, arrays as plain lists.
        """
        d: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            elif f.name == "outliers" and is_array(value):
                value = [_to_list(row) for row in _to_list(value)]
            else:
                value = _to_list(value)
            d[f.name] = value
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BoxTrace":
        """Deserialize BoxTrace from a dictionary.

        ``points`` is accepted as an alias of ``boxpoints``; None leaves an
        option unset while False means PointsMode.NONE.

        Raises:
            ValueError: If an enum field holds an unknown value.
        """
        boxpoints = data.get("boxpoints", data.get("points"))
        orientation = data.get("orientation")
        quartilemethod = data.get("quartilemethod")
        boxmean = data.get("boxmean")
        kwargs: dict[str, Any] = {
            "type": TraceType(data.get("type", TraceType.BOX.value)),
            "orientation": Orientation(orientation) if orientation is not None else None,
            "quartilemethod": QuartileMethod(quartilemethod) if quartilemethod is not None else None,
            "boxpoints": PointsMode.parse(boxpoints) if boxpoints is not None else None,
            "boxmean": BoxMean.parse(boxmean) if boxmean is not None else None,
            "notched": bool(data["notched"]) if data.get("notched") is not None else None,
            "visible": bool(data.get("visible", True)),
        }
        for key in ("x0", "y0", "name", "outliers") + ARRAY_FIELDS:
            if key in data and key not in kwargs:
                kwargs[key] = data[key]
        return cls(**kwargs)


def _min_len(*arrays: Any) -> int:
    return min(array_len(a) for a in arrays)


def supply_defaults(
    trace: BoxTrace,
    defaults: Optional["BoxCalcDefaults"] = None,
) -> BoxTrace:
    """Return a copy of ``trace`` with every option resolved.

    Detects precomputed statistics (box traces with non-empty q1, median and
    q3), computes the usable length, picks the default orientation and fills
    unset options from ``defaults``. A trace with no usable rows comes back
    with ``visible=False``.
    """
    if defaults is None:
        from boxcalc.box_stats.box_config import BoxCalcDefaults
        defaults = BoxCalcDefaults()

    out = replace(trace)
    # per-row arrays are read by position from here on
    for key in ARRAY_FIELDS:
        setattr(out, key, _to_list(getattr(out, key)))
    if is_array(out.outliers):
        out.outliers = [_to_list(row) for row in _to_list(out.outliers)]
    has_x = array_len(trace.x) > 0
    has_y = array_len(trace.y) > 0

    out.has_precomputed_stats = (
        trace.type == TraceType.BOX
        and array_len(trace.q1) > 0
        and array_len(trace.median) > 0
        and array_len(trace.q3) > 0
    )

    default_orientation = None
    if out.has_precomputed_stats:
        stats = (trace.q1, trace.median, trace.q3)
        if has_x:
            default_orientation = Orientation.VERTICAL
            length = _min_len(trace.x, *stats)
        elif has_y:
            default_orientation = Orientation.HORIZONTAL
            length = _min_len(trace.y, *stats)
        else:
            length = 0
    else:
        if has_y:
            default_orientation = Orientation.VERTICAL
            length = _min_len(trace.x, trace.y) if has_x else array_len(trace.y)
        elif has_x:
            default_orientation = Orientation.HORIZONTAL
            length = array_len(trace.x)
        else:
            length = 0

    out.length = length
    if not length:
        out.visible = False
        return out

    if out.orientation is None:
        out.orientation = default_orientation
    if out.quartilemethod is None:
        out.quartilemethod = defaults.quartilemethod

    if out.has_precomputed_stats:
        if out.notched is None:
            out.notched = array_len(trace.notchspan) > 0
        if out.boxmean is None:
            if array_len(trace.mean) > 0:
                out.boxmean = BoxMean.SD if array_len(trace.sd) > 0 else BoxMean.MEAN
            else:
                out.boxmean = BoxMean.NONE
        if out.boxpoints is None:
            out.boxpoints = PointsMode.OUTLIERS if is_array(trace.outliers) else PointsMode.NONE
        elif out.boxpoints != PointsMode.NONE:
            # precomputed rows only carry explicit outliers
            out.boxpoints = PointsMode.OUTLIERS
    else:
        if out.notched is None:
            out.notched = defaults.notched
        if out.boxmean is None:
            out.boxmean = BoxMean.NONE
        if out.boxpoints is None:
            out.boxpoints = defaults.boxpoints

    return out
