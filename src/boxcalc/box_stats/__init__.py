"""Box-plot statistics: quartiles, fences, notches and outliers per box."""

from boxcalc.box_stats.axis import CategoryAxis, LinearAxis
from boxcalc.box_stats.box_config import BoxCalcConfig, BoxCalcDefaults
from boxcalc.box_stats.box_record import BoxCalcResult, BoxRecord, Sample, TraceMeta, ValueRange
from boxcalc.box_stats.calc import calc_box_trace, calc_box_traces
from boxcalc.box_stats.trace_state import (
    BoxMean,
    BoxTrace,
    Orientation,
    PointsMode,
    QuartileMethod,
    TraceType,
)

__all__ = [
    "BoxCalcConfig",
    "BoxCalcDefaults",
    "BoxCalcResult",
    "BoxMean",
    "BoxRecord",
    "BoxTrace",
    "CategoryAxis",
    "LinearAxis",
    "Orientation",
    "PointsMode",
    "QuartileMethod",
    "Sample",
    "TraceMeta",
    "TraceType",
    "ValueRange",
    "calc_box_trace",
    "calc_box_traces",
]
