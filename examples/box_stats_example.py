"""Compute box statistics for a raw-sample trace and a precomputed trace, print TSV reports."""

from boxcalc.box_stats import BoxTrace, CategoryAxis, LinearAxis, PointsMode, calc_box_traces
from boxcalc.box_stats.report import box_report
from boxcalc.utils.logging import configure_logging

configure_logging(level="DEBUG")

raw = BoxTrace(
    x=["control"] * 6 + ["treated"] * 6,
    y=[1.2, 1.5, 1.1, 1.9, 1.4, 6.0, 2.1, 2.4, 2.2, 2.8, 2.5, 2.3],
    boxpoints=PointsMode.SUSPECTED_OUTLIERS,
    notched=True,
    selectedpoints=[5],
)
precomputed = BoxTrace(
    x=["control", "treated"],
    q1=[1.2, 2.2],
    median=[1.45, 2.35],
    q3=[1.8, 2.6],
    outliers=[[6.0], []],
)

x_axis = CategoryAxis()
y_axis = LinearAxis()
out = calc_box_traces([raw, precomputed], x_axis, y_axis)

for trace, result in zip([raw, precomputed], out.results):
    print(box_report(trace, result))
    print("=" * 60)
