"""
Tabular reports of computed boxes (pandas).

stats_table() gives one row per box, values_per_box() the ragged sample
values per box, and box_report() combines both with the trace parameters
into a TSV string suitable for copy/paste into a spreadsheet.
"""

from __future__ import annotations

from typing import Dict, List

import pandas as pd

from boxcalc.box_stats.box_record import BoxCalcResult
from boxcalc.box_stats.trace_state import BoxTrace

# Stats columns for the summary table.
STATS_COLUMNS = [
    "pos", "count", "min", "q1", "med", "q3", "max",
    "lf", "uf", "lo", "uo", "ln", "un", "mean", "sd", "n_outliers",
]


def stats_table(result: BoxCalcResult) -> pd.DataFrame:
    """One row per box with the columns in STATS_COLUMNS.

    ``count`` is the number of raw samples (0 for precomputed rows).
    """
    if result.is_empty:
        return pd.DataFrame(columns=STATS_COLUMNS)

    rows = []
    for r in result.records:
        rows.append({
            "pos": r.pos,
            "count": len(r.vals),
            "min": r.min,
            "q1": r.q1,
            "med": r.med,
            "q3": r.q3,
            "max": r.max,
            "lf": r.lf,
            "uf": r.uf,
            "lo": r.lo,
            "uo": r.uo,
            "ln": r.ln,
            "un": r.un,
            "mean": r.mean,
            "sd": r.sd,
            "n_outliers": len(r.pts2),
        })
    return pd.DataFrame(rows, columns=STATS_COLUMNS)


def values_per_box(result: BoxCalcResult) -> Dict[str, List[float]]:
    """Map str(pos) -> sample values of that box, in box order."""
    return {str(r.pos): [pt.v for pt in r.pts] for r in result.records}


def dict_of_lists_to_tsv(data: Dict[str, List[float]]) -> str:
    """
    Convert dict[str, list[float]] to a TSV string with columns = keys
    and rows padded with "" for unequal lengths.
    """
    if not data:
        return ""

    max_len = max(len(values) for values in data.values())
    padded = {
        key: values + [""] * (max_len - len(values))
        for key, values in data.items()
    }
    df = pd.DataFrame(padded)
    return df.to_csv(sep="\t", index=False)


def box_report(trace: BoxTrace, result: BoxCalcResult) -> str:
    """
    Multi-section TSV report: parameters, stats table, ragged values table.

    ``trace`` should be the trace the result was computed from; options it
    leaves unset are reported as-is.
    """
    def _opt(value: object) -> str:
        return getattr(value, "value", value) if value is not None else "(default)"

    lines: list[str] = []

    lines.append("# Parameters")
    lines.append(f"type\t{trace.type.value}")
    lines.append(f"orientation\t{_opt(trace.orientation)}")
    lines.append(f"quartilemethod\t{_opt(trace.quartilemethod)}")
    lines.append(f"boxpoints\t{_opt(trace.boxpoints)}")
    lines.append(f"notched\t{_opt(trace.notched)}")
    if not result.is_empty:
        lines.append(f"slot\t{result.meta.num}")
        lines.append(f"pos_letter\t{result.meta.pos_letter}")
    if result.value_range is not None:
        lines.append(f"value_range\t{result.value_range.min}\t{result.value_range.max}")
    lines.append("")

    lines.append("# Stats (one row per box)")
    stats_df = stats_table(result)
    if len(stats_df) > 0:
        lines.append(stats_df.to_csv(sep="\t", index=False))
    else:
        lines.append("(no data)")
    lines.append("")

    lines.append("# Values (ragged, one col per box)")
    lines.append(dict_of_lists_to_tsv(values_per_box(result)))

    return "\n".join(lines)
