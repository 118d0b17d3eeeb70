"""Selection tagging for box samples."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from boxcalc.box_stats.box_record import BoxRecord, Sample
from boxcalc.box_stats.trace_state import is_array


def _is_index(value: Any, length: Optional[int] = None) -> bool:
    if isinstance(value, bool):
        return False
    try:
        as_int = int(value)
    except (TypeError, ValueError):
        return False
    if as_int != value or as_int < 0:
        return False
    return length is None or as_int < length


def tag_selected(
    pts: list[Sample],
    selectedpoints: Sequence[Any],
    index_map: Optional[dict[int, int]] = None,
    ids: Optional[Sequence[Any]] = None,
) -> None:
    """
    Set ``selected`` on the samples named by ``selectedpoints``.

    Entries are source-array indices; with ``ids`` they may also be ids,
    which are translated to indices first. ``index_map`` maps a source index
    to the sample's position in ``pts`` (identity when omitted). Unknown
    entries are ignored.
    """
    id_to_index: dict[Any, int] = {}
    if is_array(ids):
        id_to_index = {ident: k for k, ident in enumerate(ids)}

    for point in selectedpoints:
        if _is_index(point):
            point_number = int(point)
        elif point in id_to_index:
            point_number = id_to_index[point]
        else:
            continue
        target = index_map.get(point_number) if index_map is not None else point_number
        if target is not None and _is_index(target, len(pts)):
            pts[target].selected = True


def calc_selection(
    records: list[BoxRecord],
    selectedpoints: Optional[Sequence[Any]],
    ids: Optional[Sequence[Any]] = None,
) -> None:
    """Tag selected samples in every record; no-op when nothing is selected."""
    if not is_array(selectedpoints):
        return
    for record in records:
        pts = record.pts
        index_map = {pt.i: j for j, pt in enumerate(pts)}
        tag_selected(pts, selectedpoints, index_map, ids)
