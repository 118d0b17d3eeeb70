"""Records produced by box calc."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class Sample:
    """One observation.

    ``i`` is the index into the trace's source arrays. After aggregation only
    the ``selected`` and ``far_outlier`` flags are ever changed.
    """
    v: float
    i: int
    text: Any = None
    hovertext: Any = None
    selected: bool = False
    far_outlier: bool = False


@dataclass
class ValueRange:
    """Value-axis extent handed to autorange; ``padded`` asks the axis to pad it."""
    min: float
    max: float
    padded: bool = True


@dataclass
class TraceMeta:
    """Per-trace metadata, attached to the first record of a trace."""
    num: int = 0
    d_pos: float = 0.0
    pos_letter: str = "x"
    val_letter: str = "y"
    labels: dict[str, str] = field(default_factory=dict)
    empty: bool = False

    @classmethod
    def empty_trace(cls) -> "TraceMeta":
        """Sentinel for a trace with nothing to draw."""
        return cls(empty=True)


@dataclass
class BoxRecord:
    """Aggregated statistics for one box.

    ``pts`` holds every sample (sorted by value) for hover and selection,
    ``pts2`` the subset drawn as points. On precomputed rows both are the
    same list of explicit outliers. ``lo``/``uo`` are only computed from raw
    samples.
    """
    pos: float
    pos_letter: str
    min: float
    q1: float
    med: float
    q3: float
    max: float
    lf: float
    uf: float
    ln: float
    un: float
    mean: Optional[float] = None
    sd: Optional[float] = None
    lo: Optional[float] = None
    uo: Optional[float] = None
    pts: list[Sample] = field(default_factory=list)
    pts2: list[Sample] = field(default_factory=list)
    vals: list[float] = field(default_factory=list)
    meta: Optional[TraceMeta] = None

    @property
    def iqr(self) -> float:
        return self.q3 - self.q1


@dataclass
class BoxCalcResult:
    """Output of one trace calc: ordered records, value range and metadata."""
    records: list[BoxRecord]
    meta: TraceMeta
    value_range: Optional[ValueRange] = None

    @property
    def is_empty(self) -> bool:
        return not self.records
