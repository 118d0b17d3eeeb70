"""
boxcalc: box-plot statistics engine for charting.

This package provides:
- calc_box_trace / calc_box_traces: quartiles, fences, notches and outlier
  points per box, from raw samples or precomputed statistics
- Linear and category axis collaborators
- Logging utilities for library and application use

For logging configuration in standalone scripts:
    ```python
    from boxcalc.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```

When used as a library, logging is handled by the parent application's
configuration.
"""

import logging

from boxcalc.utils.logging import configure_logging, get_logger

from boxcalc.box_stats import (
    BoxCalcResult,
    BoxRecord,
    BoxTrace,
    CategoryAxis,
    LinearAxis,
    PointsMode,
    QuartileMethod,
    calc_box_trace,
    calc_box_traces,
)

# NullHandler so logs don't propagate to root when no application has
# configured logging.
_logger = logging.getLogger("boxcalc")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "BoxCalcResult",
    "BoxRecord",
    "BoxTrace",
    "CategoryAxis",
    "LinearAxis",
    "PointsMode",
    "QuartileMethod",
    "calc_box_trace",
    "calc_box_traces",
    "configure_logging",
    "get_logger",
]

__version__ = "0.1.0"
