"""Numeric conventions for box statistics.

Single source of truth for the constants shared by the binner, the
aggregator and the precomputed-stats adapter.
"""

# Relative nudge applied by find_bin so values sitting on an edge are not
# misassigned by floating point noise.
ROUNDING_ERROR = 1e-9

# distinct_vals treats values closer than span / n / DISTINCT_TOLERANCE_DIVISOR
# as the same position.
DISTINCT_TOLERANCE_DIVISOR = 10000

# Minimum position difference used when a trace has a single distinct position.
DEFAULT_MIN_DIFF = 1.0

# Fences sit 1.5 IQR outside the quartiles, suspected-outlier bounds 3 IQR.
FENCE_IQR = 1.5
OUTLIER_IQR = 3.0

# Notch half width = NOTCH_FACTOR * IQR / sqrt(N) (~95% CI for the median).
NOTCH_FACTOR = 1.57

INVALID_PRECOMPUTED_MESSAGE = "Invalid input - make sure that q1 <= median <= q3"

HOVER_LABELS = {
    "med": "median:",
    "min": "min:",
    "q1": "q1:",
    "q3": "q3:",
    "max": "max:",
    "mean": "mean:",
    "lf": "lower fence:",
    "uf": "upper fence:",
}

MEAN_SD_LABEL = "mean ± σ:"
