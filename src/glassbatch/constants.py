"""Numerical constants shared by the batch calculations."""

# Matrix values are percentages; a full batch sums to this.
PERCENT = 100.0

# |sum - 100| at or below this is treated as already normalized.
NORMALIZATION_TOLERANCE = 1e-3

DEFAULT_BATCH_MASS = 5.0  # g
