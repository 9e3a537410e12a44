"""
Package-wide defaults.

Functions and constructors that depend on these take a `tol=` (or `level=`) keyword,
the values here are only what they fall back to.
"""
import os

# a weight vector whose total is this close to 1.0 is returned as-is
NORMALIZATION_TOLERANCE = 1e-3

# every row of a CPT must add up to 1.0 within this tolerance
CPT_TOLERANCE = 1e-6

LOG_LEVEL = os.environ.get("DISCRETEBN_LOG_LEVEL", "WARNING").upper()
