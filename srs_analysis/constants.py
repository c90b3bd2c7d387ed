"""
Default analysis settings and fixed numerical limits.
"""

DEFAULT_START_FREQUENCY = 100.0  # Hz
DEFAULT_DAMPING_RATIO = 0.05
DEFAULT_OCTAVE_CODE = 3

OCTAVE_FRACTIONS = {
    1: 1. / 3.,    # 1/3 octave
    2: 1. / 6.,    # 1/6 octave
    3: 1. / 12.,   # 1/12 octave
    4: 1. / 24.    # 1/24 octave
}

MIN_DAMPING_RATIO = 1e-9

# Extrema seeds. No physical acceleration response comes near these values,
# anything beyond SENTINEL_LIMIT is read as "never updated".
EXTREMUM_SENTINEL = 1.0e90
SENTINEL_LIMIT = 1.0e80
