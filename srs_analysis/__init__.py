"""SRS Analysis Package

Python implementation of the Smallwood ramp invariant shock response
spectrum calculation for acceleration time histories.
"""

from .exceptions import (
    EmptyFrequencyGridError,
    EmptyInputError,
    InvalidOctaveCodeError,
    InvalidSampleRateError,
    InvalidStartFrequencyError,
    SRSError,
    SRSWarning,
)
from .models import AccelerationSignal, AnalysisParameters, ChannelExtrema, SRSResult
from .spectrum import SRSCalculator, compute_srs

__version__ = "1.0.0"
__all__ = [
    "SRSCalculator", "compute_srs",
    "AccelerationSignal", "AnalysisParameters", "ChannelExtrema", "SRSResult",
    "SRSError", "EmptyInputError", "InvalidSampleRateError",
    "InvalidStartFrequencyError", "InvalidOctaveCodeError",
    "EmptyFrequencyGridError", "SRSWarning",
]
