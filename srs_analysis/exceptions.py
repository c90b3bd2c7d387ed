"""
Error and warning types raised by the SRS calculation.

Fatal input problems raise a subclass of ``SRSError`` (itself a
``ValueError``). Recoverable conditions are issued as ``SRSWarning`` and the
calculation continues with a fallback value.
"""


class SRSError(ValueError):
    """Base class for input errors that stop an SRS calculation."""


class EmptyInputError(SRSError):
    """The acceleration signal contains no samples."""


class InvalidSampleRateError(SRSError):
    """The sample rate is not a positive, finite number."""


class InvalidStartFrequencyError(SRSError):
    """The starting natural frequency is not a positive, finite number."""


class InvalidOctaveCodeError(SRSError):
    """The octave code is not one of 1, 2, 3 or 4."""


class EmptyFrequencyGridError(SRSError):
    """No natural frequency fits below the analysis limits."""


class SRSWarning(UserWarning):
    """Recoverable condition; the calculation continued with a fallback."""
