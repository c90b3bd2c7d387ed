"""
Data containers shared by the SRS calculation stages.
"""

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np

from .constants import DEFAULT_DAMPING_RATIO, DEFAULT_OCTAVE_CODE, DEFAULT_START_FREQUENCY


def _readonly(values, dtype=float) -> np.ndarray:
    """Copy values into a new array that cannot be written to."""
    arr = np.array(values, dtype=dtype).ravel()
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class AccelerationSignal:
    """
    Acceleration time history sampled at a fixed rate.

    The samples are copied on construction and stored read-only.
    """

    samples: np.ndarray  # acceleration (G)
    sample_rate: float  # Hz

    def __post_init__(self):
        object.__setattr__(self, 'samples', _readonly(self.samples))
        object.__setattr__(self, 'sample_rate', float(self.sample_rate))

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def dt(self) -> float:
        """Time step (seconds)"""
        return 1.0 / self.sample_rate

    @property
    def duration(self) -> float:
        return len(self.samples) * self.dt


@dataclass(frozen=True)
class AnalysisParameters:
    """Scalar settings of one SRS calculation."""

    start_frequency: float = DEFAULT_START_FREQUENCY
    damping_ratio: float = DEFAULT_DAMPING_RATIO
    octave_code: int = DEFAULT_OCTAVE_CODE


@dataclass(eq=False)
class ChannelExtrema:
    """
    Running extrema of every SDOF channel after a simulation pass.

    ``updated[k]`` is False when channel k never saw a sample; its ``xmax``
    and ``xmin`` then still hold the seed sentinels.
    """

    xmax: np.ndarray
    xmin: np.ndarray
    updated: np.ndarray

    def __len__(self) -> int:
        return len(self.xmax)


@dataclass(frozen=True, eq=False)
class SRSResult:
    """
    Shock response spectrum of one signal.

    ``peaks[k]`` is the larger magnitude of the positive and negative
    response excursions at ``frequencies[k]``. ``diagnostics`` holds the
    recoverable warnings issued while computing it.
    """

    frequencies: np.ndarray
    peaks: np.ndarray
    positive_peaks: np.ndarray
    negative_peaks: np.ndarray
    damping_ratio: float
    octave_code: int
    sample_rate: float
    diagnostics: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        for name in ('frequencies', 'peaks', 'positive_peaks', 'negative_peaks'):
            object.__setattr__(self, name, _readonly(getattr(self, name)))
        object.__setattr__(self, 'diagnostics', tuple(self.diagnostics))
        if not (len(self.frequencies) == len(self.peaks)
                == len(self.positive_peaks) == len(self.negative_peaks)):
            raise ValueError("frequencies and peak arrays must have same length")

    def __len__(self) -> int:
        return len(self.frequencies)

    @property
    def peak_frequency(self) -> float:
        """Natural frequency with the largest response."""
        return float(self.frequencies[int(np.argmax(self.peaks))])

    def as_table(self) -> List[Tuple[float, float]]:
        return [(float(f), float(p)) for f, p in zip(self.frequencies, self.peaks)]


