"""
Reading acceleration data and presenting SRS results.
"""

import os
import time
import warnings
from typing import Any, Callable, Tuple

import numpy as np

from .exceptions import EmptyInputError, SRSWarning
from .models import AccelerationSignal, SRSResult


def load_signal(filename: str) -> np.ndarray:
    """
    Read acceleration samples from a text file, one value per line.

    Blank lines are skipped. Lines that are not a number are skipped with an
    SRSWarning naming the line.

    Parameters:
    -----------
    filename : str
        Path to the text file

    Returns:
    --------
    np.ndarray
        Acceleration samples in file order
    """
    if not os.path.isfile(filename):
        raise FileNotFoundError(f"Could not open file -> {filename}")

    values = []
    with open(filename, 'r') as f:
        for line_number, line in enumerate(f, start=1):
            text = line.strip()
            if not text:
                continue
            try:
                values.append(float(text))
            except ValueError:
                warnings.warn(f"Line {line_number} is not a valid number, skipping: '{text}'",
                              SRSWarning, stacklevel=2)

    if not values:
        raise EmptyInputError(
            f"No valid acceleration data was read from {filename}, or the file is empty")

    return np.array(values, dtype=float)


def read_acceleration_signal(filename: str, sample_rate: float) -> AccelerationSignal:
    """Load a text file as an AccelerationSignal at the given sample rate."""
    return AccelerationSignal(load_signal(filename), sample_rate)


def format_results(result: SRSResult) -> str:
    """Render the spectrum as a frequency / peak table."""
    lines = ["Frequency (Hz)\tPeak Acceleration (G)",
             "-------------\t---------------------"]
    for freq, peak in zip(result.frequencies, result.peaks):
        lines.append(f"{freq:.4f}\t\t{peak:.4f}")
    return "\n".join(lines)


def write_results(result: SRSResult, filename: str):
    """Save frequency and peak columns to a text file."""
    table = np.column_stack([result.frequencies, result.peaks])
    np.savetxt(filename, table, fmt='%.6f', delimiter='\t',
               header=f"frequency_hz\tpeak_g  (damping={result.damping_ratio}, "
                      f"octave_code={result.octave_code}, sample_rate={result.sample_rate})")


def timed(func: Callable[..., Any], *args, **kwargs) -> Tuple[Any, float]:
    """Call func and return (value, elapsed milliseconds)."""
    start_time = time.perf_counter()
    value = func(*args, **kwargs)
    elapsed_ms = (time.perf_counter() - start_time) * 1000.0
    return value, elapsed_ms


def plot_srs(result: SRSResult, ax=None, title: str = ''):
    """
    Plot the spectrum on log-log axes.

    Shows the positive and negative responses and the peak envelope.
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=(12, 8))
    ax.loglog(result.frequencies, result.peaks, 'k-', label='Peak')
    ax.loglog(result.frequencies, np.abs(result.positive_peaks), 'b--', label='Response +ve')
    ax.loglog(result.frequencies, result.negative_peaks, 'r--', label='Response -ve')
    ax.set_xlabel('Natural Frequency (Hz)')
    ax.set_ylabel('Peak Acceleration (G)')
    Q = 1.0 / (2.0 * result.damping_ratio)
    ax.set_title(f'{title} Q={Q:.1f}'.strip())
    ax.set_xlim(result.frequencies.min(), result.frequencies.max())
    ax.grid(True, which='both')
    ax.legend()
    return ax
