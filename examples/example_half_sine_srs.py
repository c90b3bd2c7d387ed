#!/usr/bin/env python3

import numpy as np
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from srs_analysis.spectrum import SRSCalculator
from srs_analysis.io import format_results, timed


def create_half_sine(A=100.0, T=0.011, length=0.2, sample_rate=20000.0):
    """Half sine shock pulse of amplitude A (G) and duration T (sec)."""
    t = np.arange(0, length, 1.0 / sample_rate)
    accel = A * np.sin(np.pi * t / T)
    accel[t > T] = 0.0
    return t, accel


def run_half_sine_case():
    """
    Compute the SRS of a 100 G, 11 ms half sine pulse.

    This is the classic drop test pulse. Well above 1/T the spectrum
    flattens at the pulse amplitude, and its maximum is roughly 1.7 times
    the amplitude for Q=10.
    """

    print("100 G 11 ms Half Sine - SRS")
    print("=" * 50)

    sample_rate = 20000.0
    t, accel = create_half_sine(sample_rate=sample_rate)

    print(f"Sample rate: {sample_rate:.1f} Hz")
    print(f"Number of samples: {len(accel)}")

    results = {}
    for fast_mode in (True, False):
        calculator = SRSCalculator(fast_mode=fast_mode, verbose=fast_mode)
        result, elapsed_ms = timed(calculator.compute_srs, accel, sample_rate,
                                   start_frequency=10.0, damping_ratio=0.05,
                                   octave_code=2)
        mode_str = "fast" if fast_mode else "recursive"
        print(f"SRS ({mode_str} mode) completed in {elapsed_ms:.0f} ms")
        results[mode_str] = result

    difference = np.max(np.abs(results['fast'].peaks - results['recursive'].peaks))
    print(f"Max difference between modes: {difference:.3e} G\n")

    result = results['fast']
    print(format_results(result))
    print(f"\nPeak response: {np.max(result.peaks):.1f} G at {result.peak_frequency:.1f} Hz")

    return result


if __name__ == "__main__":
    result = run_half_sine_case()

    try:
        import matplotlib.pyplot as plt
        from srs_analysis.io import plot_srs

        plot_srs(result, title='100 G 11 ms Half Sine')
        plt.show()
    except ImportError:
        print("Matplotlib not available - skipping plots")
