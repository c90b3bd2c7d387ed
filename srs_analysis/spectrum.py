"""
Shock Response Spectrum (SRS) calculation

This module computes the shock response spectrum of an acceleration time
history: the peak absolute acceleration response of a family of damped
single-degree-of-freedom (SDOF) oscillators, one per natural frequency on a
fractional-octave grid.

The response of each oscillator is obtained with the Smallwood ramp invariant
digital recursive filter:

    "AN IMPROVED RECURSIVE FORMULA FOR CALCULATING SHOCK RESPONSE SPECTRA"
    http://www.vibrationdata.com/ramp_invariant/DS_SRS1.pdf

Key features:
- Fractional octave frequency grid bounded by sample_rate/8 and Nyquist
- Per-frequency filter coefficients with degenerate channel handling
- Vectorized filtering (fast_mode) or explicit sample-by-sample recursion
- Recoverable conditions reported as SRSWarning and kept on the result
"""

import warnings
from typing import List, Optional, Tuple

import numpy as np
from scipy.signal import lfilter

from .constants import (
    DEFAULT_DAMPING_RATIO,
    DEFAULT_OCTAVE_CODE,
    DEFAULT_START_FREQUENCY,
    EXTREMUM_SENTINEL,
    MIN_DAMPING_RATIO,
    OCTAVE_FRACTIONS,
    SENTINEL_LIMIT,
)
from .exceptions import (
    EmptyFrequencyGridError,
    EmptyInputError,
    InvalidOctaveCodeError,
    InvalidSampleRateError,
    InvalidStartFrequencyError,
    SRSWarning,
)
from .models import AccelerationSignal, AnalysisParameters, ChannelExtrema, SRSResult


class SRSCalculator:
    """
    Shock response spectrum calculator.

    The calculation runs as four stages: frequency grid, filter
    coefficients, SDOF response simulation and peak reduction. Each stage is
    available as a public method; ``compute_srs`` runs all of them.

    Parameters:
    -----------
    fast_mode : bool, default=True
        Filter each channel with scipy.signal.lfilter and vectorize the
        coefficient calculation. Set to False for the explicit
        sample-by-sample recursion; results are identical.
    verbose : bool, default=False
        Print progress information.
    """

    def __init__(self, fast_mode: bool = True, verbose: bool = False):
        self.tpi = 2.0 * np.pi
        self.octave_options = OCTAVE_FRACTIONS
        self.fast_mode = fast_mode
        self.verbose = verbose

    def compute_srs(self,
                    signal: np.ndarray,
                    sample_rate: float,
                    start_frequency: float = DEFAULT_START_FREQUENCY,
                    damping_ratio: float = DEFAULT_DAMPING_RATIO,
                    octave_code: int = DEFAULT_OCTAVE_CODE) -> SRSResult:
        """
        Compute the shock response spectrum of an acceleration signal.

        Parameters:
        -----------
        signal : array_like
            Acceleration samples (G), in time order
        sample_rate : float
            Sample rate (Hz)
        start_frequency : float, default=100.0
            Lowest natural frequency of the grid (Hz)
        damping_ratio : float, default=0.05
            Damping ratio of every oscillator. Values <= 0 are replaced by
            1e-9 with a warning; values >= 1 or NaN give an all-zero spectrum.
        octave_code : int, default=3
            Frequency spacing: 1, 2, 3, 4 for 1/3, 1/6, 1/12, 1/24 octave

        Returns:
        --------
        SRSResult
            Frequencies, peak responses and the diagnostics issued.

        Raises:
        -------
        EmptyInputError, InvalidSampleRateError, InvalidStartFrequencyError,
        InvalidOctaveCodeError, EmptyFrequencyGridError
        """
        diagnostics: List[str] = []

        accel = np.asarray(signal, dtype=float).ravel()
        damping_ratio = self._validate_inputs(accel, sample_rate, start_frequency,
                                              damping_ratio, octave_code, diagnostics)

        accel_signal = AccelerationSignal(accel, sample_rate)
        params = AnalysisParameters(float(start_frequency), damping_ratio, int(octave_code))
        return self._run(accel_signal, params, diagnostics)

    def compute(self, accel_signal: AccelerationSignal,
                params: Optional[AnalysisParameters] = None) -> SRSResult:
        """Compute the SRS of an AccelerationSignal with the given parameters."""
        if params is None:
            params = AnalysisParameters()
        return self.compute_srs(accel_signal.samples, accel_signal.sample_rate,
                                params.start_frequency, params.damping_ratio,
                                params.octave_code)

    def _run(self, accel_signal: AccelerationSignal, params: AnalysisParameters,
             diagnostics: List[str]) -> SRSResult:
        if self.verbose:
            print(f"Number of samples: {len(accel_signal)}")
            print(f"Sample rate: {accel_signal.sample_rate:.1f} Hz")
            print(f"Time step: {accel_signal.dt:.6f} sec")

        fn = self.build_frequency_grid(params.start_frequency, accel_signal.sample_rate,
                                       params.octave_code, diagnostics)
        if self.verbose:
            print(f"Analysing {len(fn)} natural frequencies "
                  f"({fn[0]:.2f} Hz to {fn[-1]:.2f} Hz)")

        coeffs = self.srs_coefficients(fn, params.damping_ratio, accel_signal.dt, diagnostics)
        extrema = self.simulate_response(accel_signal.samples, coeffs)
        peaks, pos, neg = self.reduce_peaks(extrema)

        return SRSResult(
            frequencies=fn,
            peaks=peaks,
            positive_peaks=pos,
            negative_peaks=neg,
            damping_ratio=params.damping_ratio,
            octave_code=params.octave_code,
            sample_rate=accel_signal.sample_rate,
            diagnostics=tuple(diagnostics),
        )

    @staticmethod
    def _warn(message: str, diagnostics: Optional[List[str]]):
        """Issue a recoverable warning and keep it for the result."""
        if diagnostics is not None:
            diagnostics.append(message)
        warnings.warn(message, SRSWarning, stacklevel=3)

    def _validate_inputs(self, accel: np.ndarray, sample_rate: float,
                         start_frequency: float, damping_ratio: float,
                         octave_code: int, diagnostics: List[str]) -> float:
        """Validate input parameters and return the damping ratio to use."""

        if len(accel) == 0:
            raise EmptyInputError("Input acceleration data cannot be empty")

        if not np.isfinite(sample_rate) or sample_rate <= 0:
            raise InvalidSampleRateError("Sampling frequency must be positive")

        if not np.isfinite(start_frequency) or start_frequency <= 0:
            raise InvalidStartFrequencyError("Starting frequency must be positive")

        if np.isnan(damping_ratio):
            self._warn("Damping ratio is not a number. "
                       "Every channel response will be set to 0.", diagnostics)
        elif damping_ratio <= 0:
            self._warn(f"Damping ratio ({damping_ratio:.6f}) <= 0. "
                       f"A very small positive value ({MIN_DAMPING_RATIO:g}) will be used.",
                       diagnostics)
            damping_ratio = MIN_DAMPING_RATIO

        if octave_code not in self.octave_options:
            raise InvalidOctaveCodeError("Octave code must be 1, 2, 3, or 4")

        return float(damping_ratio)

    def build_frequency_grid(self, start_frequency: float, sample_rate: float,
                             octave_code: int = DEFAULT_OCTAVE_CODE,
                             diagnostics: Optional[List[str]] = None) -> np.ndarray:
        """
        Build the fractional octave natural frequency grid.

        Frequencies are start_frequency * 2**(j * fraction) for j = 0, 1, ...
        The grid stops before the first step above sample_rate/8. The start
        frequency is always kept unless it is at or above Nyquist.

        Parameters:
        -----------
        start_frequency : float
            First natural frequency (Hz)
        sample_rate : float
            Sample rate (Hz)
        octave_code : int
            1, 2, 3, 4 for 1/3, 1/6, 1/12, 1/24 octave spacing
        diagnostics : list, optional
            Collects the warning messages issued

        Returns:
        --------
        np.ndarray
            Strictly increasing natural frequencies (Hz)
        """
        if octave_code not in self.octave_options:
            raise InvalidOctaveCodeError("Octave code must be 1, 2, 3, or 4")

        scc = self.octave_options[octave_code]
        nyquist_freq = sample_rate / 2.0
        max_analysis_freq = sample_rate / 8.0

        fn = []
        if start_frequency < nyquist_freq:
            fn.append(float(start_frequency))

        j = 1
        while fn:
            next_fn = fn[0] * 2.0**(j * scc)
            if next_fn > max_analysis_freq:
                break
            if next_fn >= nyquist_freq:
                self._warn(f"Calculated frequency ({next_fn:.6f} Hz) is approaching or exceeds "
                           f"the Nyquist frequency ({nyquist_freq:.6f} Hz). "
                           f"Analysis stopped at {fn[-1]:.6f} Hz.", diagnostics)
                break
            fn.append(next_fn)
            j += 1

        if not fn:
            raise EmptyFrequencyGridError(
                f"No valid frequencies found for analysis: starting frequency "
                f"{start_frequency} Hz is not below the Nyquist frequency {nyquist_freq} Hz")

        return np.array(fn)

    def srs_coefficients(self, freq: np.ndarray, damp: float, dt: float,
                         diagnostics: Optional[List[str]] = None) -> Tuple[np.ndarray, ...]:
        """
        Calculate SRS filter coefficients using Smallwood algorithm.

        A channel whose frequency is numerically zero, or whose damping ratio
        leaves no real damped frequency (damp >= 1 or NaN), gets all five
        coefficients set to zero and therefore a zero response.

        Parameters:
        -----------
        freq : np.ndarray
            Natural frequencies (Hz)
        damp : float
            Damping ratio
        dt : float
            Time step (seconds)
        diagnostics : list, optional
            Collects the warning messages issued

        Returns:
        --------
        Tuple of coefficient arrays: (a1, a2, b1, b2, b3)
        """
        freq = np.asarray(freq, dtype=float)
        num_freq = len(freq)
        a1 = np.zeros(num_freq)
        a2 = np.zeros(num_freq)
        b1 = np.zeros(num_freq)
        b2 = np.zeros(num_freq)
        b3 = np.zeros(num_freq)

        radicand = 1.0 - damp**2
        no_damped_freq = not np.isfinite(radicand) or radicand <= 0

        if self.fast_mode:
            omega = self.tpi * freq
            degenerate = (np.abs(omega) < 1e-10) | no_damped_freq
            for f in freq[degenerate]:
                self._warn_degenerate(f, diagnostics)

            ok = ~degenerate
            if not np.any(ok):
                return a1, a2, b1, b2, b3

            omega = omega[ok]
            omegad = omega * np.sqrt(radicand)

            E = np.exp(-damp * omega * dt)
            K = omegad * dt
            C = E * np.cos(K)
            S = E * np.sin(K)

            # Sp -> E as K -> 0
            small = np.abs(K) < 1e-9
            Sp = np.divide(S, K, out=E.copy(), where=~small)

            a1[ok] = 2.0 * C
            a2[ok] = -(E**2)
            b1[ok] = 1.0 - Sp
            b2[ok] = 2.0 * (Sp - C)
            b3[ok] = (E**2) - Sp

        else:
            for j in range(num_freq):
                omega = self.tpi * freq[j]
                if abs(omega) < 1e-10 or no_damped_freq:
                    self._warn_degenerate(freq[j], diagnostics)
                    continue
                omegad = omega * np.sqrt(radicand)

                E = np.exp(-damp * omega * dt)
                K = omegad * dt
                C = E * np.cos(K)
                S = E * np.sin(K)

                if abs(K) < 1e-9:
                    Sp = E
                else:
                    Sp = S / K

                a1[j] = 2.0 * C
                a2[j] = -(E**2)
                b1[j] = 1.0 - Sp
                b2[j] = 2.0 * (Sp - C)
                b3[j] = (E**2) - Sp

        return a1, a2, b1, b2, b3

    def _warn_degenerate(self, f: float, diagnostics: Optional[List[str]]):
        self._warn(f"Issue in computing coefficients for frequency {f:.6f} Hz. "
                   f"Response will be set to 0.", diagnostics)

    def simulate_response(self, accel: np.ndarray,
                          coeffs: Tuple[np.ndarray, ...]) -> ChannelExtrema:
        """
        Run every SDOF filter over the signal and track response extrema.

        NaN responses are not recorded; once a channel's response turns NaN
        its extrema stay at the values reached before.

        Parameters:
        -----------
        accel : np.ndarray
            Acceleration samples in time order
        coeffs : tuple
            (a1, a2, b1, b2, b3) arrays, one entry per channel

        Returns:
        --------
        ChannelExtrema
            Per-channel maximum and minimum response.
        """
        accel = np.asarray(accel, dtype=float)
        a1, a2, b1, b2, b3 = coeffs
        nspec = len(a1)

        xmax = np.full(nspec, -EXTREMUM_SENTINEL)
        xmin = np.full(nspec, EXTREMUM_SENTINEL)
        updated = np.zeros(nspec, dtype=bool)

        if len(accel) == 0 or nspec == 0:
            return ChannelExtrema(xmax, xmin, updated)

        if self.fast_mode:
            # Channels are independent; lfilter runs the same recursion from rest
            forward = np.column_stack([b1, b2, b3])
            back = np.column_stack([np.ones(nspec), -a1, -a2])
            for k in range(nspec):
                resp = lfilter(forward[k], back[k], accel)
                resp = resp[~np.isnan(resp)]
                if resp.size:
                    xmax[k] = max(xmax[k], np.max(resp))
                    xmin[k] = min(xmin[k], np.min(resp))
                    updated[k] = True
        else:
            x = np.zeros(nspec)
            xb = np.zeros(nspec)
            xbb = np.zeros(nspec)
            term = np.empty(nspec)
            seen = np.empty(nspec, dtype=bool)
            yb = 0.0
            ybb = 0.0

            for yy in accel:
                np.multiply(a1, xb, out=x)
                np.multiply(a2, xbb, out=term)
                x += term
                np.multiply(b1, yy, out=term)
                x += term
                np.multiply(b2, yb, out=term)
                x += term
                np.multiply(b3, ybb, out=term)
                x += term

                np.fmax(xmax, x, out=xmax)
                np.fmin(xmin, x, out=xmin)
                np.isnan(x, out=seen)
                np.logical_not(seen, out=seen)
                np.logical_or(updated, seen, out=updated)

                xbb[:] = xb
                xb[:] = x
                ybb = yb
                yb = yy

        return ChannelExtrema(xmax, xmin, updated)

    def reduce_peaks(self, extrema: ChannelExtrema) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Reduce channel extrema to one non-negative peak per channel.

        Returns:
        --------
        Tuple (peaks, positive_peaks, negative_peaks)
            peaks is the larger of max and |min|. A channel that was never
            updated reports 0.
        """
        nspec = len(extrema)
        peaks = np.zeros(nspec)
        pos = np.zeros(nspec)
        neg = np.zeros(nspec)

        for k in range(nspec):
            has_max = extrema.updated[k] and extrema.xmax[k] > -SENTINEL_LIMIT
            has_min = extrema.updated[k] and extrema.xmin[k] < SENTINEL_LIMIT

            if has_max:
                pos[k] = extrema.xmax[k]
            if has_min:
                neg[k] = abs(extrema.xmin[k])

            if not has_max and not has_min:
                peaks[k] = 0.0
            elif not has_max:
                peaks[k] = neg[k]
            elif not has_min:
                peaks[k] = pos[k]
            else:
                peaks[k] = pos[k] if pos[k] > neg[k] else neg[k]

        return peaks, pos, neg


def compute_srs(signal: np.ndarray,
                sample_rate: float,
                start_frequency: float = DEFAULT_START_FREQUENCY,
                damping_ratio: float = DEFAULT_DAMPING_RATIO,
                octave_code: int = DEFAULT_OCTAVE_CODE,
                fast_mode: bool = True,
                verbose: bool = False) -> SRSResult:
    """
    Convenience function to compute a shock response spectrum.

    Parameters:
    -----------
    signal : array_like
        Acceleration samples (G)
    sample_rate : float
        Sample rate (Hz)
    start_frequency : float, default=100.0
        First natural frequency (Hz)
    damping_ratio : float, default=0.05
        Damping ratio of the oscillators
    octave_code : int, default=3
        1, 2, 3, 4 for 1/3, 1/6, 1/12, 1/24 octave spacing
    fast_mode : bool, default=True
        Use scipy.signal.lfilter per channel instead of the explicit recursion
    verbose : bool, default=False
        Print progress information

    Returns:
    --------
    SRSResult

    Example:
    --------
    >>> import numpy as np
    >>> t = np.arange(10000) / 2000.0
    >>> result = compute_srs(np.sin(2 * np.pi * 100.0 * t), 2000.0)
    >>> result.peak_frequency
    100.0
    """

    calculator = SRSCalculator(fast_mode=fast_mode, verbose=verbose)
    return calculator.compute_srs(signal, sample_rate, start_frequency,
                                  damping_ratio, octave_code)
