#!/usr/bin/env python3
"""
Command line front end: read an acceleration file, compute and print its SRS.
"""

import argparse
import sys

from .exceptions import SRSError
from .io import format_results, load_signal, plot_srs, timed, write_results
from .spectrum import (
    DEFAULT_DAMPING_RATIO,
    DEFAULT_OCTAVE_CODE,
    DEFAULT_START_FREQUENCY,
    compute_srs,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Compute the shock response spectrum of an acceleration time history.')
    parser.add_argument('filename', nargs='?',
                        help='Text file with one acceleration value (G) per line')
    parser.add_argument('-s', '--sample-rate', type=float, default=None,
                        help='Sampling frequency of the data (Hz)')
    parser.add_argument('-f', '--start-frequency', type=float, default=DEFAULT_START_FREQUENCY,
                        help='First natural frequency (Hz) (default: %(default)s)')
    parser.add_argument('-d', '--damping', type=float, default=DEFAULT_DAMPING_RATIO,
                        help='Damping ratio (default: %(default)s)')
    parser.add_argument('--octave', type=int, default=DEFAULT_OCTAVE_CODE,
                        help='Octave spacing: 1=1/3, 2=1/6, 3=1/12, 4=1/24 (default: %(default)s)')
    parser.add_argument('--no-fast', dest='fast_mode', action='store_false',
                        help='Use the explicit sample-by-sample recursion')
    parser.add_argument('--output', default=None,
                        help='Also save the frequency/peak table to this file')
    parser.add_argument('--plot', action='store_true',
                        help='Show a log-log plot of the spectrum (requires matplotlib)')
    return parser


def _prompt(message: str) -> str:
    try:
        return input(message).strip()
    except EOFError:
        return ''


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    filename = args.filename
    if not filename:
        filename = _prompt("Please enter the name of the .txt file that contains the acceleration data: ")
        if not filename:
            print("File name could not be read.", file=sys.stderr)
            return 1

    sample_rate = args.sample_rate
    if sample_rate is None:
        text = _prompt("Please enter the sampling frequency of the data (Hz) (e.g., 2000.0): ")
        try:
            sample_rate = float(text)
        except ValueError:
            print("Sampling frequency could not be read.", file=sys.stderr)
            return 1

    print(f"Reading file: {filename}...")
    try:
        accel = load_signal(filename)
    except (OSError, SRSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"{len(accel)} data points were successfully read from the file.")

    try:
        result, elapsed_ms = timed(compute_srs, accel, sample_rate,
                                   start_frequency=args.start_frequency,
                                   damping_ratio=args.damping,
                                   octave_code=args.octave,
                                   fast_mode=args.fast_mode)
    except SRSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"\nSRS calculation completed in {elapsed_ms:.0f} ms.\n")
    print("SRS Calculation Results:")
    print(format_results(result))

    if args.output:
        write_results(result, args.output)
        print(f"\nResults saved to: {args.output}")

    if args.plot:
        import matplotlib.pyplot as plt
        plot_srs(result, title=filename)
        plt.show()

    return 0


if __name__ == "__main__":
    sys.exit(main())
