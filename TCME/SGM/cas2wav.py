#!/usr/bin/env python3
# =============================================================================
# cas2wav.py - .cas image → tape WAV
# =============================================================================
#
# Usage:
#   python -m TCME.SGM.cas2wav [-2] [-s seconds] <ifile> <ofile>
#   cas2wav game.cas game.wav
#
# The WAV is always 43200 Hz, 8-bit unsigned, mono - suitable for recording
# onto a real cassette or loading in an emulator that plays tape audio.
# =============================================================================

from __future__ import annotations
import sys
import argparse
import logging

from TCME.SMM.constants import OUTPUT_SAMPLE_RATE
from TCME.SMM.config import EncoderConfig
from TCME.errors import TapeIOError
from TCME.SGM.block_writer import encode_cas_file


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="cas2wav",
        description="Convert an MSX .cas image to a tape WAV file",
    )
    parser.add_argument(
        "-2", dest="baud_2400", action="store_true",
        help="use 2400 baud as output baudrate",
    )
    parser.add_argument(
        "-s", dest="seconds", type=float, default=None,
        help="gap time in seconds before each file (default 2)",
    )
    parser.add_argument("ifile", help="Path to .cas image")
    parser.add_argument("ofile", help="Path to output WAV")
    args = parser.parse_args()

    config = EncoderConfig(
        baudrate=2400 if args.baud_2400 else 1200,
        gap_seconds=args.seconds,
    )
    try:
        config.validated()
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    print(f"Writing {args.ofile} ({OUTPUT_SAMPLE_RATE} Hz, 8-bits, mono, "
          f"{config.baudrate} baud)...")
    try:
        samples = encode_cas_file(args.ifile, args.ofile, config)
    except TapeIOError as e:
        print(f"{parser.prog}: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"All done... {samples / OUTPUT_SAMPLE_RATE:.1f} s of audio")


if __name__ == "__main__":
    main()
