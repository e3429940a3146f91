#!/usr/bin/env python3
# =============================================================================
# wav2cas.py - Tape recording → .cas image
# =============================================================================
#
# Usage:
#   python -m TCME.SRM.wav2cas [-n] [-p] [-w window] [-t threshold]
#                              [-e envelope] <ifile> <ofile>
#   wav2cas tape.wav game.cas
#
# Tuning a difficult recording:
#   -t   raise the threshold if tape hiss is read as pulses,
#        lower it for very quiet recordings (or use -n)
#   -w   widen the window if LONG pulses are misread as SHORT
#   -e   more envelope passes smooth noisier signals; 0 disables
#   -p   if nothing decodes, the recording may have the other polarity
# =============================================================================

from __future__ import annotations
import sys
import argparse
import logging

from TCME.SMM.config import DecoderConfig
from TCME.SMM.constants import DEFAULT_THRESHOLD, DEFAULT_WINDOW, DEFAULT_ENVELOPE
from TCME.errors import TapeIOError
from TCME.SRM.fsk_decoder import decode_wav_file, HEADER_TONE


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="wav2cas",
        description="Convert an MSX tape recording (WAV) to a .cas image",
    )
    parser.add_argument(
        "-n", dest="normalize", action="store_true",
        help="normalize amplitude level",
    )
    parser.add_argument(
        "-p", dest="phase", action="store_false",
        help="do not phase shift (invert) the signal",
    )
    parser.add_argument(
        "-w", dest="window", type=float, default=DEFAULT_WINDOW,
        help=f"window factor (default: {DEFAULT_WINDOW})",
    )
    parser.add_argument(
        "-t", dest="threshold", type=int, default=DEFAULT_THRESHOLD,
        help=f"amplitude threshold (default: {DEFAULT_THRESHOLD})",
    )
    parser.add_argument(
        "-e", dest="envelope", type=int, default=DEFAULT_ENVELOPE,
        help=f"level of envelope correction (default: {DEFAULT_ENVELOPE})",
    )
    parser.add_argument("ifile", help="Path to WAV recording")
    parser.add_argument("ofile", help="Path to output .cas image")
    args = parser.parse_args()

    config = DecoderConfig(
        threshold=args.threshold,
        window=args.window,
        envelope=args.envelope,
        normalize=args.normalize,
        phase=args.phase,
    )
    try:
        config.validated()
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    print("Decoding audio data...")
    try:
        result = decode_wav_file(args.ifile, args.ofile, config, on_event=print)
    except TapeIOError as e:
        print(f"{parser.prog}: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"All done... {result.count(HEADER_TONE)} header(s), "
          f"{len(result.cas)} bytes written")


if __name__ == "__main__":
    main()
