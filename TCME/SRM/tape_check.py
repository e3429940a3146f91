#!/usr/bin/env python3
# =============================================================================
# tape_check.py - CAS Round-Trip Tape Check
# =============================================================================
#
# Encodes a .cas image exactly as cas2wav would, feeds the audio straight
# back into the decoder (no file in between) and reports whether the image
# survives the trip byte for byte.  Use it to check decoder settings or a
# .cas image before committing it to tape.
#
# Usage:
#   python -m TCME.SRM.tape_check <image.cas>
#   python -m TCME.SRM.tape_check <image.cas> -2 -w 1.4
#
# Output sections:
#   [1] Image info      - size and directory listing
#   [2] Encode report   - baud rate, audio length
#   [3] Decode report   - headers, data blocks, bytes recovered
#   [4] VERDICT         - PASS / FAIL with the first mismatching offset
#
# =============================================================================

from __future__ import annotations
import sys
import argparse
import os
from typing import NamedTuple, Optional

from TCME.SMM.constants import OUTPUT_SAMPLE_RATE, DEFAULT_WINDOW, DEFAULT_THRESHOLD, DEFAULT_ENVELOPE
from TCME.SMM.config import EncoderConfig, DecoderConfig
from TCME.SMM.cas_directory import list_entries, format_entry
from TCME.SGM.block_writer import CasModulator
from TCME.SRM.wav_reader import samples_from_pcm_u8
from TCME.SRM.fsk_decoder import decode_samples, DecodeResult, HEADER_TONE, DATA_BLOCK

DIVIDER = "=" * 68


class CheckResult(NamedTuple):
    passed:         bool
    audio_samples:  int
    decoded:        DecodeResult
    first_mismatch: Optional[int]   # byte offset, None if identical


def first_mismatch(expected: bytes, actual: bytes) -> Optional[int]:
    """Offset of the first differing byte, or None if both are equal."""
    for i, (a, b) in enumerate(zip(expected, actual)):
        if a != b:
            return i
    if len(expected) != len(actual):
        return min(len(expected), len(actual))
    return None


def round_trip(
    cas: bytes,
    encoder_config: EncoderConfig = EncoderConfig(),
    decoder_config: DecoderConfig = DecoderConfig(),
) -> CheckResult:
    """Encode `cas`, decode the audio again and compare."""
    pcm     = CasModulator(encoder_config).render(cas)
    samples = samples_from_pcm_u8(pcm, invert_phase=decoder_config.phase)
    decoded = decode_samples(samples, OUTPUT_SAMPLE_RATE, decoder_config)
    where   = first_mismatch(cas, decoded.cas)
    return CheckResult(
        passed=where is None,
        audio_samples=len(pcm),
        decoded=decoded,
        first_mismatch=where,
    )


def run_check(cas_path: str, encoder_config: EncoderConfig,
              decoder_config: DecoderConfig) -> bool:
    """
    Run the round trip on one .cas file and print the report.
    Returns True if the decoded image is identical to the input.
    """
    print(f"\n{DIVIDER}")
    print("  CAS Tape Round-Trip Check")
    print(DIVIDER)

    try:
        with open(cas_path, "rb") as f:
            cas = f.read()
    except OSError as e:
        print(f"  [!!] Failed opening {cas_path}: {e.strerror}")
        return False

    # -----------------------------------------------------------------------
    # [1] Image info
    # -----------------------------------------------------------------------
    print(f"  File     : {os.path.basename(cas_path)}")
    print(f"  Size     : {len(cas):,} bytes")
    entries = list_entries(cas)
    if not entries:
        print("  Contents : (no files found)")
    for e in entries:
        print(f"             {format_entry(e)}")

    # -----------------------------------------------------------------------
    # [2] + [3] Encode / decode
    # -----------------------------------------------------------------------
    result = round_trip(cas, encoder_config, decoder_config)
    dec    = result.decoded

    print("\n  -- Encode Report --")
    print(f"  Baud rate         : {encoder_config.baudrate}")
    print(f"  Audio             : {result.audio_samples / OUTPUT_SAMPLE_RATE:.1f} s "
          f"({result.audio_samples:,} samples at {OUTPUT_SAMPLE_RATE} Hz)")

    print("\n  -- Decode Report --")
    print(f"  Window / threshold: {decoder_config.window} / {decoder_config.threshold}")
    print(f"  Envelope passes   : {decoder_config.envelope}")
    print(f"  Headers detected  : {dec.count(HEADER_TONE)}")
    print(f"  Data blocks       : {dec.count(DATA_BLOCK)}")
    print(f"  Bytes recovered   : {len(dec.cas):,} / {len(cas):,}")

    # -----------------------------------------------------------------------
    # [4] Verdict
    # -----------------------------------------------------------------------
    print(f"\n{DIVIDER}")
    if result.passed:
        print("  VERDICT: PASS - decoded image is identical")
    else:
        print(f"  VERDICT: FAIL - first difference at offset "
              f"{result.first_mismatch:#06x}")
    print(f"{DIVIDER}\n")

    return result.passed


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------
def main() -> None:
    parser = argparse.ArgumentParser(
        prog="tape-check",
        description="Encode a .cas image to tape audio and decode it again",
    )
    parser.add_argument("cas", help="Path to .cas image")
    parser.add_argument(
        "-2", dest="baud_2400", action="store_true",
        help="encode at 2400 baud",
    )
    parser.add_argument(
        "-w", dest="window", type=float, default=DEFAULT_WINDOW,
        help=f"decoder window factor (default: {DEFAULT_WINDOW})",
    )
    parser.add_argument(
        "-t", dest="threshold", type=int, default=DEFAULT_THRESHOLD,
        help=f"decoder amplitude threshold (default: {DEFAULT_THRESHOLD})",
    )
    parser.add_argument(
        "-e", dest="envelope", type=int, default=DEFAULT_ENVELOPE,
        help=f"envelope correction passes (default: {DEFAULT_ENVELOPE})",
    )
    args = parser.parse_args()

    encoder_config = EncoderConfig(baudrate=2400 if args.baud_2400 else 1200)
    decoder_config = DecoderConfig(
        threshold=args.threshold, window=args.window, envelope=args.envelope,
    )
    try:
        decoder_config.validated()
    except ValueError as e:
        parser.error(str(e))

    ok = run_check(args.cas, encoder_config, decoder_config)
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
