#!/usr/bin/env python3
# =============================================================================
# validate.py - TCME Self-Validation Suite
# =============================================================================
#
# Run directly:  python -m TCME.SRM.validate
#             or python TCME/SRM/validate.py (from project root)
#
# Tests:
#   1. Constants integrity   - markers, tags, pulse lengths at both baud rates
#   2. FSK encoder           - pulse shapes, byte frame layout
#   3. Pulse primitives      - widths, silence, header probe
#   4. Round trip            - small ASCII and BINARY images survive the tape
# =============================================================================

import sys
import os

# Allow running from project root without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from TCME.SMM.constants import (
    HEADER, ASCII_TAG, BINARY_TAG, BASIC_TAG,
    OUTPUT_SAMPLE_RATE, LONG_PULSE, SHORT_PULSE, SILENCE_LEVEL,
    THRESHOLD_SILENCE,
)
from TCME.SMM.config import EncoderConfig
from TCME.SGM.fsk_encoder import FSKEncoder
from TCME.SRM.wav_reader import samples_from_pcm_u8
from TCME.SRM.pulse_reader import PulseReader, measure_pulse
from TCME.SRM.tape_check import round_trip

PASS = "[PASS]"
FAIL = "[FAIL]"
INFO = "[INFO]"

failures = 0

def check(label: str, condition: bool, detail: str = "") -> bool:
    global failures
    if condition:
        print(f"  {PASS} {label}")
    else:
        print(f"  {FAIL} {label}{(' -- ' + detail) if detail else ''}")
        failures += 1
    return condition


# =============================================================================
# TEST 1 - Constants Integrity
# =============================================================================
print("\n" + "="*60)
print("TEST 1 - Constants Integrity")
print("="*60)

check("HEADER is 8 bytes",            len(HEADER) == 8)
check("HEADER starts with 1F A6",     HEADER[:2] == b"\x1f\xa6")
check("Type tags are 10 bytes",
      all(len(t) == 10 for t in (ASCII_TAG, BINARY_TAG, BASIC_TAG)))
check("Type tags are distinct",
      len({ASCII_TAG, BINARY_TAG, BASIC_TAG}) == 3)

for baud, long_len, short_len in ((1200, 36, 18), (2400, 18, 9)):
    enc = FSKEncoder(baudrate=baud)
    check(f"{baud} baud: LONG pulse = {long_len} samples",
          enc.pulse_length(LONG_PULSE) == long_len,
          f"got {enc.pulse_length(LONG_PULSE)}")
    check(f"{baud} baud: SHORT pulse = {short_len} samples",
          enc.pulse_length(SHORT_PULSE) == short_len,
          f"got {enc.pulse_length(SHORT_PULSE)}")
    check(f"{baud} baud: pulse lengths are whole samples",
          OUTPUT_SAMPLE_RATE % (baud * 2) == 0)


# =============================================================================
# TEST 2 - FSK Encoder
# =============================================================================
print("\n" + "="*60)
print("TEST 2 - FSK Encoder")
print("="*60)

enc = FSKEncoder(baudrate=1200)

pulse = enc.encode_pulse(SHORT_PULSE)
check("SHORT pulse starts at centre level", pulse[0] == SILENCE_LEVEL)
check("SHORT pulse peaks at 128 + 125",     max(pulse) == 253,
      f"max = {max(pulse)}")
check("SHORT pulse is symmetric around 128",
      abs((max(pulse) - 128) - (128 - min(pulse))) <= 1,
      f"min={min(pulse)} max={max(pulse)}")

frame = enc.encode_byte(0x00)
check("Byte frame = 11 LONG periods (396 samples)", len(frame) == 396,
      f"got {len(frame)}")
check("Byte 0x00 and 0xFF have equal length",
      len(enc.encode_byte(0xFF)) == len(frame))
check("Silence is flat at 128",
      set(enc.encode_silence(100)) == {SILENCE_LEVEL})
check("SHORT header of 10 pulses = 180 samples",
      len(enc.encode_header(10)) == 180)


# =============================================================================
# TEST 3 - Pulse Primitives
# =============================================================================
print("\n" + "="*60)
print("TEST 3 - Pulse Primitives")
print("="*60)

samples = samples_from_pcm_u8(enc.encode_pulse(SHORT_PULSE) * 40).tolist()
width, end = measure_pulse(samples, 18, 5)
check("Clean SHORT pulse measures 18 samples", width == 18, f"got {width}")
check("Cursor ends on next pulse boundary",     end == 36, f"got {end}")

reader = PulseReader(samples)
check("Uniform pulse train is a header", reader.is_header())
check("Header probe does not move the cursor", reader.pos == 0)

quiet = [0] * THRESHOLD_SILENCE
check("Flat buffer is silence", PulseReader(quiet).is_silence())
quiet[50] = 6
check("One sample above threshold breaks silence",
      not PulseReader(quiet).is_silence())


# =============================================================================
# TEST 4 - Round Trip
# =============================================================================
print("\n" + "="*60)
print("TEST 4 - Round Trip")
print("="*60)

ascii_image = HEADER + ASCII_TAG + b"TEST  " + bytes((0x00, 0x01, 0x02, 0x1A))
result = round_trip(ascii_image, EncoderConfig(gap_seconds=0.1))
print(f"  {INFO} ASCII image: {len(ascii_image)} bytes, "
      f"{result.audio_samples:,} samples")
check("ASCII image survives the round trip", result.passed,
      f"first mismatch at {result.first_mismatch}")

binary_image = (
    HEADER + BINARY_TAG + b"GAME  "
    + HEADER + bytes((0x00, 0xC0, 0x07, 0xC0, 0x00, 0xC0, 0xC9, 0x00))
)
result = round_trip(binary_image, EncoderConfig(baudrate=2400, gap_seconds=0.1))
check("BINARY image survives the round trip at 2400 baud", result.passed,
      f"first mismatch at {result.first_mismatch}")


# =============================================================================
# Summary
# =============================================================================
print("\n" + "="*60)
if failures == 0:
    print(f"  ALL TESTS PASSED")
else:
    print(f"  {failures} TEST(S) FAILED")
print("="*60 + "\n")
sys.exit(0 if failures == 0 else 1)
