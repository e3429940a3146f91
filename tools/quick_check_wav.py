"""
Quick numeric checker for a tape recording before running wav2cas.
Usage: python tools/quick_check_wav.py path/to/tape.wav [-p]

Prints level statistics per channel and a pulse-width histogram of the
channel wav2cas decodes, so a bad recording (too quiet, clipped, wrong
polarity) shows up before decoding.
"""
import sys
import os
import collections

import numpy as np
import soundfile as sf

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from TCME.SMM.constants import DEFAULT_THRESHOLD
from TCME.SRM.wav_reader import read_wav
from TCME.SRM.pulse_reader import measure_pulse

if len(sys.argv) < 2:
    print("Usage: python tools/quick_check_wav.py file.wav [-p]")
    raise SystemExit

f = sys.argv[1]
invert = "-p" not in sys.argv[2:]

data, sr = sf.read(f, always_2d=True)
n_ch = data.shape[1]
duration = data.shape[0] / sr

print("=" * 60)
print(f"File        : {f}")
print(f"Sample rate : {sr} Hz")
print(f"Channels    : {n_ch}")
print(f"Duration    : {duration:.2f} s")
print("=" * 60)

for i in range(n_ch):
    ch = data[:, i]
    peak = np.max(np.abs(ch))
    rms  = np.sqrt(np.mean(ch ** 2))
    dc   = np.mean(ch)
    flag = "  <-- DECODED" if i == n_ch - 1 else ""
    print(f"  Ch{i}: peak={peak:.3f}  rms={rms:.3f}  dc={dc:+.3f}{flag}")

audio   = read_wav(f, invert_phase=invert)
samples = audio.samples.tolist()
quiet   = np.count_nonzero(np.abs(audio.samples) <= DEFAULT_THRESHOLD)

print()
print(f"8-bit view: peak={int(np.max(np.abs(audio.samples)))}  "
      f"within threshold: {100.0 * quiet / max(len(samples), 1):.1f}%")

# Pulse-width histogram.  Clean tape shows two peaks: SHORT and LONG
# (18 / 36 samples at 1200 baud when recorded at 43200 Hz).
widths = collections.Counter()
pos = 0
while pos < len(samples):
    width, pos = measure_pulse(samples, pos, DEFAULT_THRESHOLD)
    if width < sr // 100:           # ignore silence-spanning pulses
        widths[width] += 1

print()
print("Pulse widths (samples : count):")
total = sum(widths.values())
for width, count in sorted(widths.items()):
    if count * 200 < total:
        continue
    print(f"  {width:4d} : {count:7d}  {'#' * min(50, count * 50 // max(total, 1))}")

if total == 0:
    print("  no pulses found - recording is silent or below threshold")

print("=" * 60)
print("EXPECTED: two clusters, LONG about twice SHORT")
