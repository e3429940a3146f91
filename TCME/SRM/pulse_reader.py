# =============================================================================
# pulse_reader.py - Pulse-Width Primitives for Tape Decoding
# =============================================================================
#
# The tape signal carries no clock.  Everything is recovered from the width
# of individual pulses (one oscillation each), measured in samples and
# compared against the average SHORT pulse width learnt from the header tone
# that precedes every data block.
#
# Pulse measurement model
# -----------------------
# The scanner keeps a running min/max envelope and the last confirmed peak
# `pt`.  A pulse is complete at the first trough → ascent inflection whose
# swing (pt - min) reaches the amplitude threshold.  The boundary is then
# moved back to the point where the descending edge crossed the half-swing
# level, so consecutive pulses are measured edge to edge:
#
#        pt ─┐    ┌─┐    ┌─
#            │    │ │    │
#   half ─ ─ ┼ ─ ─┼─┼ ─ ─┼─   ← boundaries sit on falling half-swing crossings
#            │    │ │    │
#       min  └────┘ └────┘
#
# Because only swings are compared, slow DC drift and a small level
# asymmetry do not affect the result.
#
# Cursor model
# ------------
# PulseReader owns an integer cursor `pos` into an immutable sample list.
# It only moves forward, except for two bounded rewinds: the half-swing
# correction inside measure_pulse (never past the pulse start) and the
# single-pulse rewind of skip_header.
# =============================================================================

from __future__ import annotations
from typing import Optional, Sequence

from TCME.SMM.constants import (
    THRESHOLD_SILENCE, THRESHOLD_HEADER,
    DEFAULT_THRESHOLD, DEFAULT_WINDOW,
    DATA_BITS, STOP_PULSES,
)

_LOW_INIT  =  1000     # outside any 8-bit amplitude
_HIGH_INIT = -1000


def measure_pulse(samples: Sequence[int], pos: int, threshold: int) -> tuple[int, int]:
    """
    Measure the pulse starting at `pos`.

    Returns
    -------
    width : int - pulse width in samples (the remaining length if the buffer
                  ends before a complete pulse)
    end   : int - index just past the pulse, i.e. pos + width
    """
    size  = len(samples)
    low   = _LOW_INIT
    high  = _HIGH_INIT
    peak  = _HIGH_INIT
    prev  = samples[pos - 1] if pos > 0 else 0
    width = 0
    i     = pos

    while i < size:
        cur = samples[i]

        if cur > prev:                          # ascending
            if prev == low:
                if peak - low >= threshold:
                    # back up to the falling half-swing crossing
                    half = peak - (peak - low) // 2
                    while width > 1 and samples[i] < half:
                        width -= 1
                        i     -= 1
                    return width, i
                low = _LOW_INIT
            if cur > high:
                high = cur

        elif cur < prev:                        # descending
            if prev == high:
                if high > peak:
                    peak = high
                high = _HIGH_INIT
            if cur < low:
                low = cur

        prev   = cur
        i     += 1
        width += 1

    return width, i


class PulseReader:
    """
    Cursor over a decode buffer exposing the detection primitives.

    Parameters
    ----------
    samples   : list[int] - signed 8-bit amplitudes (after preprocessing)
    threshold : int       - amplitude band for silence and minimum swing
    window    : float     - pulses wider than average*window are LONG
    pos       : int       - initial cursor
    """

    def __init__(
        self,
        samples: Sequence[int],
        threshold: int = DEFAULT_THRESHOLD,
        window: float = DEFAULT_WINDOW,
        pos: int = 0,
    ):
        self.samples   = samples
        self.size      = len(samples)
        self.threshold = threshold
        self.window    = window
        self.pos       = pos

    # ------------------------------------------------------------------
    # Silence
    # ------------------------------------------------------------------

    def is_silence(self, pos: Optional[int] = None) -> bool:
        """
        True if the next THRESHOLD_SILENCE samples (fewer at the end of the
        buffer) all lie within [-threshold, threshold].  Never moves the
        cursor.
        """
        start = self.pos if pos is None else pos
        thr   = self.threshold
        for s in self.samples[start:start + THRESHOLD_SILENCE]:
            if s > thr or s < -thr:
                return False
        return True

    def skip_silence(self) -> int:
        """Advance past samples within the threshold band; return new pos."""
        samples, size, thr = self.samples, self.size, self.threshold
        i = self.pos
        while i < size and -thr <= samples[i] <= thr:
            i += 1
        self.pos = i
        return i

    # ------------------------------------------------------------------
    # Pulses
    # ------------------------------------------------------------------

    def pulse_width(self) -> int:
        """Measure the pulse at the cursor and move the cursor past it."""
        width, self.pos = measure_pulse(self.samples, self.pos, self.threshold)
        return width

    def rewind(self, count: int) -> None:
        """Move the cursor back `count` samples (never before the start)."""
        if count < 0:
            raise ValueError(f"rewind count must be >= 0, got {count}")
        self.pos = max(self.pos - count, 0)

    # ------------------------------------------------------------------
    # Header tone
    # ------------------------------------------------------------------

    def is_header(self) -> bool:
        """
        Probe whether a header tone starts at the cursor, without moving it.

        One pulse is discarded first (the cursor may sit mid-cycle).  Then up
        to THRESHOLD_HEADER pulses are measured; the probe fails as soon as a
        pulse is wider than `biggest * window`, biggest being the widest
        pulse seen so far.
        """
        samples, size, thr = self.samples, self.size, self.threshold
        _, pos  = measure_pulse(samples, self.pos, thr)
        pulses  = 0
        biggest = 0

        while pos < size and pulses < THRESHOLD_HEADER:
            width, pos = measure_pulse(samples, pos, thr)
            if not biggest:
                biggest = width
            if width > biggest * self.window:
                return False
            if width > biggest:
                biggest = width
            pulses += 1

        return pulses >= THRESHOLD_HEADER

    def skip_header(self) -> float:
        """
        Consume a header tone and return the average SHORT pulse width.

        Stops at the first pulse wider than average*window (the start bit of
        the first byte) and rewinds over it, leaving the cursor at the start
        of the data block.
        """
        self.pulse_width()
        count   = 0
        average = 0.0

        while self.pos < self.size:
            width = self.pulse_width()
            if average and width > average * self.window:
                self.rewind(width)
                return average
            count  += 1
            average = ((count - 1) * average + width) / count

        return average

    # ------------------------------------------------------------------
    # Serial frame
    # ------------------------------------------------------------------

    def read_byte(self, average: float) -> Optional[int]:
        """
        Decode one serial frame at the cursor.

        Returns the byte value, or None when the frame does not fit: a SHORT
        start pulse, or silence after any start/data pulse - which is how a
        data block ends.
        """
        limit = average * self.window

        # start bit (one LONG pulse)
        width = self.pulse_width()
        if self.is_silence() or width < limit:
            return None

        # data bits, lsb first
        value = 0
        for bit in range(DATA_BITS):
            width = self.pulse_width()
            if self.is_silence():
                return None
            if width < limit:
                value |= 1 << bit
                self.pulse_width()              # second SHORT pulse of a 1
                if self.is_silence():
                    return None

        # stop bits (four SHORT pulses, class not checked)
        for _ in range(STOP_PULSES - 1):
            self.pulse_width()
            if self.is_silence():
                return None
        self.pulse_width()

        return value
