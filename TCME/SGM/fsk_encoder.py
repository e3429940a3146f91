# =============================================================================
# fsk_encoder.py - MSX Frequency-Shift-Keying (FSK) Pulse Encoder
# =============================================================================
#
# Converts bytes into unsigned 8-bit PCM samples using the MSX cassette
# encoding.  Every symbol is built from whole sine cycles ("pulses"):
#
#   LONG pulse  : one cycle at the baud frequency       (1200 Hz @ 1200 baud)
#   SHORT pulse : one cycle at twice the baud frequency (2400 Hz @ 1200 baud)
#
# SERIAL FRAME (one byte, lsb first):
#   start bit : 1 LONG pulse
#   data bit 0: 1 LONG pulse
#   data bit 1: 2 SHORT pulses
#   stop bits : 4 SHORT pulses
#
# Every data bit therefore lasts exactly one LONG period, which makes a byte
# a fixed 11 bit periods long:
#
#   43200 Hz / 1200 baud → LONG = 36 samples, SHORT = 18, byte = 396 samples
#   43200 Hz / 2400 baud → LONG = 18 samples, SHORT =  9, byte = 198 samples
#
# Each pulse starts at the zero level on a rising edge and ends one sample
# before the next zero, so consecutive pulses are phase-continuous.

from __future__ import annotations

import numpy as np

from TCME.SMM.constants import (
    OUTPUT_SAMPLE_RATE, BASE_BAUDRATE,
    LONG_PULSE, SHORT_PULSE,
    SILENCE_LEVEL, PULSE_AMPLITUDE,
    DATA_BITS, STOP_PULSES,
)


class FSKEncoder:
    """
    Stateless-per-call FSK encoder with cached pulse tables.

    Usage:
        enc = FSKEncoder(baudrate=1200)
        pcm = enc.encode_byte(0x55)            # 396 unsigned 8-bit samples
        pcm += enc.encode_silence(43200)       # one second of silence
    """

    def __init__(self, baudrate: int = BASE_BAUDRATE,
                 sample_rate: int = OUTPUT_SAMPLE_RATE) -> None:
        self.baudrate    = baudrate
        self.sample_rate = sample_rate

        # Pre-rendered single cycles - every symbol is a concatenation of these
        self._long  = self.encode_pulse(LONG_PULSE)
        self._short = self.encode_pulse(SHORT_PULSE)

    # ── Primitives ──────────────────────────────────────────────────────────

    def pulse_length(self, freq: int) -> float:
        """Nominal pulse length in samples (may be fractional)."""
        return self.sample_rate / (self.baudrate * (freq // BASE_BAUDRATE))

    def encode_pulse(self, freq: int) -> bytes:
        """
        Render one sine cycle of a LONG_PULSE or SHORT_PULSE.

        Args:
            freq: LONG_PULSE or SHORT_PULSE (nominal frequency at 1200 baud).

        Returns:
            int(length) unsigned samples, round(sin(2πn/length)·127) ^ 0x80.
        """
        length = self.pulse_length(freq)
        n      = np.arange(int(length))
        wave   = np.round(np.sin(n * (2.0 * np.pi / length)) * PULSE_AMPLITUDE)
        # XOR 0x80 on a two's complement byte == offset by 128
        return (wave.astype(np.int16) + SILENCE_LEVEL).astype(np.uint8).tobytes()

    def encode_silence(self, samples: int) -> bytes:
        """`samples` samples at the centre level (zero amplitude)."""
        return bytes((SILENCE_LEVEL,)) * max(int(samples), 0)

    def encode_header(self, pulses: int) -> bytes:
        """
        Render a header tone of `pulses` SHORT pulses, scaled by baudrate/1200
        so that the tone duration does not depend on the baud rate.
        """
        return self._short * (pulses * (self.baudrate // BASE_BAUDRATE))

    # ── Serial frame ────────────────────────────────────────────────────────

    def encode_byte(self, value: int) -> bytes:
        """
        Encode one byte as a complete serial frame.

        Args:
            value: Integer 0-255, transmitted lsb first.

        Returns:
            Unsigned 8-bit PCM samples for start bit, 8 data bits, stop bits.
        """
        out = bytearray(self._long)                  # start bit
        for bit in range(DATA_BITS):
            if (value >> bit) & 1:
                out += self._short
                out += self._short
            else:
                out += self._long
        out += self._short * STOP_PULSES
        return bytes(out)

    def encode_bytes(self, data: bytes) -> bytes:
        """Encode a run of bytes back to back with no gaps."""
        return b"".join(self.encode_byte(b) for b in data)
