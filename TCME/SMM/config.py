# =============================================================================
# config.py - Encoder / Decoder Configuration
# =============================================================================
#
# Both configurations are immutable NamedTuples passed explicitly into the
# codec entry points.  Defaults match the command-line defaults of the
# cas2wav / wav2cas tools.
# =============================================================================

from __future__ import annotations
from typing import NamedTuple, Optional

from TCME.SMM.constants import (
    BAUDRATES, BASE_BAUDRATE,
    DEFAULT_THRESHOLD, DEFAULT_WINDOW, DEFAULT_ENVELOPE,
)


class EncoderConfig(NamedTuple):
    baudrate:    int             = BASE_BAUDRATE   # 1200 or 2400
    gap_seconds: Optional[float] = None            # silence before each file

    def validated(self) -> "EncoderConfig":
        if self.baudrate not in BAUDRATES:
            raise ValueError(
                f"baudrate must be one of {BAUDRATES}, got {self.baudrate!r}"
            )
        if self.gap_seconds is not None and self.gap_seconds < 0:
            raise ValueError(f"gap_seconds must be >= 0, got {self.gap_seconds!r}")
        return self


class DecoderConfig(NamedTuple):
    threshold: int   = DEFAULT_THRESHOLD   # amplitude band
    window:    float = DEFAULT_WINDOW      # pulse class tolerance factor
    envelope:  int   = DEFAULT_ENVELOPE    # envelope correction passes
    normalize: bool  = False               # scale to full amplitude first
    phase:     bool  = True                # invert polarity while reading

    def validated(self) -> "DecoderConfig":
        if self.threshold < 1:
            raise ValueError(f"threshold must be >= 1, got {self.threshold!r}")
        if self.window < 1.0:
            raise ValueError(f"window must be >= 1.0, got {self.window!r}")
        if self.envelope < 0:
            raise ValueError(f"envelope must be >= 0, got {self.envelope!r}")
        return self
