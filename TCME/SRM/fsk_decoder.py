#!/usr/bin/env python3
# =============================================================================
# fsk_decoder.py - Tape Audio → CAS Decoder
# =============================================================================
#
# Inverse of CasModulator.  Walks a preprocessed recording once, front to
# back, classifying each region as silence, header tone, data block or
# headerless noise:
#
#   silence    → skipped
#   header     → average SHORT pulse width measured, HEADER marker written
#   data block → bytes read until a frame fails or the signal goes silent
#   other      → skipped up to the next silence
#
# Output alignment:
#   HEADER markers start on 8-byte boundaries in a .cas image, so the output
#   is zero-padded before every marker.  A marker is written once per run of
#   header tones: a header followed directly by another header (no byte
#   decoded in between) does not produce a second marker.
#
# Nothing in here raises on bad audio.  A frame that does not decode ends
# the current data block and scanning resumes; progress is reported through
# DecodeEvent callbacks.
# =============================================================================

from __future__ import annotations
import logging
from typing import Callable, NamedTuple, Optional, Sequence

from TCME.SMM.constants import HEADER, BLOCK_ALIGN
from TCME.SMM.config import DecoderConfig
from TCME.errors import TapeIOError
from .pulse_reader import PulseReader
from .preprocess import preprocess
from .wav_reader import read_wav

logger = logging.getLogger(__name__)

# Event kinds
SILENCE     = "silence"
HEADER_TONE = "header"
DATA_BLOCK  = "data"
HEADERLESS  = "headerless"

EVENT_MESSAGES = {
    SILENCE:     "skipping silence",
    HEADER_TONE: "header detected",
    DATA_BLOCK:  "data block",
    HEADERLESS:  "skipping headerless data",
}


class DecodeEvent(NamedTuple):
    kind:        str    # SILENCE | HEADER_TONE | DATA_BLOCK | HEADERLESS
    sample_pos:  int    # cursor position when the event fired
    sample_rate: int

    @property
    def seconds(self) -> float:
        return self.sample_pos / self.sample_rate if self.sample_rate else 0.0

    def __str__(self) -> str:
        return f"[{self.seconds:.1f}] {EVENT_MESSAGES[self.kind]}"


class DecodeResult(NamedTuple):
    cas:    bytes
    events: list[DecodeEvent]

    def count(self, kind: str) -> int:
        return sum(1 for e in self.events if e.kind == kind)


class CasDemodulator:
    """
    Single-use decoder for one recording.

    Parameters
    ----------
    samples     : list[int] - preprocessed signed 8-bit amplitudes
    sample_rate : int       - only used to timestamp events
    config      : DecoderConfig - threshold / window are used here
    on_event    : optional callable receiving every DecodeEvent as it fires
    """

    def __init__(
        self,
        samples: Sequence[int],
        sample_rate: int,
        config: DecoderConfig = DecoderConfig(),
        on_event: Optional[Callable[[DecodeEvent], None]] = None,
    ):
        self.config      = config.validated()
        self.sample_rate = sample_rate
        self.reader      = PulseReader(samples, config.threshold, config.window)
        self.on_event    = on_event
        self._events: list[DecodeEvent] = []
        self._done = False

    def _emit(self, kind: str) -> None:
        event = DecodeEvent(kind, self.reader.pos, self.sample_rate)
        self._events.append(event)
        logger.debug("%s", event)
        if self.on_event is not None:
            self.on_event(event)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def decode(self) -> DecodeResult:
        """Run the decoder over the whole buffer.  Can only be called once."""
        if self._done:
            raise RuntimeError("CasDemodulator.decode() can only run once")
        self._done = True

        reader = self.reader
        size   = reader.size
        out    = bytearray()
        marker_pending = False      # marker written, no byte decoded yet

        # recordings usually start with some silence
        reader.skip_silence()

        while reader.pos < size:
            if reader.is_silence():
                self._emit(SILENCE)
                reader.skip_silence()
                if reader.pos >= size:
                    break

            if reader.is_header():
                self._emit(HEADER_TONE)
                average = reader.skip_header()

                if not marker_pending:
                    out.extend(bytes(-len(out) % BLOCK_ALIGN))
                    out.extend(HEADER)
                    marker_pending = True

                self._emit(DATA_BLOCK)
                while reader.pos < size and not reader.is_silence():
                    value = reader.read_byte(average)
                    if value is None:
                        break
                    out.append(value)
                    marker_pending = False

            else:
                self._emit(HEADERLESS)
                while reader.pos < size and not reader.is_silence():
                    reader.pos += 1

            reader.pos += 1

        return DecodeResult(cas=bytes(out), events=list(self._events))


def decode_samples(
    samples,
    sample_rate: int,
    config: DecoderConfig = DecoderConfig(),
    on_event: Optional[Callable[[DecodeEvent], None]] = None,
) -> DecodeResult:
    """Preprocess a signed 8-bit sample array and decode it."""
    buffer = preprocess(samples, config)
    return CasDemodulator(buffer, sample_rate, config, on_event).decode()


def decode_wav_file(
    src: str,
    dst: str,
    config: DecoderConfig = DecoderConfig(),
    on_event: Optional[Callable[[DecodeEvent], None]] = None,
) -> DecodeResult:
    """
    Decode the recording `src` and write the recovered .cas image to `dst`.

    Raises TapeIOError if either file cannot be opened.
    """
    config = config.validated()
    audio  = read_wav(src, invert_phase=config.phase)
    logger.info("Reading %s (%s)...", src, audio.describe())
    try:
        out = open(dst, "wb")
    except OSError as e:
        raise TapeIOError(f"failed writing {dst}: {e.strerror}") from e

    with out:
        result = decode_samples(audio.samples, audio.sample_rate, config, on_event)
        out.write(result.cas)
    return result
