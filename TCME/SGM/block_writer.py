# =============================================================================
# block_writer.py - CAS Block Framing (CAS → tape audio)
# =============================================================================
#
# Walks a .cas image and turns every HEADER marker into the silence + header
# tone the MSX BIOS expects, then FSK-encodes the block payload that follows.
#
# The BIOS distinguishes a LONG header (before the first block of a file)
# from a SHORT header (before every following block).  The file type tag
# right after the first HEADER decides how many blocks follow:
#
#   ASCII  (EA x10) : gap + LONG header + block,
#                     then 1 s + SHORT header + block for every further
#                     block, until a block ends in 0x1A or the image ends
#   BINARY (D0 x10) : gap + LONG header + block,
#   BASIC  (D3 x10)   then exactly one 1 s + SHORT header + block
#   anything else   : gap + LONG header + block  (logged as unknown type)
#
# The HEADER markers themselves are never encoded as data - the header tone
# replaces them.  Everything between two markers is encoded byte for byte.
#
# The gap is 2 s unless EncoderConfig.gap_seconds overrides it; the 1 s
# silence between blocks of one file is fixed.
# =============================================================================

from __future__ import annotations
import io
import logging
from typing import BinaryIO

from TCME.SMM.constants import (
    HEADER, ASCII_TAG, BINARY_TAG, BASIC_TAG, TAG_LENGTH, TAG_NAMES, EOF_BYTE,
    LONG_HEADER, SHORT_HEADER, LONG_SILENCE, SHORT_SILENCE,
)
from TCME.SMM.config import EncoderConfig
from TCME.errors import TapeIOError
from .fsk_encoder import FSKEncoder
from .wav_writer import WavWriter

logger = logging.getLogger(__name__)


def data_until_header(cas: bytes, pos: int) -> tuple[bytes, int, bool]:
    """
    Return the payload starting at `pos` up to the next HEADER marker.

    Returns
    -------
    chunk : bytes - the payload (possibly empty)
    end   : int   - offset of the next HEADER, or the end of the image
    eof   : bool  - True if the last payload byte is 0x1A
    """
    end = cas.find(HEADER, pos)
    if end < 0:
        end = max(len(cas), pos)
    chunk = cas[pos:end]
    eof   = bool(chunk) and chunk[-1] == EOF_BYTE
    return chunk, end, eof


class CasModulator:
    """
    Converts a complete .cas image into unsigned 8-bit PCM.

    Example:
        mod = CasModulator(EncoderConfig(baudrate=2400))
        with WavWriter("game.wav") as wav:
            mod.modulate(cas_bytes, wav)
    """

    def __init__(self, config: EncoderConfig = EncoderConfig()) -> None:
        self.config  = config.validated()
        self.encoder = FSKEncoder(baudrate=config.baudrate)

        if config.gap_seconds and config.gap_seconds > 0:
            self.gap = int(config.gap_seconds * self.encoder.sample_rate)
        else:
            self.gap = LONG_SILENCE

    # ── Public API ───────────────────────────────────────────────────────────

    def modulate(self, cas: bytes, sink: BinaryIO) -> int:
        """
        Encode `cas` and write the samples to `sink` (anything with .write).

        Returns the number of tape blocks (header tones) written.
        """
        cas    = bytes(cas)
        size   = len(cas)
        pos    = 0
        blocks = 0

        while pos + len(HEADER) <= size:
            if cas[pos:pos + len(HEADER)] != HEADER:
                logger.warning("skipping unhandled data at offset %#06x", pos)
                pos += 1
                continue

            file_offset = pos
            pos += len(HEADER)
            tag  = cas[pos:pos + TAG_LENGTH]
            logger.debug("%s file at %#06x", TAG_NAMES.get(tag, "custom"), file_offset)

            if tag == ASCII_TAG:
                pos, eof = self._write_block(cas, pos, sink, first=True)
                blocks += 1
                while not eof and pos < size:
                    pos += len(HEADER)
                    pos, eof = self._write_block(cas, pos, sink, first=False)
                    blocks += 1

            elif tag in (BINARY_TAG, BASIC_TAG):
                pos, _ = self._write_block(cas, pos, sink, first=True)
                pos, _ = self._write_block(cas, pos + len(HEADER), sink, first=False)
                blocks += 2

            else:
                logger.warning(
                    "unknown file type at offset %#06x: using long header",
                    file_offset,
                )
                pos, _ = self._write_block(cas, pos, sink, first=True)
                blocks += 1

        return blocks

    def render(self, cas: bytes) -> bytes:
        """Encode `cas` in memory and return the raw unsigned 8-bit samples."""
        buf = io.BytesIO()
        self.modulate(cas, buf)
        return buf.getvalue()

    # ── Internal helpers ─────────────────────────────────────────────────────

    def _write_block(self, cas: bytes, pos: int, sink: BinaryIO,
                     first: bool) -> tuple[int, bool]:
        """Silence + header tone + payload up to the next HEADER."""
        enc = self.encoder
        sink.write(enc.encode_silence(self.gap if first else SHORT_SILENCE))
        sink.write(enc.encode_header(LONG_HEADER if first else SHORT_HEADER))

        chunk, end, eof = data_until_header(cas, pos)
        sink.write(enc.encode_bytes(chunk))
        logger.debug("block at %#06x: %d bytes%s", pos, len(chunk),
                     " (eof)" if eof else "")
        return end, eof


def encode_cas_file(src: str, dst: str,
                    config: EncoderConfig = EncoderConfig()) -> int:
    """
    Read the .cas image `src` and write it as a tape WAV to `dst`.

    Returns the number of audio samples written.
    Raises TapeIOError if either file cannot be opened.
    """
    modulator = CasModulator(config)
    try:
        with open(src, "rb") as f:
            cas = f.read()
    except OSError as e:
        raise TapeIOError(f"failed opening {src}: {e.strerror}") from e

    with WavWriter(dst) as wav:
        modulator.modulate(cas, wav)
        return wav.data_size
