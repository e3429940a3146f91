# =============================================================================
# wav_reader.py - Tape Recording Reader
# =============================================================================
#
# Loads a recorded WAV into the decoder's sample view: one signed 8-bit value
# per frame, centred on zero.
#
#   - Only the last channel is used; other channels are skipped, not mixed.
#   - Only the most significant byte of each sample is kept (the decoder
#     works on 8-bit amplitudes; threshold defaults assume that scale).
#   - 8-bit WAV is unsigned and is re-centred on zero.
#   - The polarity of a recording depends on the tape deck; by default the
#     signal is inverted (DecoderConfig.phase) so pulses start on a falling
#     edge, the shape the pulse detector locks onto.
#
# soundfile delivers every PCM format as int16 when asked to, with 8-bit
# unsigned data already re-centred ((u8 - 128) << 8), so an arithmetic
# shift by 8 yields the wanted value for both 8- and 16-bit files.
# =============================================================================

from __future__ import annotations
import logging
from typing import NamedTuple

import numpy as np
import soundfile as sf

from TCME.errors import TapeIOError

logger = logging.getLogger(__name__)

_SUBTYPE_BITS = {
    "PCM_S8": 8, "PCM_U8": 8, "PCM_16": 16, "PCM_24": 24, "PCM_32": 32,
    "FLOAT": 32, "DOUBLE": 64,
}


class TapeAudio(NamedTuple):
    samples:     np.ndarray   # int16 array holding signed 8-bit values
    sample_rate: int
    channels:    int
    bits:        int          # bits per sample in the container (0 = unknown)

    def describe(self) -> str:
        layout = "mono" if self.channels == 1 else "stereo"
        return f"{self.sample_rate} Hz, {self.bits}-bits, {layout}"


def _apply_phase(samples: np.ndarray, invert_phase: bool) -> np.ndarray:
    if invert_phase:
        samples = np.clip(-samples, -128, 127)
    return samples.astype(np.int16)


def samples_from_pcm16(column: np.ndarray, invert_phase: bool = True) -> np.ndarray:
    """Reduce one int16 channel to signed 8-bit amplitudes."""
    return _apply_phase(column.astype(np.int16) >> 8, invert_phase)


def samples_from_pcm_u8(raw: bytes, invert_phase: bool = True) -> np.ndarray:
    """
    Convert raw unsigned 8-bit PCM (as produced by the modulator) into the
    decoder's signed sample view.
    """
    pcm = np.frombuffer(bytes(raw), dtype=np.uint8).astype(np.int16) - 128
    return _apply_phase(pcm, invert_phase)


def read_wav(path: str, invert_phase: bool = True) -> TapeAudio:
    """
    Read a WAV (or any container soundfile understands) into a TapeAudio.

    Raises TapeIOError if the file cannot be opened or decoded.
    """
    try:
        info = sf.info(path)
        data, sr = sf.read(path, dtype='int16', always_2d=True)
    except (OSError, RuntimeError) as e:
        raise TapeIOError(f"failed reading {path}: {e}") from e

    if data.shape[1] > 1:
        logger.debug("%s: %d channels, decoding channel %d only",
                     path, data.shape[1], data.shape[1])

    return TapeAudio(
        samples=samples_from_pcm16(data[:, -1], invert_phase),
        sample_rate=int(sr),
        channels=data.shape[1],
        bits=_SUBTYPE_BITS.get(info.subtype, 0),
    )
