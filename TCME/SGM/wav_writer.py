# =============================================================================
# wav_writer.py - Mono 8-bit PCM WAV Writer
# =============================================================================
#
# Writes the fixed tape output format: RIFF/WAVE, PCM, 1 channel, 8-bit
# unsigned, 43200 Hz.  The header is written up front with zero sizes and
# backpatched on close, once the payload length is known, so the modulator
# can stream samples straight to disk.
#
#   offset  field            value
#   0       "RIFF"
#   4       RiffSize         36 + data bytes        (backpatched)
#   8       "WAVE"
#   12      "fmt "
#   16      FmtSize          16
#   20      wFormatTag       1 (PCM)
#   22      nChannels        1
#   24      nSamplesPerSec   43200
#   28      nAvgBytesPerSec  43200
#   32      nBlockAlign      1
#   34      wBitsPerSample   8
#   36      "data"
#   40      nDataBytes       data bytes             (backpatched)
# =============================================================================

from __future__ import annotations
import struct

from TCME.SMM.constants import OUTPUT_SAMPLE_RATE
from TCME.errors import TapeIOError

PCM_WAVE_FORMAT = 1
MONO            = 1
BITS_PER_SAMPLE = 8
FMT_SIZE        = 16
HEADER_SIZE     = 44

_RIFF_SIZE_OFFSET = 4
_DATA_SIZE_OFFSET = 40


def wav_header(data_size: int, sample_rate: int = OUTPUT_SAMPLE_RATE) -> bytes:
    """Build the 44-byte header for `data_size` bytes of mono 8-bit PCM."""
    block_align = MONO * (BITS_PER_SAMPLE // 8)
    byte_rate   = sample_rate * block_align

    hdr = struct.pack('<4sI4s', b'RIFF', 36 + data_size, b'WAVE')
    fmt = struct.pack('<4sIHHIIHH',
                      b'fmt ', FMT_SIZE, PCM_WAVE_FORMAT, MONO, sample_rate,
                      byte_rate, block_align, BITS_PER_SAMPLE)
    dat = struct.pack('<4sI', b'data', data_size)
    return hdr + fmt + dat


class WavWriter:
    """
    Streaming writer for unsigned 8-bit mono PCM.

    Usage:
        with WavWriter("out.wav") as wav:
            wav.write(samples)          # bytes-like, values 0-255
    """

    def __init__(self, path: str, sample_rate: int = OUTPUT_SAMPLE_RATE) -> None:
        self.path        = path
        self.sample_rate = sample_rate
        self.data_size   = 0
        try:
            self._file = open(path, "wb")
            self._file.write(wav_header(0, sample_rate))
        except OSError as e:
            raise TapeIOError(f"failed writing {path}: {e.strerror}") from e

    def write(self, samples: bytes) -> None:
        self._file.write(samples)
        self.data_size += len(samples)

    def close(self) -> None:
        """Backpatch RiffSize / nDataBytes and close the file."""
        if self._file.closed:
            return
        self._file.seek(_RIFF_SIZE_OFFSET)
        self._file.write(struct.pack('<I', 36 + self.data_size))
        self._file.seek(_DATA_SIZE_OFFSET)
        self._file.write(struct.pack('<I', self.data_size))
        self._file.close()

    def __enter__(self) -> "WavWriter":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
