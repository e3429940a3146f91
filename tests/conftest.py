# =============================================================================
# conftest.py - shared fixtures for the TCME test suite
# =============================================================================

import pytest

from TCME.SMM.constants import HEADER, ASCII_TAG, BINARY_TAG
from TCME.SGM.fsk_encoder import FSKEncoder
from TCME.SRM.wav_reader import samples_from_pcm_u8


def as_signal(pcm: bytes) -> list:
    """Modulator output as the decoder sees it (signed, phase inverted)."""
    return samples_from_pcm_u8(pcm).tolist()


@pytest.fixture
def encoder():
    return FSKEncoder(baudrate=1200)


@pytest.fixture
def signal():
    return as_signal


@pytest.fixture
def ascii_image():
    # one ASCII file, single block, ends in EOF
    return HEADER + ASCII_TAG + b"TEST  " + bytes((0x00, 0x01, 0x02, 0x1A))


@pytest.fixture
def binary_image():
    # BINARY file: name block + address/data block
    return (
        HEADER + BINARY_TAG + b"GAME  "
        + HEADER + bytes((0x00, 0xC0, 0x07, 0xC0, 0x00, 0xC0, 0xC9, 0x00))
    )
