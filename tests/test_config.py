# test_config.py
#
# Cassette constants and the encoder / decoder configuration objects.

import pytest

from TCME.SMM import constants as C
from TCME.SMM.config import EncoderConfig, DecoderConfig


def test_header_marker():
    assert C.HEADER == bytes((0x1F, 0xA6, 0xDE, 0xBA, 0xCC, 0x13, 0x7D, 0x74))
    assert len(C.HEADER) == C.BLOCK_ALIGN


@pytest.mark.parametrize("tag, value", [
    (C.ASCII_TAG, 0xEA),
    (C.BINARY_TAG, 0xD0),
    (C.BASIC_TAG, 0xD3),
])
def test_type_tags(tag, value):
    assert tag == bytes((value,)) * C.TAG_LENGTH


def test_sample_rate_fits_both_baudrates():
    for baud in C.BAUDRATES:
        assert C.OUTPUT_SAMPLE_RATE % (baud * 2) == 0


def test_silence_lengths():
    assert C.LONG_SILENCE == 2 * C.OUTPUT_SAMPLE_RATE
    assert C.SHORT_SILENCE == C.OUTPUT_SAMPLE_RATE


def test_decoder_defaults():
    cfg = DecoderConfig()
    assert (cfg.threshold, cfg.window, cfg.envelope) == (5, 1.5, 2)
    assert cfg.normalize is False
    assert cfg.phase is True


def test_encoder_defaults():
    cfg = EncoderConfig()
    assert cfg.baudrate == 1200
    assert cfg.gap_seconds is None
    assert cfg.validated() is cfg


@pytest.mark.parametrize("kwargs", [
    {"baudrate": 4800},
    {"baudrate": 0},
    {"gap_seconds": -1.0},
])
def test_encoder_config_rejects(kwargs):
    with pytest.raises(ValueError):
        EncoderConfig(**kwargs).validated()


@pytest.mark.parametrize("kwargs", [
    {"threshold": 0},
    {"window": 0.9},
    {"envelope": -1},
])
def test_decoder_config_rejects(kwargs):
    with pytest.raises(ValueError):
        DecoderConfig(**kwargs).validated()


def test_decoder_config_accepts_edge_values():
    cfg = DecoderConfig(threshold=1, window=1.0, envelope=0)
    assert cfg.validated() is cfg
