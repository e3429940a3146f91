# test_preprocess.py
#
# Amplitude normalization and the recursive envelope-correction filter.

import numpy as np

from TCME.SMM.config import DecoderConfig
from TCME.SRM.preprocess import correct_envelope, normalize_amplitude, preprocess


def test_envelope_single_spike():
    assert correct_envelope([0, 7, 0, 0]) == [0, 2, 0, 0]


def test_envelope_uses_filtered_previous_sample():
    # s[1] = round((3.5 + 0 + 14) / 3.5) = 5
    # s[2] = round((2.5 + 7 + 14) / 3.5) = 7 (uses the new s[1])
    assert correct_envelope([7, 0, 7, 7]) == [7, 5, 7, 7]


def test_envelope_keeps_boundaries():
    samples = [50, -50, 50, -50, 50]
    out = correct_envelope(list(samples), passes=3)
    assert out[0] == 50
    assert out[-1] == 50


def test_envelope_zero_passes_and_short_buffers():
    assert correct_envelope([1, 9, 3], passes=0) == [1, 9, 3]
    assert correct_envelope([4, 8]) == [4, 8]
    assert correct_envelope([]) == []


def test_envelope_works_in_place():
    samples = [0, 7, 0, 0]
    correct_envelope(samples)
    assert samples == [0, 2, 0, 0]


def test_normalize_truncates_towards_zero():
    samples = np.array([10, -20, 5], dtype=np.int16)
    normalize_amplitude(samples)
    assert samples.tolist() == [63, -127, 31]


def test_normalize_silent_buffer():
    samples = np.zeros(4, dtype=np.int16)
    assert normalize_amplitude(samples).tolist() == [0, 0, 0, 0]
    assert normalize_amplitude(np.array([], dtype=np.int16)).size == 0


def test_preprocess_returns_list():
    samples = np.array([0, 7, 0, 0], dtype=np.int16)
    out = preprocess(samples, DecoderConfig(envelope=1))
    assert isinstance(out, list)
    assert out == [0, 2, 0, 0]


def test_preprocess_normalize_then_filter():
    samples = np.array([0, 10, -20, 0], dtype=np.int16)
    out = preprocess(samples, DecoderConfig(normalize=True, envelope=0))
    assert out == [0, 63, -127, 0]
