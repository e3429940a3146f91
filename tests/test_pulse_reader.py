# test_pulse_reader.py
#
# Pulse measurement and the silence / header / byte primitives, on clean
# modulator output (no envelope correction).

import pytest

from TCME.SMM.constants import LONG_PULSE, SHORT_PULSE
from TCME.SRM.pulse_reader import PulseReader, measure_pulse


@pytest.fixture
def short(encoder):
    return encoder.encode_pulse(SHORT_PULSE)


@pytest.fixture
def long_(encoder):
    return encoder.encode_pulse(LONG_PULSE)


# ---------------------------------------------------------------------------
# measure_pulse
# ---------------------------------------------------------------------------

def test_measure_short_pulse(signal, short):
    samples = signal(short * 4)
    assert measure_pulse(samples, 0, 5) == (18, 18)
    assert measure_pulse(samples, 18, 5) == (18, 36)


def test_measure_long_pulse(signal, long_):
    samples = signal(long_ * 4)
    assert measure_pulse(samples, 36, 5) == (36, 72)


def test_measure_mixed_train(signal, short, long_):
    samples = signal(short * 2 + long_ * 2 + short * 2)
    widths = []
    pos = 18
    for _ in range(4):
        width, pos = measure_pulse(samples, pos, 5)
        widths.append(width)
    # the half-swing rewind shifts the LONG -> SHORT boundary by one sample
    assert widths == [18, 36, 35, 19]
    assert sum(widths) == 108


def test_measure_incomplete_pulse(signal, short):
    samples = signal(short)
    assert measure_pulse(samples, 0, 5) == (18, 18)


def test_measure_ignores_small_swings():
    samples = [0, -2, 0, 2, 0, -2, 0, 2, 0]
    assert measure_pulse(samples, 0, 5) == (9, 9)


# ---------------------------------------------------------------------------
# Silence
# ---------------------------------------------------------------------------

def test_flat_buffer_is_silence():
    assert PulseReader([0] * 100).is_silence()


def test_silence_band_is_closed():
    assert PulseReader([5] * 100).is_silence()
    assert PulseReader([-5] * 100).is_silence()


@pytest.mark.parametrize("value", [6, -6])
def test_one_sample_breaks_silence(value):
    samples = [0] * 100
    samples[99] = value
    assert not PulseReader(samples).is_silence()


def test_silence_window_is_100_samples():
    samples = [0] * 100 + [50]
    assert PulseReader(samples).is_silence()
    assert not PulseReader(samples).is_silence(pos=1)


def test_short_tail_is_silence():
    assert PulseReader([0] * 10).is_silence()


def test_skip_silence():
    reader = PulseReader([0, 3, -5, 5, 6, 0])
    assert reader.skip_silence() == 4
    assert reader.pos == 4


def test_skip_silence_to_end():
    reader = PulseReader([0] * 20)
    assert reader.skip_silence() == 20


# ---------------------------------------------------------------------------
# Cursor
# ---------------------------------------------------------------------------

def test_pulse_width_moves_cursor(signal, short):
    reader = PulseReader(signal(short * 3))
    assert reader.pulse_width() == 18
    assert reader.pos == 18


def test_rewind():
    reader = PulseReader([0] * 10, pos=8)
    reader.rewind(3)
    assert reader.pos == 5
    reader.rewind(100)
    assert reader.pos == 0
    with pytest.raises(ValueError):
        reader.rewind(-1)


# ---------------------------------------------------------------------------
# Header tone
# ---------------------------------------------------------------------------

def test_uniform_train_is_header(signal, short):
    reader = PulseReader(signal(short * 40))
    assert reader.is_header()
    assert reader.pos == 0


def test_long_pulse_train_is_header(signal, long_):
    # only uniformity matters, not the absolute width
    assert PulseReader(signal(long_ * 40)).is_header()


def test_too_few_pulses_is_not_header(signal, short):
    assert not PulseReader(signal(short * 20)).is_header()


def test_width_jump_is_not_header(signal, short, long_):
    assert not PulseReader(signal(short * 12 + long_ * 30)).is_header()


def test_skip_header_stops_before_start_bit(signal, short, long_):
    samples = signal(short * 60 + long_ * 3)
    reader = PulseReader(samples)
    average = reader.skip_header()
    assert average == pytest.approx(18.0)
    assert reader.pos == 60 * 18


# ---------------------------------------------------------------------------
# Serial frame
# ---------------------------------------------------------------------------

def _framed(encoder, *values):
    short = encoder.encode_pulse(SHORT_PULSE)
    return (
        encoder.encode_silence(200)
        + encoder.encode_header(60)
        + encoder.encode_bytes(bytes(values))
        + short * 8
        + encoder.encode_silence(200)
    )


@pytest.mark.parametrize("value", [0x00, 0x55, 0xA7, 0xFF])
def test_read_byte(encoder, signal, value):
    reader = PulseReader(signal(_framed(encoder, value)))
    reader.skip_silence()
    assert reader.is_header()
    average = reader.skip_header()
    assert reader.read_byte(average) == value


def test_read_bytes_back_to_back(encoder, signal):
    reader = PulseReader(signal(_framed(encoder, 0x12, 0x34, 0x56)))
    reader.skip_silence()
    average = reader.skip_header()
    assert [reader.read_byte(average) for _ in range(3)] == [0x12, 0x34, 0x56]


def test_short_start_pulse_fails(signal, short):
    reader = PulseReader(signal(short * 60))
    assert reader.read_byte(18.0) is None


def test_silence_after_start_bit_fails(signal, long_):
    samples = signal(long_ * 2) + [0] * 200
    reader = PulseReader(samples, pos=36)
    assert reader.read_byte(18.0) is None
