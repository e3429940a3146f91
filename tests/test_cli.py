# test_cli.py
#
# cas2wav / wav2cas command-line front ends, driven through sys.argv.

import struct

import pytest

from TCME.SGM import cas2wav
from TCME.SRM import wav2cas


def _run(module, monkeypatch, *argv):
    monkeypatch.setattr("sys.argv", [module.__name__.rsplit(".", 1)[-1], *argv])
    module.main()


def test_cas2wav_then_wav2cas(tmp_path, monkeypatch, capsys, ascii_image):
    cas_in  = tmp_path / "in.cas"
    wav     = tmp_path / "tape.wav"
    cas_out = tmp_path / "out.cas"
    cas_in.write_bytes(ascii_image)

    _run(cas2wav, monkeypatch, "-s", "0.1", str(cas_in), str(wav))
    out = capsys.readouterr().out
    assert "43200 Hz, 8-bits, mono, 1200 baud" in out
    assert "All done" in out

    raw = wav.read_bytes()
    assert struct.unpack_from('<I', raw, 40)[0] == len(raw) - 44

    _run(wav2cas, monkeypatch, str(wav), str(cas_out))
    out = capsys.readouterr().out
    assert "header detected" in out
    assert "1 header(s)" in out
    assert cas_out.read_bytes() == ascii_image


def test_cas2wav_2400_baud(tmp_path, monkeypatch, capsys, binary_image):
    cas_in = tmp_path / "in.cas"
    wav    = tmp_path / "tape.wav"
    cas_in.write_bytes(binary_image)

    _run(cas2wav, monkeypatch, "-2", "-s", "0.1", str(cas_in), str(wav))
    assert "2400 baud" in capsys.readouterr().out
    assert wav.stat().st_size > 44


def test_cas2wav_missing_input(tmp_path, monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc:
        _run(cas2wav, monkeypatch, str(tmp_path / "nothing.cas"), str(tmp_path / "out.wav"))
    assert exc.value.code == 1
    assert "failed opening" in capsys.readouterr().err


def test_cas2wav_rejects_negative_gap(tmp_path, monkeypatch):
    with pytest.raises(SystemExit) as exc:
        _run(cas2wav, monkeypatch, "-s", "-1", "in.cas", "out.wav")
    assert exc.value.code == 2


def test_cas2wav_needs_two_files(monkeypatch):
    with pytest.raises(SystemExit) as exc:
        _run(cas2wav, monkeypatch, "in.cas")
    assert exc.value.code == 2


@pytest.mark.parametrize("argv", [
    ["-w", "0.5", "in.wav", "out.cas"],
    ["-t", "0", "in.wav", "out.cas"],
    ["-e", "-1", "in.wav", "out.cas"],
    ["-w", "wide", "in.wav", "out.cas"],
])
def test_wav2cas_rejects_bad_options(monkeypatch, argv):
    with pytest.raises(SystemExit) as exc:
        _run(wav2cas, monkeypatch, *argv)
    assert exc.value.code == 2


def test_wav2cas_missing_input(tmp_path, monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc:
        _run(wav2cas, monkeypatch, str(tmp_path / "nothing.wav"), str(tmp_path / "out.cas"))
    assert exc.value.code == 1
    assert "failed reading" in capsys.readouterr().err
