# test_cas_directory.py
#
# Directory listing of .cas images.

import struct

import pytest

from TCME.SMM.constants import HEADER, ASCII_TAG, BINARY_TAG, BASIC_TAG
from TCME.SMM.cas_directory import CasEntry, format_entry, list_entries, main


def _binary(name, start, stop, exec_addr):
    return (
        HEADER + BINARY_TAG + name
        + HEADER + struct.pack("<HHH", start, stop, exec_addr) + b"\xc9\x00"
    )


def test_ascii_entry():
    cas = HEADER + ASCII_TAG + b"TEST  " + HEADER + b"10 PRINT" + b"\x1a" + bytes(7)
    assert list_entries(cas) == [CasEntry(offset=0, kind="ascii", name="TEST  ")]


def test_binary_entry():
    cas = _binary(b"GAME  ", 0xC000, 0xC007, 0xC003)
    (entry,) = list_entries(cas)
    assert entry.kind == "binary"
    assert (entry.start, entry.stop, entry.exec_addr) == (0xC000, 0xC007, 0xC003)


def test_binary_zero_exec_means_start():
    (entry,) = list_entries(_binary(b"GAME  ", 0x9000, 0x9100, 0))
    assert entry.exec_addr == 0x9000


def test_truncated_binary_has_no_entry():
    assert list_entries(HEADER + BINARY_TAG + b"GAME  " + HEADER) == []


def test_basic_entry():
    cas = HEADER + BASIC_TAG + b"PROG  " + HEADER + bytes(8)
    assert list_entries(cas) == [CasEntry(offset=0, kind="basic", name="PROG  ")]


def test_custom_block():
    cas = HEADER + bytes(16)
    assert list_entries(cas) == [CasEntry(offset=0, kind="custom", name="")]


def test_several_files_keep_offsets():
    ascii_file = HEADER + ASCII_TAG + b"ONE   " + HEADER + b"ABCDEFG\x1a"
    cas = ascii_file + _binary(b"TWO   ", 0xC000, 0xC010, 0)
    entries = list_entries(cas)
    assert [(e.offset, e.kind, e.name) for e in entries] == [
        (0, "ascii", "ONE   "),
        (len(ascii_file), "binary", "TWO   "),
    ]


def test_name_stops_at_nul():
    cas = HEADER + BASIC_TAG + b"AB\0\0\0\0" + HEADER + bytes(8)
    assert list_entries(cas)[0].name == "AB"


def test_empty_image():
    assert list_entries(b"") == []


@pytest.mark.parametrize("entry, line", [
    (CasEntry(0, "ascii", "TEST  "), "TEST    ascii"),
    (CasEntry(0, "basic", "AB"), "AB      basic"),
    (CasEntry(0, "binary", "GAME  ", 0xC000, 0xC007, 0xC000),
     "GAME    binary  c000,c007,c000"),
    (CasEntry(0x1234, "custom", ""), "------  custom  001234"),
])
def test_format_entry(entry, line):
    assert format_entry(entry) == line


def test_main_lists_files(tmp_path, monkeypatch, capsys):
    path = tmp_path / "tape.cas"
    path.write_bytes(_binary(b"GAME  ", 0xC000, 0xC007, 0))
    monkeypatch.setattr("sys.argv", ["casdir", str(path)])
    main()
    assert capsys.readouterr().out == "GAME    binary  c000,c007,c000\n"


def test_main_missing_file(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["casdir", str(tmp_path / "nothing.cas")])
    with pytest.raises(SystemExit) as exc:
        main()
    assert exc.value.code == 1
    assert "failed opening" in capsys.readouterr().err
