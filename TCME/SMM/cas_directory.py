#!/usr/bin/env python3
# =============================================================================
# cas_directory.py - CAS Block Directory Listing
# =============================================================================
#
# Lists the files stored in a .cas image without touching any audio.
#
# Usage:
#   python -m TCME.SMM.cas_directory <image.cas>
#   casdir <image.cas>
#
# Block structure (all blocks start on an 8-byte boundary):
#
#   HEADER + 10-byte tag + 6-byte name    ← file header block
#   HEADER + payload                      ← one or more data blocks
#
#   ASCII  : data blocks follow until an 8-byte chunk containing 0x1A
#   BINARY : the first data block starts with start, stop, exec
#            (little-endian uint16); exec = 0 means "exec = start"
#   BASIC  : exactly one data block (the tokenised program)
#   other  : a headerless "custom" block, listed by its offset
#
# =============================================================================

from __future__ import annotations
import sys
import argparse
import struct
from typing import NamedTuple, Optional

from TCME.SMM.constants import (
    HEADER, ASCII_TAG, BINARY_TAG, BASIC_TAG,
    TAG_LENGTH, FILENAME_LENGTH, BLOCK_ALIGN, EOF_BYTE,
)

# What the next HEADER is expected to introduce
_NEXT_NONE   = 0
_NEXT_ASCII  = 1
_NEXT_BINARY = 2
_NEXT_DATA   = 3

_BINARY_ADDRESSES = struct.Struct("<HHH")


class CasEntry(NamedTuple):
    offset:    int             # byte offset of the file's first HEADER
    kind:      str             # "ascii" | "binary" | "basic" | "custom"
    name:      str             # 6-character file name ("" for custom)
    start:     Optional[int] = None
    stop:      Optional[int] = None
    exec_addr: Optional[int] = None


def _file_name(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("latin-1")


def list_entries(cas: bytes) -> list[CasEntry]:
    """
    Walk a CAS image in 8-byte steps and return one entry per file found.

    Chunks that are not a HEADER are ignored; a truncated binary file (no
    address block) produces no entry.
    """
    entries: list[CasEntry] = []
    size    = len(cas)
    pos     = 0
    expect  = _NEXT_NONE
    name    = ""
    offset  = 0

    while pos + BLOCK_ALIGN <= size:
        chunk = cas[pos:pos + BLOCK_ALIGN]
        pos  += BLOCK_ALIGN
        if chunk != HEADER:
            continue

        if expect == _NEXT_ASCII:
            # skip data blocks up to and including the chunk holding EOF
            while pos + BLOCK_ALIGN <= size:
                chunk = cas[pos:pos + BLOCK_ALIGN]
                pos  += BLOCK_ALIGN
                if EOF_BYTE in chunk:
                    break
            expect = _NEXT_NONE

        elif expect == _NEXT_BINARY:
            if pos + BLOCK_ALIGN <= size:
                start, stop, exec_addr = _BINARY_ADDRESSES.unpack_from(cas, pos)
                pos += BLOCK_ALIGN
                entries.append(CasEntry(
                    offset=offset,
                    kind="binary",
                    name=name,
                    start=start,
                    stop=stop,
                    exec_addr=exec_addr or start,
                ))
                expect = _NEXT_NONE

        elif expect == _NEXT_DATA:
            expect = _NEXT_NONE

        else:
            tag = cas[pos:pos + TAG_LENGTH]
            if len(tag) < TAG_LENGTH:
                break
            offset = pos - BLOCK_ALIGN
            if tag in (ASCII_TAG, BINARY_TAG, BASIC_TAG):
                name_start = pos + TAG_LENGTH
                name = _file_name(cas[name_start:name_start + FILENAME_LENGTH])
                pos += TAG_LENGTH + FILENAME_LENGTH
                if tag == ASCII_TAG:
                    entries.append(CasEntry(offset=offset, kind="ascii", name=name))
                    expect = _NEXT_ASCII
                elif tag == BINARY_TAG:
                    expect = _NEXT_BINARY
                else:
                    entries.append(CasEntry(offset=offset, kind="basic", name=name))
                    expect = _NEXT_DATA
            else:
                entries.append(CasEntry(offset=offset, kind="custom", name=""))
                pos += BLOCK_ALIGN

    return entries


def format_entry(entry: CasEntry) -> str:
    """Render one directory line the way casdir prints it."""
    if entry.kind == "custom":
        return f"------  custom  {entry.offset:06x}"
    if entry.kind == "binary":
        return (
            f"{entry.name:<6}  binary  "
            f"{entry.start:04x},{entry.stop:04x},{entry.exec_addr:04x}"
        )
    return f"{entry.name:<6}  {entry.kind}"


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------
def main() -> None:
    parser = argparse.ArgumentParser(
        prog="casdir",
        description="List the files stored in an MSX .cas image",
    )
    parser.add_argument("ifile", help="Path to .cas image")
    args = parser.parse_args()

    try:
        with open(args.ifile, "rb") as f:
            cas = f.read()
    except OSError:
        print(f"{parser.prog}: failed opening {args.ifile}", file=sys.stderr)
        sys.exit(1)

    for entry in list_entries(cas):
        print(format_entry(entry))


if __name__ == "__main__":
    main()
