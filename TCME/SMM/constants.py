# =============================================================================
# constants.py - SMM Cassette Framing Constants
# =============================================================================
#
# Values follow the MSX BIOS tape routines as exercised by the classic
# cas2wav / wav2cas tools.  A .cas image is a plain byte stream; blocks are
# introduced by an 8-byte HEADER marker that is always 8-byte aligned in the
# image.  On tape, each marker becomes a silence followed by a header tone.
#
# Source: MSX Technical Handbook, cassette chapter.

# -----------------------------------------------------------------------------
# CAS BLOCK MARKERS  (byte-exact)
# -----------------------------------------------------------------------------

HEADER = bytes((0x1F, 0xA6, 0xDE, 0xBA, 0xCC, 0x13, 0x7D, 0x74))

# 10-byte type tags following the first HEADER of a file
ASCII_TAG  = bytes((0xEA,) * 10)
BINARY_TAG = bytes((0xD0,) * 10)
BASIC_TAG  = bytes((0xD3,) * 10)

TAG_LENGTH      = 10
FILENAME_LENGTH = 6
BLOCK_ALIGN     = 8      # HEADER markers start on 8-byte boundaries

# Logical end of an ASCII file (CTRL-Z)
EOF_BYTE = 0x1A

TAG_NAMES = {
    ASCII_TAG:  "ascii",
    BINARY_TAG: "binary",
    BASIC_TAG:  "basic",
}


# -----------------------------------------------------------------------------
# FSK TIMING  (modulator)
# -----------------------------------------------------------------------------
# A LONG pulse is one cycle at the baud frequency, a SHORT pulse one cycle at
# twice the baud frequency.  Frequencies are given for 1200 baud; 2400 baud
# scales them by 2.

OUTPUT_SAMPLE_RATE = 43_200     # Hz - divides evenly by 1200, 2400 and 4800

BASE_BAUDRATE = 1_200
BAUDRATES     = (1_200, 2_400)

LONG_PULSE  = 1_200             # Hz at 1200 baud  (bit 0, start bit)
SHORT_PULSE = 2_400             # Hz at 1200 baud  (bit 1 half, stop bits)

# Header tone lengths in SHORT pulses at 1200 baud
LONG_HEADER  = 16_000           # before the first block of a file
SHORT_HEADER = 4_000            # before every following block

# Silence lengths in samples
SHORT_SILENCE = OUTPUT_SAMPLE_RATE        # 1 second between blocks
LONG_SILENCE  = OUTPUT_SAMPLE_RATE * 2    # 2 seconds before a file

SILENCE_LEVEL = 128             # centre of unsigned 8-bit PCM
PULSE_AMPLITUDE = 127

# Serial frame layout
DATA_BITS       = 8
STOP_PULSES     = 4             # two stop bits = four SHORT pulses


# -----------------------------------------------------------------------------
# DEMODULATOR THRESHOLDS
# -----------------------------------------------------------------------------

THRESHOLD_SILENCE = 100         # samples inside the band that make a silence
THRESHOLD_HEADER  = 25          # uniform pulses that make a header

DEFAULT_THRESHOLD = 5           # amplitude band for silence / pulse swing
DEFAULT_WINDOW    = 1.5         # LONG/SHORT discrimination factor
DEFAULT_ENVELOPE  = 2           # envelope correction passes
