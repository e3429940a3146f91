# =============================================================================
# SGM - Signal Generation Module
# Subfolder of TCME (Tape Cassette Modulation Engine)
# =============================================================================
#
# Generates MSX tape audio from .cas images, using the cassette constants
# in TCME/SMM/constants.py.
#
# Modules:
#   fsk_encoder.py   - pulses, serial byte frames, header tones, silences
#   block_writer.py  - CAS block framing; streams a whole image to PCM
#   wav_writer.py    - 8-bit mono WAV container with backpatched sizes
#   cas2wav.py       - command-line front end
#
# Decoding tools live in TCME/SRM/
# =============================================================================
