# =============================================================================
# Tape Cassette Modulation Engine (TCME)
# MSX .cas image <-> cassette audio (WAV)
# =============================================================================
#
# RESPONSIBLE for:
#   - Modulation (CAS → WAV)
#       Every CAS block becomes silence + header tone + FSK-encoded bytes,
#       rendered as 43200 Hz unsigned 8-bit mono PCM.  43200 divides evenly
#       by 1200, 2400 and 4800, so every pulse is a whole number of samples.
#   - Demodulation (WAV → CAS)
#       Pulse-width decoding of real recordings: no clock, arbitrary
#       polarity, DC drift and tape noise.  The decoder learns the SHORT
#       pulse width from each header tone and classifies every following
#       pulse against it.
#   - CAS directory listing (file names, types, load/exec addresses)
#
# NOT responsible for:
#   - Stereo decoding (only one channel of a recording is decoded)
#   - Resampling (the decoder works at whatever rate the recording has)
#   - Compressed audio or streaming decode
#
# ── DATA FLOW ─────────────────────────────────────────────────────────────────
#   .cas  → SGM.block_writer  → SGM.fsk_encoder → SGM.wav_writer → .wav
#   .wav  → SRM.wav_reader    → SRM.preprocess  → SRM.fsk_decoder → .cas
#
# ── SIGNAL FORMAT ─────────────────────────────────────────────────────────────
#   Baud rate   : 1200 (default) or 2400
#   LONG pulse  : 1 cycle at the baud frequency        (start bit, bit 0)
#   SHORT pulse : 1 cycle at twice the baud frequency  (bit 1 = 2 pulses)
#   Byte frame  : start + 8 data bits lsb first + 4 SHORT stop pulses
#   Header tone : 16000 (first block) or 4000 SHORT pulses at 1200 baud
#
# ── Module layout ─────────────────────────────────────────────────────────────
#   SMM/  - Signal Mapping Module: constants, configuration, CAS directory
#   SGM/  - Signal Generation Module: modulator, WAV writer, cas2wav
#   SRM/  - Signal Recovery Module: WAV reader, preprocessor, decoder,
#           wav2cas, round-trip check, self-validation
# =============================================================================

__version__ = "1.31.0"
