# =============================================================================
# TCME/SRM/__init__.py - Signal Recovery Module
# =============================================================================
#
# The SRM turns recorded tape audio back into .cas images, and verifies
# that images survive the trip through tape audio.
#
# Sub-modules:
#   wav_reader.py    - loads a recording into signed 8-bit samples
#   preprocess.py    - normalization and envelope correction
#   pulse_reader.py  - pulse width, silence, header and byte primitives
#   fsk_decoder.py   - decode state machine; recording → .cas bytes
#   wav2cas.py       - command-line front end
#   tape_check.py    - .cas → audio → .cas round-trip check (CLI + importable)
#   validate.py      - self-validation suite for the whole TCME stack
# =============================================================================
