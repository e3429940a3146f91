# =============================================================================
# TCME/SMM/__init__.py - Signal Mapping Module
# =============================================================================
#
# The SMM is the single source of truth for the MSX cassette standards:
# CAS block markers, FSK pulse frequencies, header lengths, silence lengths,
# the fixed output sample rate and the decoder thresholds.
#
# All other TCME sub-modules (SGM, SRM) import exclusively from here.
# Never define tape constants outside this module.
#
# Sub-modules:
#   constants.py      - framing constants and timing values
#   config.py         - immutable encoder / decoder configurations
#   cas_directory.py  - CAS block directory listing (casdir)
# =============================================================================
