# =============================================================================
# errors.py - TCME Exceptions
# =============================================================================
#
# Only container and file problems are fatal.  Malformed CAS framing and
# undecodable audio are absorbed by the codec and reported through logging
# or decode events instead.
# =============================================================================


class TapeIOError(IOError):
    """A tape image or audio container could not be opened, read or written."""
