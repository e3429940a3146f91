# =============================================================================
# preprocess.py - Signal Preprocessor
# =============================================================================
#
# Applied once to the whole recording before pulse detection:
#
#   normalize_amplitude  - optional; scale so the loudest sample hits ±127
#   correct_envelope     - repeatable smoothing pass (default: twice)
#
# The envelope kernel is an asymmetric 3-tap filter weighted towards the
# next sample:
#
#     s[i] = round((0.5·s[i-1] + 1.0·s[i] + 2.0·s[i+1]) / 3.5)
#
# It runs in place, left to right, so s[i-1] is already the filtered value.
# This is a first-order recursive low-pass, not a FIR - keep it sequential.
# The first and last samples are never modified.
# =============================================================================

from __future__ import annotations

import numpy as np

from TCME.SMM.config import DecoderConfig


def normalize_amplitude(samples: np.ndarray) -> np.ndarray:
    """
    Scale `samples` in place by 127 / max|s| (truncating toward zero).

    A silent buffer (max = 0) is returned unchanged.
    """
    if samples.size == 0:
        return samples
    peak = int(np.max(np.abs(samples)))
    if peak == 0:
        return samples
    samples[:] = np.trunc(samples * (127.0 / peak)).astype(samples.dtype)
    return samples


def correct_envelope(samples: list[int], passes: int = 1) -> list[int]:
    """Run `passes` envelope-correction passes over `samples` in place."""
    size = len(samples)
    for _ in range(passes):
        for i in range(1, size - 1):
            samples[i] = round(
                (0.5 * samples[i - 1] + samples[i] + 2.0 * samples[i + 1]) / 3.5
            )
    return samples


def preprocess(samples: np.ndarray, config: DecoderConfig) -> list[int]:
    """
    Prepare a recording for decoding.

    Parameters
    ----------
    samples : int16 array of signed 8-bit amplitudes (modified in place
              when normalization is enabled)
    config  : DecoderConfig - uses .normalize and .envelope

    Returns
    -------
    list[int] - the decode buffer (plain list: the decoder walks it sample
                by sample)
    """
    if config.normalize:
        normalize_amplitude(samples)
    buffer = samples.tolist()
    correct_envelope(buffer, config.envelope)
    return buffer
