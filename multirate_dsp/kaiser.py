"""
Kaiser window design rules.

References:
- Kaiser, J. F. (1974). "Nonrecursive digital filter design using the
  I0-sinh window function." Proc. IEEE ISCAS
- Oppenheim, A., & Schafer, R. (2010). Discrete-Time Signal Processing, 7.6
"""

import logging
import math
from typing import NamedTuple

from .config import DEFAULT_CONFIG
from .errors import ParameterError

logger = logging.getLogger(__name__)

# 2 * pi * 2.285, Kaiser's empirical length constant in cycles/sample
_LENGTH_DENOM = 2.0 * math.pi * 2.285


class KaiserDesign(NamedTuple):
    n: int
    beta: float


def stopband_db_to_linear(attenuation_db: float) -> float:
    """Stopband deviation for an attenuation given in dB."""
    return 10.0 ** (-attenuation_db / 20.0)


def passband_ripple_db_to_linear(ripple_db: float) -> float:
    """Passband deviation for a peak-to-peak ripple given in dB."""
    g = 10.0 ** (ripple_db / 20.0)
    return (g - 1.0) / (g + 1.0)


def kaiser_beta(attenuation_db: float) -> float:
    """
    Beta for a Kaiser lowpass with the given stopband attenuation.

    Kaiser's empirical rule. Below 21 dB the rectangular window already
    meets the target, so beta is 0.
    """
    if attenuation_db > 50.0:
        return 0.1102 * (attenuation_db - 8.7)
    if attenuation_db >= 21.0:
        a = attenuation_db - 21.0
        return 0.5842 * a ** 0.4 + 0.07886 * a
    return 0.0


def transition_width(passband_freq, fs, steepness=DEFAULT_CONFIG.steepness) -> float:
    """Transition bandwidth normalized to fs, from passband edge and steepness."""
    nyquist = fs / 2.0
    stopband_freq = passband_freq + (1.0 - steepness) * (nyquist - passband_freq)
    return (stopband_freq - passband_freq) / fs


def design_kaiser_n_beta(passband_freq, fs,
                         stopband_attenuation_db=DEFAULT_CONFIG.stopband_attenuation_db,
                         passband_ripple_db=DEFAULT_CONFIG.passband_ripple_db,
                         steepness=DEFAULT_CONFIG.steepness) -> KaiserDesign:
    """
    Length and beta of a Kaiser-windowed lowpass meeting the given targets.

    The stricter of the passband and stopband deviations sets the
    attenuation A; then n = ceil((A - 7.95) / (2 pi 2.285 df)) + 1 and
    beta = kaiser_beta(A), df being the normalized transition width.
    """
    if fs <= 0:
        raise ParameterError(f"fs must be > 0, got {fs}")
    if not 0 < passband_freq < fs / 2.0:
        raise ParameterError(
            f"passband_freq must be in (0, {fs / 2.0}) Hz, got {passband_freq}"
        )
    if stopband_attenuation_db <= 0 or passband_ripple_db <= 0:
        raise ParameterError("stopband attenuation and passband ripple must be > 0 dB")

    df = transition_width(passband_freq, fs, steepness)

    delta = min(stopband_db_to_linear(stopband_attenuation_db),
                passband_ripple_db_to_linear(passband_ripple_db))
    attenuation_db = -20.0 * math.log10(delta)

    d = (attenuation_db - 7.95) / _LENGTH_DENOM
    n = int(math.ceil(d / df)) + 1
    beta = kaiser_beta(attenuation_db)

    logger.debug("kaiser design fp=%s fs=%s: A=%.2f dB df=%.5f -> n=%d beta=%.4f",
                 passband_freq, fs, attenuation_db, df, n, beta)
    return KaiserDesign(n, beta)
