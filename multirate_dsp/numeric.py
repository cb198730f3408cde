"""
Numeric primitives: factorial table, modified Bessel I0 and sinc.

References:
- Abramowitz, M., & Stegun, I. (1964). Handbook of Mathematical Functions, 9.6.12
"""

import math

import numpy as np

from .errors import ParameterError

# Number of series terms used by bessel_i0 (k = 0 .. FACTORIAL_MAX)
FACTORIAL_MAX = 40

FACTORIALS = np.array([float(math.factorial(k)) for k in range(FACTORIAL_MAX + 1)])
FACTORIALS.flags.writeable = False

_SERIES_K = np.arange(FACTORIAL_MAX + 1)
_SERIES_DENOM = FACTORIALS ** 2
_SERIES_DENOM.flags.writeable = False


def bessel_i0(x):
    """
    Modified Bessel function of the first kind, order zero.

    Evaluated with the truncated power series
    sum_{k=0}^{40} (x^2/4)^k / (k!)^2, which is accurate to well below
    1e-6 relative for the Kaiser beta range used in audio filter design
    (0..20). Accepts a scalar or an array; returns the same shape.
    """
    x = np.asarray(x, dtype=np.float64)
    quarter_sq = (x * x / 4.0)[..., np.newaxis]
    result = np.sum(quarter_sq ** _SERIES_K / _SERIES_DENOM, axis=-1)
    if result.ndim == 0:
        return float(result)
    return result


def sinc(x, fs_hz):
    """Normalized sinc, sin(pi x)/(pi x), with sinc(x) = 1 for |x| < 1/fs_hz."""
    if fs_hz <= 0:
        raise ParameterError(f"fs_hz must be > 0, got {fs_hz}")
    x = np.asarray(x, dtype=np.float64)
    eps = 1.0 / float(fs_hz)
    near_zero = np.abs(x) < eps
    # Avoid 0/0 on the branch that np.where discards
    safe = np.where(near_zero, 1.0, np.pi * x)
    result = np.where(near_zero, 1.0, np.sin(safe) / safe)
    if result.ndim == 0:
        return float(result)
    return result
