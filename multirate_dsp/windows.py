"""Symmetric Hamming and Kaiser windows."""

import numpy as np

from .errors import ParameterError
from .numeric import bessel_i0


def _half_length(n: int) -> int:
    # Odd n includes the center sample
    return (n + 1) // 2


def _mirror(head: np.ndarray, n: int) -> np.ndarray:
    w = np.empty(n, dtype=np.float64)
    w[:len(head)] = head
    w[n - len(head):] = head[::-1]
    return w


def _check_length(n) -> int:
    if n < 0:
        raise ParameterError(f"window length must be >= 0, got {n}")
    return int(n)


def hamming_window(n: int) -> np.ndarray:
    """
    N-point symmetric Hamming window.

    w[i] = 0.54 - 0.46 cos(2 pi i / (n - 1)); only the first half is
    evaluated, the second half is its mirror image.
    """
    n = _check_length(n)
    if n == 0:
        return np.empty(0, dtype=np.float64)
    if n == 1:
        return np.ones(1, dtype=np.float64)

    i = np.arange(_half_length(n))
    head = 0.54 - 0.46 * np.cos(2.0 * np.pi * i / (n - 1))
    return _mirror(head, n)


def kaiser_window(n: int, beta: float) -> np.ndarray:
    """
    N-point symmetric Kaiser window.

    w[i] = I0(beta * sqrt(1 - (2i/(n-1) - 1)^2)) / I0(beta)

    Larger beta widens the main lobe and lowers the side lobes;
    beta = 0 gives a rectangular window.
    """
    n = _check_length(n)
    if n == 0:
        return np.empty(0, dtype=np.float64)
    if n == 1:
        return np.ones(1, dtype=np.float64)

    i = np.arange(_half_length(n))
    ratio = 2.0 * i / (n - 1) - 1.0
    # Clip tiny negative values from rounding at the edges
    arg = beta * np.sqrt(np.clip(1.0 - ratio * ratio, 0.0, None))
    head = bessel_i0(arg) / bessel_i0(beta)
    return _mirror(head, n)
