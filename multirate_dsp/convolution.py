"""
Discrete convolution with MATLAB-compatible full/same/valid truncation.

All index pairs returned here are half-open and 0-based, relative to the
full-length convolution: ``y[start:stop]`` is the requested part. The
inclusive last index is ``stop - 1``. A ``valid`` convolution of a signal
shorter than the filter has no elements and is reported with the
sentinel ``start == stop == -1``.
"""

import logging
from enum import Enum
from typing import NamedTuple, Tuple

import numpy as np

from .errors import ConvolutionError, ParameterError

logger = logging.getLogger(__name__)

NO_VALID_REGION = -1


class ConvType(Enum):
    FULL = "full"
    SAME = "same"
    VALID = "valid"


class ConvResult(NamedTuple):
    """Full-length convolution plus the half-open range for a ConvType."""

    y: np.ndarray
    start: int
    stop: int

    @property
    def empty(self) -> bool:
        return self.start == NO_VALID_REGION or self.stop <= self.start

    @property
    def last(self) -> int:
        """Inclusive index of the last element, or -1 when empty."""
        return NO_VALID_REGION if self.empty else self.stop - 1

    def segment(self) -> np.ndarray:
        """The requested part of the convolution (a copy)."""
        if self.empty:
            return self.y[:0].copy()
        return self.y[self.start:self.stop].copy()


def _as_signal(v, name: str) -> np.ndarray:
    if v is None:
        raise ParameterError(f"{name} must not be None")
    arr = np.asarray(v)
    if arr.ndim != 1:
        raise ParameterError(f"{name} must be one-dimensional, got shape {arr.shape}")
    if len(arr) < 1:
        raise ParameterError(f"{name} must hold at least one sample")
    return arr


def _accumulator_dtype(x: np.ndarray, h: np.ndarray):
    # integer x integer accumulates in 64 bits so 16-bit signals cannot overflow
    if np.issubdtype(x.dtype, np.integer) and np.issubdtype(h.dtype, np.integer):
        return np.int64
    return np.float64


def conv_full(x, h) -> np.ndarray:
    """
    Full-length convolution y[t] = sum_tau x[tau] h[t - tau].

    The result has len(x) + len(h) - 1 samples. Out-of-range terms are
    excluded by clamping the summation range for each t rather than by
    zero-padding the inputs. Integer inputs give an int64 result, anything
    else a float64 result.
    """
    x = _as_signal(x, "x")
    h = _as_signal(h, "h")
    acc = _accumulator_dtype(x, h)
    xa = x.astype(acc, copy=False)
    ha = h.astype(acc, copy=False)

    x_len = len(xa)
    h_len = len(ha)
    n = x_len + h_len - 1
    y = np.zeros(n, dtype=acc)

    for t in range(n):
        tau_min = max(0, t - (h_len - 1))
        tau_max = min(x_len - 1, t)
        # h[t - tau] for tau = tau_min..tau_max, i.e. h read backwards
        h_part = ha[t - tau_max:t - tau_min + 1][::-1]
        y[t] = np.dot(xa[tau_min:tau_max + 1], h_part)

    return y


def conv_indices(x_len: int, h_len: int, conv_type) -> Tuple[int, int]:
    """Half-open (start, stop) of ``conv_type`` within the full convolution."""
    conv_type = ConvType(conv_type)
    if x_len < 1 or h_len < 1:
        raise ParameterError(f"lengths must be >= 1, got x_len={x_len}, h_len={h_len}")

    if conv_type is ConvType.SAME:
        # floor keeps the MATLAB left bias for even filter lengths
        start = h_len // 2
        return start, start + x_len
    if conv_type is ConvType.VALID:
        if x_len >= h_len:
            return h_len - 1, x_len
        return NO_VALID_REGION, NO_VALID_REGION
    return 0, x_len + h_len - 1


def conv(x, h, conv_type=ConvType.FULL) -> ConvResult:
    """
    Convolve x with h and locate the ``conv_type`` part of the result.

    Returns the full-length convolution with the half-open index pair of
    the full, same or valid part (see module docstring).
    """
    conv_type = ConvType(conv_type)
    y = conv_full(x, h)
    x_len = len(x)
    h_len = len(h)
    expected = x_len + h_len - 1
    if len(y) != expected:
        raise ConvolutionError(f"full convolution produced {len(y)} samples, expected {expected}")

    start, stop = conv_indices(x_len, h_len, conv_type)
    if start == NO_VALID_REGION:
        logger.debug("no valid region for x_len=%d < h_len=%d", x_len, h_len)
    return ConvResult(y, start, stop)
