"""
Zero-insertion upsampling and decimation.

Both work on int16, float32 and float64 frames and keep the input dtype.
Neither filters: lowpass after upsample() to interpolate, and before
downsample() to avoid aliasing.
"""

import numpy as np

from .errors import ParameterError

INT16_MIN = np.iinfo(np.int16).min
INT16_MAX = np.iinfo(np.int16).max

SAMPLE_DTYPES = (np.dtype(np.int16), np.dtype(np.float32), np.dtype(np.float64))


def _as_frame(x) -> np.ndarray:
    if x is None:
        raise ParameterError("x must not be None")
    x = np.asarray(x)
    if x.ndim != 1 or len(x) < 1:
        raise ParameterError("x must be a non-empty one-dimensional frame")
    if x.dtype not in SAMPLE_DTYPES:
        if np.issubdtype(x.dtype, np.integer):
            if x.min() < INT16_MIN or x.max() > INT16_MAX:
                raise ParameterError(
                    f"integer samples must fit in int16, got range [{x.min()}, {x.max()}]"
                )
            x = x.astype(np.int16)
        else:
            x = x.astype(np.float64)
    return x


def _check_factor(factor) -> int:
    if int(factor) != factor or factor < 1:
        raise ParameterError(f"factor must be an integer >= 1, got {factor}")
    return int(factor)


def upsample(x, factor: int, out_len=None) -> np.ndarray:
    """
    Insert factor - 1 zeros after every sample.

    y[factor * i] = x[i], every other sample is exactly zero. If out_len
    is given it must equal len(x) * factor.
    """
    x = _as_frame(x)
    factor = _check_factor(factor)
    n = len(x) * factor
    if out_len is not None and out_len != n:
        raise ParameterError(f"output length must be {n} for factor {factor}, got {out_len}")

    if factor == 1:
        return x.copy()

    y = np.zeros(n, dtype=x.dtype)
    y[::factor] = x
    return y


def downsample(x, factor: int, out_len=None) -> np.ndarray:
    """
    Keep every factor-th sample starting at index 0.

    The result has len(x) // factor samples. If out_len is given it must
    equal that length.
    """
    x = _as_frame(x)
    factor = _check_factor(factor)
    n = len(x) // factor
    if out_len is not None and out_len != n:
        raise ParameterError(f"output length must be {n} for factor {factor}, got {out_len}")
    if n < 1:
        raise ParameterError(f"frame of {len(x)} samples is shorter than factor {factor}")

    return x[::factor][:n].copy()
