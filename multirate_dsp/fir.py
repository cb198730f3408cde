"""
FIR lowpass design and zero-phase filtering.

Two design methods are available behind design_lowpass():

- spectrum sampling: the ideal (rectangular) lowpass impulse response
  sampled at n points, unwindowed. Shape it with a Hamming or Kaiser
  window for usable side lobes.
- least squares: precomputed coefficient sets (see ls_tables), looked up
  by exact (length, rate, passband).

design_lowpass_kaiser_opt() combines a least-squares set with a Kaiser
window whose beta comes from the Kaiser design rules.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np

from . import ls_tables
from .config import DEFAULT_CONFIG, DSPConfig
from .convolution import ConvType, conv
from .errors import ConvolutionError, ParameterError, UnsupportedDesignError
from .kaiser import design_kaiser_n_beta
from .numeric import sinc
from .windows import kaiser_window

logger = logging.getLogger(__name__)


class DesignMethod(Enum):
    SPECTRUM_SAMPLING = "spectrum_sampling"
    LEAST_SQUARES = "least_squares"


@dataclass
class FIRFilter:
    """
    FIR filter coefficients (numerator b) and the design that produced them.

    A default-constructed filter is undesigned (no coefficients) and
    cannot be used for filtering.
    """

    b: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float64))
    passband_hz: float = 0.0
    fs_hz: float = 0.0
    method: Optional[DesignMethod] = None

    def __len__(self) -> int:
        return len(self.b)

    @property
    def is_designed(self) -> bool:
        return len(self.b) > 0

    @property
    def delay(self) -> float:
        """Group delay in samples of the linear-phase filter."""
        return (len(self.b) - 1) / 2.0


def _check_design_args(n, fs_hz, passband_hz, max_len):
    if n < 1:
        raise ParameterError(f"filter length must be >= 1, got {n}")
    if n > max_len:
        raise ParameterError(f"filter length {n} exceeds maximum {max_len}")
    if fs_hz <= 0:
        raise ParameterError(f"fs_hz must be > 0, got {fs_hz}")
    if not 0 < passband_hz <= fs_hz:
        raise ParameterError(f"passband_hz must be in (0, {fs_hz}], got {passband_hz}")


def design_lowpass_spectrum_sampling(n, fs_hz, passband_hz,
                                     max_len=DEFAULT_CONFIG.max_filter_len) -> FIRFilter:
    """b[k] = (2 Fp / Fs) sinc(2 Fp (k - L) / Fs), L = (n - 1) / 2."""
    _check_design_args(n, fs_hz, passband_hz, max_len)

    cutoff = 2.0 * passband_hz / fs_hz
    k = np.arange(n, dtype=np.float64)
    center = (n - 1) / 2.0
    b = cutoff * sinc(cutoff * (k - center), fs_hz)

    return FIRFilter(np.atleast_1d(np.asarray(b, dtype=np.float64)),
                     passband_hz, fs_hz, DesignMethod.SPECTRUM_SAMPLING)


def design_lowpass_least_squares(n, fs_hz, passband_hz,
                                 max_len=DEFAULT_CONFIG.max_filter_len) -> FIRFilter:
    """Least-squares lowpass from the precomputed tables."""
    _check_design_args(n, fs_hz, passband_hz, max_len)

    coefficients = ls_tables.lookup(n, fs_hz, passband_hz)
    if coefficients is None:
        raise UnsupportedDesignError(
            f"no least-squares design for n={n}, fs={fs_hz} Hz, passband={passband_hz} Hz"
        )
    return FIRFilter(coefficients.copy(), passband_hz, fs_hz, DesignMethod.LEAST_SQUARES)


def design_lowpass(n, fs_hz, passband_hz, method=DesignMethod.SPECTRUM_SAMPLING,
                   max_len=DEFAULT_CONFIG.max_filter_len) -> FIRFilter:
    """Unwindowed lowpass FIR by the given design method."""
    try:
        method = DesignMethod(method)
    except ValueError:
        raise ParameterError(
            "method must be 'spectrum_sampling' or 'least_squares'"
        ) from None

    if method is DesignMethod.SPECTRUM_SAMPLING:
        fltr = design_lowpass_spectrum_sampling(n, fs_hz, passband_hz, max_len)
    else:
        fltr = design_lowpass_least_squares(n, fs_hz, passband_hz, max_len)

    logger.debug("designed %d-tap lowpass (%s) fs=%s fp=%s",
                 len(fltr), method.value, fs_hz, passband_hz)
    return fltr


def shape_filter(fltr: FIRFilter, window) -> FIRFilter:
    """Multiply the filter coefficients by a window of the same length, in place."""
    w = np.asarray(window, dtype=np.float64)
    if w.ndim != 1 or len(w) != len(fltr.b):
        raise ParameterError(
            f"window length {w.size} does not match filter length {len(fltr.b)}"
        )
    fltr.b = fltr.b * w
    return fltr


def design_lowpass_kaiser_opt(fs_hz, passband_hz, config: DSPConfig = DEFAULT_CONFIG) -> FIRFilter:
    """
    Kaiser-windowed least-squares lowpass for a supported (rate, passband).

    Beta comes from the Kaiser design rules for ``config``'s attenuation and
    ripple targets. The length is fixed by the matching least-squares set.
    """
    entry = ls_tables.find_entry(fs_hz, passband_hz)
    if entry is None:
        raise UnsupportedDesignError(
            f"no Kaiser/least-squares design for fs={fs_hz} Hz, passband={passband_hz} Hz"
        )

    design = design_kaiser_n_beta(passband_hz, fs_hz,
                                  config.stopband_attenuation_db,
                                  config.passband_ripple_db,
                                  config.steepness)
    n = entry.length
    window = kaiser_window(n, design.beta)
    fltr = design_lowpass_least_squares(n, fs_hz, passband_hz, config.max_filter_len)
    shape_filter(fltr, window)

    logger.info("Kaiser/least-squares lowpass: fs=%s fp=%s n=%d (rule gave %d) beta=%.4f",
                fs_hz, passband_hz, n, design.n, design.beta)
    return fltr


def fir_filter(x, fltr: FIRFilter, out_len=None) -> np.ndarray:
    """
    Zero-phase filtering of frame x: the 'same' part of x * b.

    The output has len(x) samples, aligned with the input (the
    (len(b) - 1) / 2 sample delay of a symmetric filter is removed).
    """
    if not fltr.is_designed:
        raise ParameterError("filter has not been designed")
    if x is None:
        raise ParameterError("x must not be None")
    x = np.asarray(x)
    if x.ndim != 1 or len(x) < 1:
        raise ParameterError("x must be a non-empty one-dimensional frame")
    if out_len is not None and out_len < len(x):
        raise ParameterError(f"output length {out_len} is shorter than input length {len(x)}")

    result = conv(x, fltr.b, ConvType.SAME)
    y = result.segment()
    if len(y) != len(x):
        raise ConvolutionError(f"'same' convolution returned {len(y)} samples, expected {len(x)}")
    return y.astype(np.float64, copy=False)
