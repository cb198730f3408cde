"""
multirate_dsp - resampling, convolution, windows and FIR lowpass design
for frame-wise audio-rate conversion (e.g. 8/16 kHz -> 48 kHz).
"""

from .config import DEFAULT_CONFIG, DSPConfig
from .converter import FrameResult, FrameUpsampler
from .convolution import ConvResult, ConvType, conv, conv_full, conv_indices
from .errors import ConvolutionError, DSPError, ParameterError, UnsupportedDesignError
from .fir import (
    DesignMethod,
    FIRFilter,
    design_lowpass,
    design_lowpass_kaiser_opt,
    design_lowpass_least_squares,
    design_lowpass_spectrum_sampling,
    fir_filter,
    shape_filter,
)
from .kaiser import KaiserDesign, design_kaiser_n_beta, kaiser_beta
from .numeric import FACTORIALS, bessel_i0, sinc
from .pcm import to_float32, to_float64, to_int16
from .resample import downsample, upsample
from .windows import hamming_window, kaiser_window

__version__ = "0.1.0"
