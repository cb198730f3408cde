"""Exceptions raised by multirate_dsp."""


class DSPError(ValueError):
    """Base class for all errors raised by the toolkit."""


class ParameterError(DSPError):
    """Invalid buffer, length, factor or design parameter."""


class UnsupportedDesignError(ParameterError):
    """No design is available for the requested (rate, passband, length)."""


class ConvolutionError(DSPError):
    """Full-length convolution did not produce the expected element count."""
