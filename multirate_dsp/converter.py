"""
Frame-wise upsampler (8/16 kHz -> 48 kHz)

Each frame is zero-stuffed up to the target rate, lowpass filtered with a
Kaiser-windowed least-squares FIR (zero phase, so the output stays aligned
with the input) and decimated back to the input rate for comparison.

References:
- Crochiere, R., & Rabiner, L. (1983). Multirate Digital Signal Processing
"""

import logging
from typing import NamedTuple

import numpy as np

from .config import DEFAULT_CONFIG, DSPConfig
from .errors import ParameterError
from .fir import design_lowpass_kaiser_opt, fir_filter
from .resample import downsample, upsample

logger = logging.getLogger(__name__)

SUPPORTED_INPUT_RATES = (8000, 16000)


class FrameResult(NamedTuple):
    upsampled: np.ndarray    # int16, target rate
    filtered: np.ndarray     # float64, target rate
    downsampled: np.ndarray  # float64, input rate


class FrameUpsampler:

    def __init__(self, fs_in, ptime_ms=20, config: DSPConfig = DEFAULT_CONFIG):

        if fs_in not in SUPPORTED_INPUT_RATES:
            raise ParameterError(
                f"Only {' and '.join(str(r) for r in SUPPORTED_INPUT_RATES)} sampling rate is supported"
            )
        if ptime_ms <= 0:
            raise ParameterError(f"ptime_ms must be > 0, got {ptime_ms}")

        self.config = config

        # Sample rates
        self.fs_input = int(fs_in)
        self.fs_output = config.target_rate_hz
        self.factor = self.fs_output // self.fs_input
        if self.factor * self.fs_input != self.fs_output:
            raise ParameterError(
                f"target rate {self.fs_output} is not a multiple of {self.fs_input}"
            )

        # Frame sizes
        self.ptime_ms = ptime_ms
        self.samples_in = int(ptime_ms * self.fs_input // 1000)
        self.samples_out = self.samples_in * self.factor
        if self.samples_in < 1:
            raise ParameterError(f"ptime of {ptime_ms} ms holds no samples at {fs_in} Hz")

        # Interpolation filter at the target rate, cut off at the input Nyquist
        self._design_filter()

        # Track computational complexity
        self.mac_count = 0
        self.frames_processed = 0

    def _design_filter(self):

        self.cutoff = self.fs_input // 2
        self.filter = design_lowpass_kaiser_opt(self.fs_output, self.cutoff, self.config)

        logger.info("Upsampler %d -> %d Hz: factor %d, filter length %d",
                    self.fs_input, self.fs_output, self.factor, len(self.filter))

    def process_frame(self, frame) -> FrameResult:
        """
        Upsample, filter and downsample one frame.

        Args:
            frame: ``samples_in`` int16 samples at the input rate

        Returns:
            FrameResult with the zero-stuffed, filtered and decimated frames
        """
        frame = np.asarray(frame)
        if len(frame) != self.samples_in:
            raise ParameterError(f"frame must hold {self.samples_in} samples, got {len(frame)}")

        # Interpolate (zero-stuff)
        x_interp = upsample(frame.astype(np.int16, copy=False), self.factor, self.samples_out)

        # Interpolation filter
        x_filtered = fir_filter(x_interp, self.filter, self.samples_out)

        # Decimate back to the input rate
        x_decimated = downsample(x_filtered, self.factor, self.samples_in)

        # Update MAC count
        self.mac_count += len(x_interp) * len(self.filter)
        self.frames_processed += 1

        return FrameResult(x_interp, x_filtered, x_decimated)

    def convert(self, input_signal) -> FrameResult:
        """
        Process a whole signal frame by frame; a trailing partial frame is dropped.

        Returns:
            FrameResult of the concatenated frames
        """
        x = np.asarray(input_signal)
        n_frames = len(x) // self.samples_in
        if n_frames < 1:
            raise ParameterError(f"signal shorter than one frame ({self.samples_in} samples)")

        results = [
            self.process_frame(x[k * self.samples_in:(k + 1) * self.samples_in])
            for k in range(n_frames)
        ]
        return FrameResult(*(np.concatenate(parts) for parts in zip(*results)))

    def calculate_memory_usage(self):
        """Calculate memory usage of coefficients and per-frame buffers"""

        # Coefficients are double precision
        coeff_memory = len(self.filter) * 8  # bytes

        # Upsampled int16 frame, filtered double frame, decimated double frame
        frame_memory = self.samples_out * 2 + self.samples_out * 8 + self.samples_in * 8

        # Full-length convolution scratch buffer
        scratch_memory = (self.samples_out + len(self.filter) - 1) * 8

        total_memory = coeff_memory + frame_memory + scratch_memory

        logger.debug("memory: coefficients %d B, frames %d B, scratch %d B, total %d B",
                     coeff_memory, frame_memory, scratch_memory, total_memory)

        return {
            'coefficients_bytes': coeff_memory,
            'frame_buffers_bytes': frame_memory,
            'scratch_bytes': scratch_memory,
            'total_bytes': total_memory,
            'total_kb': total_memory / 1024
        }

    def calculate_computational_complexity(self, signal_length):
        """Calculate computational complexity in MACs per output sample"""

        n_frames = signal_length // self.samples_in
        output_length = n_frames * self.samples_out
        if output_length == 0:
            raise ParameterError(f"signal shorter than one frame ({self.samples_in} samples)")

        # Direct-form filtering of the zero-stuffed signal
        direct_macs = output_length * len(self.filter)

        # Only every factor-th input sample is non-zero
        polyphase_macs = direct_macs // self.factor

        return {
            'output_samples': output_length,
            'direct_macs': direct_macs,
            'direct_macs_per_output': direct_macs / output_length,
            'polyphase_macs_per_output': polyphase_macs / output_length,
            'seconds_of_audio': output_length / self.fs_output
        }
