"""Sample-type conversion and raw 16-bit PCM frame I/O."""

import logging
from pathlib import Path
from typing import BinaryIO, Iterator, Union

import numpy as np

from .errors import ParameterError

logger = logging.getLogger(__name__)

PCM_DTYPE = np.dtype("<i2")
INT16_MIN = np.iinfo(np.int16).min
INT16_MAX = np.iinfo(np.int16).max


def to_int16(x) -> np.ndarray:
    """
    Convert samples to int16.

    Floating-point samples are truncated toward zero, like a C cast, and
    saturated to the int16 range.
    """
    x = np.asarray(x)
    if x.dtype == np.int16:
        return x.copy()
    if np.issubdtype(x.dtype, np.integer):
        return np.clip(x, INT16_MIN, INT16_MAX).astype(np.int16)
    return np.clip(np.trunc(x), INT16_MIN, INT16_MAX).astype(np.int16)


def to_float32(x) -> np.ndarray:
    return np.asarray(x, dtype=np.float32).copy()


def to_float64(x) -> np.ndarray:
    return np.asarray(x, dtype=np.float64).copy()


def read_frames(path: Union[str, Path], frame_len: int) -> Iterator[np.ndarray]:
    """
    Yield consecutive int16 frames of ``frame_len`` samples from a raw
    little-endian mono PCM file. A trailing partial frame is dropped.
    """
    if frame_len < 1:
        raise ParameterError(f"frame_len must be >= 1, got {frame_len}")

    frame_bytes = frame_len * PCM_DTYPE.itemsize
    with open(path, "rb") as fh:
        while True:
            chunk = fh.read(frame_bytes)
            if len(chunk) < frame_bytes:
                if chunk:
                    logger.debug("dropping %d trailing bytes of %s", len(chunk), path)
                return
            yield np.frombuffer(chunk, dtype=PCM_DTYPE).astype(np.int16)


def write_frame(fh: BinaryIO, frame) -> int:
    """Append a frame to an open binary file as int16 PCM; returns samples written."""
    data = to_int16(frame).astype(PCM_DTYPE, copy=False)
    fh.write(data.tobytes())
    return len(data)
