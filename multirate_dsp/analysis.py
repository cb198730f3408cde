"""Frequency-response analysis and plotting of designed filters."""

import logging

import numpy as np
import matplotlib.pyplot as plt
import scipy.signal as signal

from .errors import ParameterError
from .fir import FIRFilter

logger = logging.getLogger(__name__)

# Floor for log magnitudes so exact zeros do not produce -inf
_MIN_MAGNITUDE = 1e-12


def frequency_response(fltr: FIRFilter, worN=2048):
    """Frequencies (Hz) and magnitude (dB) of the filter on [0, fs/2)."""
    if not fltr.is_designed:
        raise ParameterError("filter has not been designed")
    w, h = signal.freqz(fltr.b, worN=worN, fs=fltr.fs_hz)
    return w, 20 * np.log10(np.maximum(np.abs(h), _MIN_MAGNITUDE))


def passband_ripple_db(fltr: FIRFilter, worN=2048):
    """Peak-to-peak magnitude variation up to the passband edge."""
    w, mag_db = frequency_response(fltr, worN)
    passband = mag_db[w <= fltr.passband_hz]
    return float(np.max(passband) - np.min(passband))


def stopband_attenuation_db(fltr: FIRFilter, stopband_hz, worN=2048):
    """Attenuation of the strongest stopband component relative to DC."""
    w, mag_db = frequency_response(fltr, worN)
    stopband = mag_db[w >= stopband_hz]
    if len(stopband) == 0:
        raise ParameterError(f"stopband edge {stopband_hz} Hz is above Nyquist")
    return float(mag_db[0] - np.max(stopband))


def plot_frequency_response(filters, path=None, labels=None):
    """
    Plot magnitude response and passband detail of one or more filters.

    Returns the matplotlib figure; saves it to ``path`` when given.
    """

    if isinstance(filters, FIRFilter):
        filters = [filters]
    if labels is None:
        labels = [f"{len(f)} taps, {f.method.value if f.method else 'custom'}" for f in filters]

    fig, axes = plt.subplots(1, 2, figsize=(15, 5))

    for fltr, label in zip(filters, labels):
        w, mag_db = frequency_response(fltr)
        axes[0].plot(w, mag_db, label=label)

        passband_idx = w <= fltr.passband_hz
        axes[1].plot(w[passband_idx], mag_db[passband_idx], label=label)
        axes[0].axvline(fltr.passband_hz, color='r', linestyle='--')

    axes[0].set_title('Filter Magnitude Response')
    axes[0].set_xlabel('Frequency (Hz)')
    axes[0].set_ylabel('Magnitude (dB)')
    axes[0].grid(True)
    axes[0].legend()

    axes[1].set_title('Passband Detail')
    axes[1].set_xlabel('Frequency (Hz)')
    axes[1].set_ylabel('Magnitude (dB)')
    axes[1].grid(True)

    fig.tight_layout()
    if path is not None:
        fig.savefig(path, dpi=150, bbox_inches='tight')
        logger.info("saved frequency response plot to %s", path)
    return fig
