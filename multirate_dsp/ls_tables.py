"""
Precomputed least-squares lowpass coefficient sets.

Keyed by (fs_hz, passband_hz). Each set is symmetric (linear phase) and
read-only; the designer copies it into the filter it returns.
"""

from typing import Dict, NamedTuple, Optional, Tuple

import numpy as np


class LeastSquaresEntry(NamedTuple):
    fs_hz: int
    passband_hz: int
    coefficients: np.ndarray

    @property
    def length(self) -> int:
        return len(self.coefficients)


def _frozen(values) -> np.ndarray:
    arr = np.array(values, dtype=np.float64)
    arr.flags.writeable = False
    return arr


# 57 taps, Fs = 48 kHz, Fpass = 4 kHz
LS_57_4000_48000 = _frozen([
    0.0002317719, 0.0002933296, 0.0000653322, -0.0005152687,
    -0.0011996204, -0.0014443471, -0.0007086233, 0.0010787318,
    0.0031880267, 0.0042290905, 0.0028736999, -0.0011307916,
    -0.0062838011, -0.0096164325, -0.0081152050, -0.0007340415,
    0.0101430054, 0.0189368961, 0.0192239944, 0.0074220577,
    -0.0139930822, -0.0357312183, -0.0444435302, -0.0283134534,
    0.0168563899, 0.0840521946, 0.1560909305, 0.2113680921,
    0.2320833333, 0.2113680921, 0.1560909305, 0.0840521946,
    0.0168563899, -0.0283134534, -0.0444435302, -0.0357312183,
    -0.0139930822, 0.0074220577, 0.0192239944, 0.0189368961,
    0.0101430054, -0.0007340415, -0.0081152050, -0.0096164325,
    -0.0062838011, -0.0011307916, 0.0028736999, 0.0042290905,
    0.0031880267, 0.0010787318, -0.0007086233, -0.0014443471,
    -0.0011996204, -0.0005152687, 0.0000653322, 0.0002933296,
    0.0002317719,
])

# 75 taps, Fs = 48 kHz, Fpass = 8 kHz
LS_75_8000_48000 = _frozen([
    0.0001314414, -0.0000946699, -0.0003771918, -0.0001777816,
    0.0005110697, 0.0007632490, -0.0001520994, -0.0013277041,
    -0.0009119127, 0.0011928743, 0.0023294453, 0.0002466303,
    -0.0030619300, -0.0028634022, 0.0018347777, 0.0053608132,
    0.0018948703, -0.0055752556, -0.0069812104, 0.0016853716,
    0.0104324659, 0.0061577390, -0.0085634654, -0.0147862994,
    -0.0007589469, 0.0185192198, 0.0158431490, -0.0114528143,
    -0.0302037540, -0.0093372058, 0.0335644092, 0.0413488592,
    -0.0135605853, -0.0765310018, -0.0493965138, 0.1039680895,
    0.2974386077, 0.3856670000, 0.2974386077, 0.1039680895,
    -0.0493965138, -0.0765310018, -0.0135605853, 0.0413488592,
    0.0335644092, -0.0093372058, -0.0302037540, -0.0114528143,
    0.0158431490, 0.0185192198, -0.0007589469, -0.0147862994,
    -0.0085634654, 0.0061577390, 0.0104324659, 0.0016853716,
    -0.0069812104, -0.0055752556, 0.0018948703, 0.0053608132,
    0.0018347777, -0.0028634022, -0.0030619300, 0.0002466303,
    0.0023294453, 0.0011928743, -0.0009119127, -0.0013277041,
    -0.0001520994, 0.0007632490, 0.0005110697, -0.0001777816,
    -0.0003771918, -0.0000946699, 0.0001314414,
])

LEAST_SQUARES_TABLES: Dict[Tuple[int, int], LeastSquaresEntry] = {
    (48000, 4000): LeastSquaresEntry(48000, 4000, LS_57_4000_48000),
    (48000, 8000): LeastSquaresEntry(48000, 8000, LS_75_8000_48000),
}


def find_entry(fs_hz, passband_hz) -> Optional[LeastSquaresEntry]:
    """Table for (fs_hz, passband_hz), or None if there is none."""
    return LEAST_SQUARES_TABLES.get((fs_hz, passband_hz))


def lookup(n, fs_hz, passband_hz) -> Optional[np.ndarray]:
    """Coefficients matching (length, rate, passband) exactly, else None."""
    entry = find_entry(fs_hz, passband_hz)
    if entry is None or entry.length != n:
        return None
    return entry.coefficients
