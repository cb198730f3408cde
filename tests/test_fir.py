import numpy as np
import pytest
from scipy.signal import windows

from multirate_dsp import ls_tables
from multirate_dsp.config import DSPConfig
from multirate_dsp.errors import ParameterError, UnsupportedDesignError
from multirate_dsp.fir import (
    DesignMethod,
    FIRFilter,
    design_lowpass,
    design_lowpass_kaiser_opt,
    design_lowpass_least_squares,
    design_lowpass_spectrum_sampling,
    fir_filter,
    shape_filter,
)
from multirate_dsp.kaiser import design_kaiser_n_beta
from multirate_dsp.windows import hamming_window

FS_HZ = 48000
PASSBAND_HZ = 8000

# MATLAB: x_fir(8000, 48000, 71, 0)
SPECTRUM_71_REF = [
    -0.007876, -0.008108, -0.000000, 0.008615, 0.008892, -0.000000, -0.009506,
    -0.009845, 0.000000, 0.010602, 0.011027, -0.000000, -0.011985, -0.012530,
    -0.000000, 0.013783, 0.014509, 0.000000, -0.016216, -0.017229,
    -0.000000, 0.019690, 0.021205, 0.000000, -0.025060, -0.027566,
    -0.000000, 0.034458, 0.039381, -0.000000, -0.055133, -0.068916,
    -0.000000, 0.137832, 0.275664, 0.333333, 0.275664, 0.137832,
    -0.000000, -0.068916, -0.055133, -0.000000, 0.039381, 0.034458,
    -0.000000, -0.027566, -0.025060, 0.000000, 0.021205, 0.019690,
    -0.000000, -0.017229, -0.016216, 0.000000, 0.014509, 0.013783,
    -0.000000, -0.012530, -0.011985, -0.000000, 0.011027, 0.010602,
    0.000000, -0.009845, -0.009506, -0.000000, 0.008892, 0.008615,
    -0.000000, -0.008108, -0.007876,
]


def test_spectrum_sampling_matches_reference() -> None:
    fltr = design_lowpass_spectrum_sampling(71, FS_HZ, PASSBAND_HZ)
    assert len(fltr) == 71
    assert fltr.method is DesignMethod.SPECTRUM_SAMPLING
    assert (fltr.fs_hz, fltr.passband_hz) == (FS_HZ, PASSBAND_HZ)
    np.testing.assert_allclose(fltr.b, SPECTRUM_71_REF, atol=1e-5)
    assert fltr.b[35] == pytest.approx(2 * PASSBAND_HZ / FS_HZ)


def test_spectrum_sampling_even_length_is_symmetric() -> None:
    fltr = design_lowpass_spectrum_sampling(70, FS_HZ, PASSBAND_HZ)
    np.testing.assert_allclose(fltr.b, fltr.b[::-1], atol=1e-15)


def test_spectrum_sampling_without_length_ceiling_when_configured() -> None:
    with pytest.raises(ParameterError):
        design_lowpass_spectrum_sampling(5000, FS_HZ, PASSBAND_HZ)
    fltr = design_lowpass_spectrum_sampling(5000, FS_HZ, PASSBAND_HZ, max_len=8192)
    assert len(fltr) == 5000


@pytest.mark.parametrize("n,fs,fp", [(0, FS_HZ, 8000), (71, 0, 8000), (71, FS_HZ, 0), (71, FS_HZ, 48001)])
def test_spectrum_sampling_rejects_bad_parameters(n, fs, fp) -> None:
    with pytest.raises(ParameterError):
        design_lowpass_spectrum_sampling(n, fs, fp)


def test_least_squares_tables() -> None:
    f57 = design_lowpass_least_squares(57, FS_HZ, 4000)
    assert f57.method is DesignMethod.LEAST_SQUARES
    np.testing.assert_array_equal(f57.b, ls_tables.LS_57_4000_48000)
    assert f57.b[28] == 0.2320833333

    f75 = design_lowpass_least_squares(75, FS_HZ, 8000)
    np.testing.assert_array_equal(f75.b, ls_tables.LS_75_8000_48000)
    assert f75.b[37] == 0.3856670000


def test_least_squares_tables_are_symmetric_and_read_only() -> None:
    for entry in ls_tables.LEAST_SQUARES_TABLES.values():
        np.testing.assert_array_equal(entry.coefficients, entry.coefficients[::-1])
        with pytest.raises(ValueError):
            entry.coefficients[0] = 1.0


def test_least_squares_filter_owns_its_coefficients() -> None:
    fltr = design_lowpass_least_squares(57, FS_HZ, 4000)
    fltr.b[0] = 123.0
    assert ls_tables.LS_57_4000_48000[0] == 0.0002317719


@pytest.mark.parametrize("n,fp", [(256, 8000), (57, 8000), (75, 4000), (57, 3000)])
def test_least_squares_unsupported_combinations(n, fp) -> None:
    with pytest.raises(UnsupportedDesignError):
        design_lowpass_least_squares(n, FS_HZ, fp)


def test_design_lowpass_dispatches_on_method() -> None:
    ss = design_lowpass(71, FS_HZ, PASSBAND_HZ, DesignMethod.SPECTRUM_SAMPLING)
    np.testing.assert_allclose(ss.b, SPECTRUM_71_REF, atol=1e-5)

    ls = design_lowpass(75, FS_HZ, PASSBAND_HZ, "least_squares")
    assert ls.method is DesignMethod.LEAST_SQUARES
    assert len(ls) == 75

    with pytest.raises(UnsupportedDesignError):
        design_lowpass(256, FS_HZ, PASSBAND_HZ, DesignMethod.LEAST_SQUARES)
    with pytest.raises(ParameterError):
        design_lowpass(71, FS_HZ, PASSBAND_HZ, "remez")


def test_design_is_idempotent() -> None:
    a = design_lowpass(71, FS_HZ, PASSBAND_HZ)
    b = design_lowpass(71, FS_HZ, PASSBAND_HZ)
    np.testing.assert_array_equal(a.b, b.b)
    k1 = design_lowpass_kaiser_opt(FS_HZ, 4000)
    k2 = design_lowpass_kaiser_opt(FS_HZ, 4000)
    np.testing.assert_array_equal(k1.b, k2.b)


def test_shape_multiplies_in_place() -> None:
    fltr = design_lowpass(71, FS_HZ, PASSBAND_HZ)
    original = fltr.b.copy()
    w = hamming_window(71)
    assert shape_filter(fltr, w) is fltr
    np.testing.assert_allclose(fltr.b, original * w)


def test_shape_rejects_length_mismatch() -> None:
    fltr = design_lowpass(71, FS_HZ, PASSBAND_HZ)
    original = fltr.b.copy()
    with pytest.raises(ParameterError):
        shape_filter(fltr, hamming_window(70))
    np.testing.assert_array_equal(fltr.b, original)


@pytest.mark.parametrize("fp,n", [(4000, 57), (8000, 75)])
def test_kaiser_opt_shapes_least_squares_set(fp: int, n: int) -> None:
    fltr = design_lowpass_kaiser_opt(FS_HZ, fp)
    beta = design_kaiser_n_beta(fp, FS_HZ).beta
    base = ls_tables.find_entry(FS_HZ, fp).coefficients
    assert len(fltr) == n
    assert fltr.method is DesignMethod.LEAST_SQUARES
    np.testing.assert_allclose(fltr.b, base * windows.kaiser(n, beta), atol=1e-12)


def test_kaiser_opt_follows_config_targets() -> None:
    default = design_lowpass_kaiser_opt(FS_HZ, 8000)
    stricter = design_lowpass_kaiser_opt(FS_HZ, 8000, DSPConfig(stopband_attenuation_db=90.0))
    assert len(default) == len(stricter)
    # Larger beta tapers the outer taps harder
    assert abs(stricter.b[0]) < abs(default.b[0])


@pytest.mark.parametrize("fs,fp", [(44100, 4000), (48000, 6000), (16000, 4000)])
def test_kaiser_opt_unsupported(fs: int, fp: int) -> None:
    with pytest.raises(UnsupportedDesignError):
        design_lowpass_kaiser_opt(fs, fp)


def test_undesigned_filter_cannot_filter() -> None:
    fltr = FIRFilter()
    assert not fltr.is_designed
    assert len(fltr) == 0
    with pytest.raises(ParameterError):
        fir_filter(np.ones(10, dtype=np.int16), fltr)


@pytest.mark.parametrize("n", [1, 2, 11, 70, 71, 200])
def test_filter_output_length_equals_input_length(n: int) -> None:
    fltr = design_lowpass(n, FS_HZ, PASSBAND_HZ)
    x = np.arange(-50, 50, dtype=np.int16)
    y = fir_filter(x, fltr)
    assert len(y) == len(x)
    assert y.dtype == np.float64


def test_filter_compensates_group_delay() -> None:
    fltr = design_lowpass(11, FS_HZ, PASSBAND_HZ)
    x = np.zeros(41, dtype=np.int16)
    x[20] = 1000
    y = fir_filter(x, fltr)
    assert np.argmax(y) == 20
    np.testing.assert_allclose(y[15:26], 1000 * fltr.b)
    np.testing.assert_allclose(y[:15], 0.0)
    np.testing.assert_allclose(y[26:], 0.0)


def test_filter_matches_numpy_same_for_odd_length() -> None:
    fltr = design_lowpass_kaiser_opt(FS_HZ, 8000)
    rng = np.random.default_rng(3)
    x = rng.integers(-3000, 3000, size=480).astype(np.int16)
    np.testing.assert_allclose(fir_filter(x, fltr), np.convolve(x, fltr.b, mode="same"), atol=1e-9)


def test_filter_rejects_short_output_buffer() -> None:
    fltr = design_lowpass(11, FS_HZ, PASSBAND_HZ)
    with pytest.raises(ParameterError):
        fir_filter(np.ones(20, dtype=np.int16), fltr, out_len=19)
    assert len(fir_filter(np.ones(20, dtype=np.int16), fltr, out_len=20)) == 20


@pytest.mark.parametrize("x", [5, None, np.ones((2, 3)), []])
def test_filter_rejects_non_frame_input(x) -> None:
    fltr = design_lowpass(11, FS_HZ, PASSBAND_HZ)
    with pytest.raises(ParameterError):
        fir_filter(x, fltr)


def test_filter_accepts_plain_list() -> None:
    fltr = design_lowpass(3, FS_HZ, PASSBAND_HZ)
    assert len(fir_filter([1, 2, 3, 4], fltr)) == 4
