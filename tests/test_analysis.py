import matplotlib.pyplot as plt
import pytest

from multirate_dsp.analysis import (
    frequency_response,
    passband_ripple_db,
    plot_frequency_response,
    stopband_attenuation_db,
)
from multirate_dsp.errors import ParameterError
from multirate_dsp.fir import FIRFilter, design_lowpass, design_lowpass_kaiser_opt, shape_filter
from multirate_dsp.windows import hamming_window


def test_frequency_response_covers_up_to_nyquist() -> None:
    fltr = design_lowpass_kaiser_opt(48000, 8000)
    w, mag_db = frequency_response(fltr, worN=512)
    assert len(w) == len(mag_db) == 512
    assert w[0] == 0.0
    assert w[-1] < 24000


def test_windowed_designs_attenuate_the_stopband() -> None:
    kaiser_ls = design_lowpass_kaiser_opt(48000, 8000)
    assert stopband_attenuation_db(kaiser_ls, 16000) > 30.0
    assert passband_ripple_db(kaiser_ls) < 1.0

    hamming_ss = shape_filter(design_lowpass(71, 48000, 8000), hamming_window(71))
    assert stopband_attenuation_db(hamming_ss, 14000) > 30.0


def test_analysis_rejects_undesigned_filter() -> None:
    with pytest.raises(ParameterError):
        frequency_response(FIRFilter())


def test_stopband_above_nyquist_is_rejected() -> None:
    with pytest.raises(ParameterError):
        stopband_attenuation_db(design_lowpass_kaiser_opt(48000, 4000), 30000)


def test_plot_saves_figure(tmp_path) -> None:
    filters = [design_lowpass_kaiser_opt(48000, 4000), design_lowpass_kaiser_opt(48000, 8000)]
    path = tmp_path / "resp.png"
    fig = plot_frequency_response(filters, path)
    assert path.exists()
    assert len(fig.axes) == 2
    plt.close(fig)
