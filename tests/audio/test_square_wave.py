import pytest

from pychip8.audio import square_wave_samples


def test_square_wave_period():
    samples = square_wave_samples(44_100, 441.0, amplitude=100)

    assert len(samples) == 100
    assert list(samples[:50]) == [100] * 50
    assert list(samples[50:]) == [-100] * 50


def test_square_wave_minimum_period():
    samples = square_wave_samples(8, 100.0)

    assert len(samples) == 2
    assert samples[0] > 0 > samples[1]


def test_square_wave_rejects_bad_inputs():
    with pytest.raises(ValueError):
        square_wave_samples(0, 440.0)
    with pytest.raises(ValueError):
        square_wave_samples(44_100, 0.0)
