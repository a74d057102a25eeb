import math

import numpy as np
import pytest

from sensor import StripSensor


def test_centers_are_symmetric_unit_pitch(sensor):
    np.testing.assert_allclose(sensor.centers, [-3, -2, -1, 0, 1, 2, 3])
    assert sensor.strip_labels()[0] == "-3"


def test_strip_edges_relative_to_true_position(sensor):
    low, high = sensor.strip_edges(0, 0.25)
    assert low == pytest.approx(-3.75)
    assert high == pytest.approx(-2.75)

    low, high = sensor.strip_edges(6, -0.5)
    assert low == pytest.approx(3.0)
    assert high == pytest.approx(4.0)


@pytest.mark.parametrize("x_true", np.linspace(-0.5, 0.5, 11))
def test_noise_free_charges_sum_to_one(sensor, x_true):
    charges = sensor.charges(x_true)
    assert charges.shape == (7,)
    assert np.all(charges >= 0)
    assert charges.sum() == pytest.approx(1.0, abs=1e-4)


def test_center_strip_fraction_for_central_hit(sensor):
    assert sensor.charge_fraction(3, 0.0) == pytest.approx(math.erf(0.5))


def test_charges_mirror_under_reflection(sensor):
    np.testing.assert_allclose(sensor.charges(0.3), sensor.charges(-0.3)[::-1], atol=1e-12)


def test_far_tail_strip_keeps_precision(sensor):
    # strip 0 for a hit at +0.5 covers [-4, -3] relative to the hit
    expected = 0.5 * (math.erfc(3.0) - math.erfc(4.0))
    assert sensor.charge_fraction(0, 0.5) == pytest.approx(expected, rel=1e-6)


def test_strip_index_out_of_range(sensor):
    with pytest.raises(IndexError):
        sensor.charge_fraction(7, 0.0)
    with pytest.raises(IndexError):
        sensor.strip_edges(-1, 0.0)


def test_invalid_strip_count():
    with pytest.raises(ValueError):
        StripSensor(n_strips=0)
