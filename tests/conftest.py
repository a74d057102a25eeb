import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from histogram import Histogram
from main import run_simulation
from sensor import StripSensor


@pytest.fixture
def sensor():
    return StripSensor()


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def filled_histograms():
    return {
        "a": _hist("a", "Part a", [-0.4, -0.1, 0.2, 0.3]),
        "b": _hist("b", "Part b", [0.1, -0.1, 0.05]),
        "c.i": _hist("c.i", "Part c.i", [0.0, 0.01, -0.02, 1.5]),
        "c.ii": _hist("c.ii", "Part c.ii", [0.0, 0.005, float("nan")]),
    }


@pytest.fixture(scope="session")
def simulated_histograms():
    return run_simulation(2000)


def _hist(name, title, values):
    h = Histogram(name, title)
    for v in values:
        h.fill(v)
    return h
