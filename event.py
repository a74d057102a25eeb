# event.py
import numpy as np
from dataclasses import dataclass, field
from typing import Dict, Sequence

from readout import READOUTS, Readout
from sensor import N_STRIPS

# --- CONSTANTS ---
X_MIN = -0.5   # beam spread, in units of strip pitch
X_WIDTH = 1.0


@dataclass
class Event:
    """
    One simulated particle crossing the sensor.

    Attributes:
        event_id : event number
        x_true   : true hit position, uniform in [-0.5, 0.5)
        noise    : readout name -> per-strip Gaussian noise sample
    """
    event_id: int
    x_true: float
    noise: Dict[str, np.ndarray] = field(default_factory=dict)


def create_random_event(event_id: int, rng: np.random.Generator,
                        readouts: Sequence[Readout] = READOUTS,
                        n_strips: int = N_STRIPS) -> Event:
    x_true = rng.uniform(0.0, X_WIDTH) + X_MIN

    noisy = [r for r in readouts if r.is_noisy]
    noise = {}
    if noisy:
        sigmas = np.array([r.sigma_noise for r in noisy])
        # strip-major: for each strip one sample per noisy readout
        samples = rng.normal(0.0, sigmas, size=(n_strips, len(noisy)))
        for col, r in enumerate(noisy):
            noise[r.name] = samples[:, col]

    return Event(event_id, float(x_true), noise)
