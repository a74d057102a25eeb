# sensor.py
import math
import numpy as np
from typing import List, Tuple

N_STRIPS = 7
STRIP_PITCH = 1.0


class StripSensor:
    """
    Models a segmented silicon sensor made of contiguous unit-pitch strips,
    positioned symmetrically around x = 0.
    Responsible for sharing the deposited charge between strips.

    Attributes:
        n_strips : number of strips (strip index runs 0..n_strips-1)
        pitch    : strip width; all positions are in units of pitch
        offset   : position of the low edge of strip 0 (-n_strips/2)

    The charge cloud is a Gaussian whose integral is written with erf on the
    raw edge distance, i.e. a profile exp(-t^2)/sqrt(pi).
    """
    def __init__(self, n_strips: int = N_STRIPS, pitch: float = STRIP_PITCH):
        if n_strips < 1:
            raise ValueError(f"n_strips must be positive, got {n_strips}")
        self.n_strips = n_strips
        self.pitch = pitch
        self.offset = -0.5 * n_strips * pitch

    @property
    def centers(self) -> np.ndarray:
        """Strip centre positions (-3 .. +3 for the default 7 strips)."""
        return self.offset + self.pitch * (np.arange(self.n_strips) + 0.5)

    def _check_strip(self, strip: int):
        if not 0 <= strip < self.n_strips:
            raise IndexError(f"strip {strip} outside [0, {self.n_strips})")

    def strip_edges(self, strip: int, x_true: float) -> Tuple[float, float]:
        """
        Strip edges measured relative to the true hit position.

        Returns:
            (low_edge, high_edge) with high_edge = low_edge + pitch
        """
        self._check_strip(strip)
        low_edge = self.offset + strip * self.pitch - x_true
        return low_edge, low_edge + self.pitch

    def charge_fraction(self, strip: int, x_true: float) -> float:
        """
        Fraction of the charge cloud collected on one strip.

        Computed as 1 - (charge below the low edge) - (charge above the high edge).
        Each tail is taken from erfc when the edge is on the tail side of the
        cloud, so that far-away strips do not lose precision to cancellation.
        """
        low_edge, high_edge = self.strip_edges(strip, x_true)

        if low_edge < 0:
            below = 0.5 * math.erfc(abs(low_edge))
        else:
            below = 0.5 + 0.5 * math.erf(low_edge)

        if high_edge > 0:
            above = 0.5 * math.erfc(abs(high_edge))
        else:
            above = 0.5 + 0.5 * math.erf(abs(high_edge))

        return 1.0 - below - above

    def charges(self, x_true: float) -> np.ndarray:
        """Noise-free charge fractions on every strip for a hit at x_true."""
        return np.array([self.charge_fraction(s, x_true) for s in range(self.n_strips)])

    def strip_labels(self) -> List[str]:
        return [f"{c:+.0f}" for c in self.centers]
