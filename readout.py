# ---------------------------------------------------------------------
# readout.py
# Position estimators for a 7-strip sensor
# ---------------------------------------------------------------------

import math
import numpy as np
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

# =====================================================================
#                         Constants
# =====================================================================

THREE_LEVEL_BAND = 1.0 / 3.0    # |x| below this reads as the strip centre
THREE_LEVEL_STEP = 0.5          # otherwise reads as +-0.5

SIGMA_NOISE_A = 0.05
THRESHOLD_A = 0.2
SIGMA_NOISE_B = 0.025
THRESHOLD_B = 0.1


class ReadoutKind(Enum):
    FIXED_CENTER = "fixed_center"
    THREE_LEVEL = "three_level"
    CENTROID = "centroid"


# =====================================================================
#                         Estimators
# =====================================================================

def fixed_center() -> float:
    """Binary readout: the hit strip is known, nothing inside it is."""
    return 0.0


def three_level(x_true: float) -> float:
    """
    Best case for a readout that can tell three regions of a strip apart.

    Uses the true position directly; this is the ideal 1-bit-per-edge
    encoding, not something reconstructed from the strip signals.
    """
    if abs(x_true) < THREE_LEVEL_BAND:
        return 0.0
    return THREE_LEVEL_STEP if x_true > 0 else -THREE_LEVEL_STEP


def centroid(charges: np.ndarray, centers: np.ndarray, threshold: float) -> float:
    """
    Charge-weighted centroid of the strips at or above threshold.

    Strips below threshold are set to zero before averaging.
    Returns nan when no strip survives (total charge is zero).
    """
    ch = np.where(charges < threshold, 0.0, charges)
    ch_tot = float(np.sum(ch))
    if ch_tot == 0.0:
        return math.nan
    return float(np.sum(ch * centers)) / ch_tot


# =====================================================================
#                         Readout variants
# =====================================================================

@dataclass(frozen=True)
class Readout:
    """
    One readout strategy.

    Attributes:
        name        : short identifier ("a", "b", "c.i", "c.ii")
        title       : plot title
        kind        : which estimator is applied
        sigma_noise : Gaussian noise added per strip (CENTROID only)
        threshold   : discriminator cut on strip charge (CENTROID only)
    """
    name: str
    title: str
    kind: ReadoutKind
    sigma_noise: float = 0.0
    threshold: float = 0.0

    @property
    def is_noisy(self) -> bool:
        return self.kind is ReadoutKind.CENTROID and self.sigma_noise > 0

    def measure(self, x_true: float, charges: np.ndarray, centers: np.ndarray,
                noise: Optional[np.ndarray] = None) -> float:
        """
        Estimated hit position for one event.

        Args:
            x_true  : true hit position (only THREE_LEVEL looks at it)
            charges : noise-free charge fraction per strip
            centers : strip centre positions
            noise   : per-strip noise for this readout, or None for none
        """
        if self.kind is ReadoutKind.FIXED_CENTER:
            return fixed_center()
        if self.kind is ReadoutKind.THREE_LEVEL:
            return three_level(x_true)
        measured = charges if noise is None else charges + noise
        return centroid(measured, centers, self.threshold)


READOUTS: Tuple[Readout, ...] = (
    Readout("a", "Part a", ReadoutKind.FIXED_CENTER),
    Readout("b", "Part b", ReadoutKind.THREE_LEVEL),
    Readout("c.i", "Part c.i", ReadoutKind.CENTROID, SIGMA_NOISE_A, THRESHOLD_A),
    Readout("c.ii", "Part c.ii", ReadoutKind.CENTROID, SIGMA_NOISE_B, THRESHOLD_B),
)


def get_readout(name: str) -> Readout:
    for r in READOUTS:
        if r.name == name:
            return r
    raise KeyError(f"unknown readout {name!r}")
