# histogram.py
import math
import numpy as np
from typing import Dict

X_LABEL = "(measured − true)"
Y_LABEL = "Number of Entries"


class Histogram:
    """
    Fixed-bin 1D histogram with underflow/overflow counters.

    Mean and standard deviation are computed from the filled values rather
    than from bin centres, and only over in-range fills (values landing in
    underflow/overflow are counted but do not enter the statistics).
    A nan fill is counted in `entries` and `nan_entries` only.

    Attributes:
        name, title        : identifiers used for lookup and plotting
        n_bins, x_min, x_max : binning
        underflow, overflow  : counts outside [x_min, x_max)
        entries            : total number of fill() calls
        nan_entries        : fills with an undefined value
    """
    def __init__(self, name: str, title: str, n_bins: int = 100,
                 x_min: float = -1.0, x_max: float = 1.0,
                 x_label: str = X_LABEL, y_label: str = Y_LABEL):
        if n_bins < 1:
            raise ValueError(f"n_bins must be positive, got {n_bins}")
        if not x_max > x_min:
            raise ValueError(f"x_max ({x_max}) must be above x_min ({x_min})")
        self.name = name
        self.title = title
        self.n_bins = n_bins
        self.x_min = x_min
        self.x_max = x_max
        self.x_label = x_label
        self.y_label = y_label

        self._edges = np.linspace(x_min, x_max, n_bins + 1)
        self._counts = np.zeros(n_bins, dtype=np.int64)
        self.underflow = 0
        self.overflow = 0
        self.entries = 0
        self.nan_entries = 0
        self._sum = 0.0
        self._sum2 = 0.0

    def fill(self, value: float):
        self.entries += 1
        if math.isnan(value):
            self.nan_entries += 1
            return
        if value < self.x_min:
            self.underflow += 1
            return
        if value >= self.x_max:
            self.overflow += 1
            return

        # index from the edges so counts always agree with bin_edges
        idx = min(int(np.searchsorted(self._edges, value, side="right")) - 1, self.n_bins - 1)
        self._counts[idx] += 1
        self._sum += value
        self._sum2 += value * value

    # -----------------------------------------------------------------
    # Read-only views
    # -----------------------------------------------------------------
    @property
    def counts(self) -> np.ndarray:
        return self._counts.copy()

    @property
    def bin_edges(self) -> np.ndarray:
        return self._edges.copy()

    @property
    def bin_centers(self) -> np.ndarray:
        edges = self.bin_edges
        return 0.5 * (edges[:-1] + edges[1:])

    @property
    def n_in_range(self) -> int:
        return int(self._counts.sum())

    @property
    def mean(self) -> float:
        n = self.n_in_range
        if n == 0:
            return math.nan
        return self._sum / n

    @property
    def variance(self) -> float:
        n = self.n_in_range
        if n == 0:
            return math.nan
        mean = self._sum / n
        return max(self._sum2 / n - mean * mean, 0.0)

    @property
    def std_dev(self) -> float:
        return math.sqrt(self.variance)

    def stats(self) -> Dict[str, float]:
        return {
            "entries": self.entries,
            "in_range": self.n_in_range,
            "underflow": self.underflow,
            "overflow": self.overflow,
            "nan": self.nan_entries,
            "mean": self.mean,
            "std_dev": self.std_dev,
        }

    def __repr__(self):
        return (f"Histogram({self.name!r}, entries={self.entries}, "
                f"mean={self.mean:.4g}, std_dev={self.std_dev:.4g})")
