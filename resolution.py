"""
Spatial resolution summary for the readout comparison.

Resolution is the spread of the residuals r = x_meas - x_true:
- bias   : mean residual
- sigma  : standard deviation of the residuals
- RMS    : sqrt(bias^2 + sigma^2)
"""

import math
import numpy as np
import pandas as pd
from typing import Dict, Mapping

from histogram import Histogram


def calculate_resolution_stats(histogram: Histogram) -> Dict:
    """
    Resolution statistics of one filled histogram.

    Args:
        histogram: residual histogram of one readout

    Returns:
        dict with statistics
    """
    mean = histogram.mean
    std = histogram.std_dev
    rms = math.sqrt(mean * mean + std * std) if histogram.n_in_range else math.nan
    return {
        'name': histogram.name,
        'title': histogram.title,
        'n_events': histogram.entries,
        'n_in_range': histogram.n_in_range,
        'underflow': histogram.underflow,
        'overflow': histogram.overflow,
        'n_nan': histogram.nan_entries,
        'mean_bias': mean,
        'std_dev': std,
        'rms': rms,
    }


def resolution_table(histograms: Mapping[str, Histogram]) -> pd.DataFrame:
    """One row per readout, indexed by readout name."""
    rows = [calculate_resolution_stats(h) for h in histograms.values()]
    return pd.DataFrame(rows).set_index('name')


def print_resolution_table(histograms: Mapping[str, Histogram]):
    df = resolution_table(histograms)

    print(f"\n{'Readout':<12} {'N':>8} {'Bias':>10} {'σ':>10} {'RMS':>10} {'Out':>6} {'NaN':>6}")
    print("=" * 68)
    for _, row in df.iterrows():
        out = row['underflow'] + row['overflow']
        print(f"{row['title']:<12} {row['n_events']:>8d} {row['mean_bias']:>10.4f} "
              f"{row['std_dev']:>10.4f} {row['rms']:>10.4f} {out:>6d} {row['n_nan']:>6d}")
    print()


# ----------------------------------------------------------
# Residual CSV written by main.run_simulation(csv_path=...)
# ----------------------------------------------------------

def load_residuals_csv(csv_path: str) -> pd.DataFrame:
    return pd.read_csv(csv_path, dtype={"Readout": str})


def residual_stats_from_csv(csv_path: str) -> pd.DataFrame:
    """
    Recompute bias / sigma / RMS per readout from the raw residuals.

    Unlike the histogram statistics this uses every finite residual,
    including those outside the histogram range. sigma is the unbiased
    (ddof=1) estimator.
    """
    df = load_residuals_csv(csv_path)
    df = df[np.isfinite(df["residual"])]
    grouped = df.groupby("Readout", sort=False)["residual"]
    return pd.DataFrame({
        "n_events": grouped.size(),
        "mean_bias": grouped.mean(),
        "std_dev": grouped.std(ddof=1),
        "rms": grouped.apply(lambda r: float(np.sqrt(np.mean(r ** 2)))),
    })
