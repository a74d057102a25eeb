# main.py
import argparse
import csv
import sys
import numpy as np
from contextlib import ExitStack
from typing import Dict, Optional, Sequence

from event import create_random_event
from hit import Hit
from histogram import Histogram
from readout import READOUTS, Readout
from resolution import print_resolution_table
from sensor import StripSensor

NUM_EVENTS = 10000
OUTPUT_FILE = "siliconResolution.png"
SEED = 12345

N_BINS = 100
X_MIN = -1.0
X_MAX = 1.0

CSV_HEADER = ["EventID", "Readout", "x_true", "x_measured", "residual"]


def _check_num_events(num_events):
    if isinstance(num_events, bool) or not isinstance(num_events, (int, np.integer)):
        raise ValueError(f"num_events must be an integer, got {num_events!r}")
    if num_events < 1:
        raise ValueError(f"num_events must be >= 1, got {num_events}")


def _check_readout_names(readouts):
    # histograms and noise are keyed by name
    names = [r.name for r in readouts]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ValueError(f"readout names must be unique, duplicated: {duplicates}")


def run_simulation(num_events: int, seed: int = SEED,
                   readouts: Sequence[Readout] = READOUTS,
                   sensor: Optional[StripSensor] = None,
                   csv_path: Optional[str] = None) -> Dict[str, Histogram]:
    """
    Generate events and fill one residual histogram per readout.

    Every readout measures the same event (same x_true) so the histograms
    are paired samples.

    Parameters
    ----------
    num_events : int
        Number of events to generate (>= 1).
    seed : int, optional
        Seed for the random generator; a fixed seed gives an identical run.
    readouts : sequence of Readout, optional
        Readout strategies to compare. Default is the four standard ones.
    sensor : StripSensor, optional
        Strip geometry. Default is the 7-strip unit-pitch sensor.
    csv_path : str, optional
        If given, every (event, readout) residual is written to this CSV.

    Returns
    -------
    histograms : dict
        readout name -> filled Histogram, in readout order.
    """
    _check_num_events(num_events)
    _check_readout_names(readouts)
    if sensor is None:
        sensor = StripSensor()
    rng = np.random.default_rng(seed)
    centers = sensor.centers

    histograms = {
        r.name: Histogram(r.name, r.title, N_BINS, X_MIN, X_MAX)
        for r in readouts
    }

    print(f"[i] About to generate {num_events} events")

    with ExitStack() as stack:
        writer = None
        if csv_path is not None:
            csvfile = stack.enter_context(open(csv_path, mode="w", newline=""))
            writer = csv.writer(csvfile)
            writer.writerow(CSV_HEADER)

        for event_id in range(num_events):
            event = create_random_event(event_id, rng, readouts, sensor.n_strips)
            charges = sensor.charges(event.x_true)

            for r in readouts:
                x_meas = r.measure(event.x_true, charges, centers, event.noise.get(r.name))
                hit = Hit(event_id, r.name, x_meas, event.x_true)
                histograms[r.name].fill(hit.residual)

                if writer is not None:
                    writer.writerow([
                        hit.event_id,
                        hit.readout,
                        f"{hit.x_true:.6f}",
                        f"{hit.x_measured:.6f}",
                        f"{hit.residual:.6f}",
                    ])

    for h in histograms.values():
        if h.nan_entries:
            print(f"[!] {h.title}: {h.nan_entries} events with no strip above threshold "
                  f"(excluded from mean/std)")

    return histograms


def silicon_resolution(num_events: int, file_name: str, seed: int = SEED,
                       csv_path: Optional[str] = None) -> Dict[str, Histogram]:
    """Run the simulation, print the resolution summary and save the 2x2 plot."""
    # Imported here so the simulation itself does not need a plotting backend
    import matplotlib.pyplot as plt
    from pyscripts.plotting import plot_residuals_grid

    histograms = run_simulation(num_events, seed=seed, csv_path=csv_path)
    print_resolution_table(histograms)

    fig, _ = plot_residuals_grid(histograms, output_file=file_name)
    plt.close(fig)
    print(f"Simulation complete. Plot saved to {file_name}")
    if csv_path is not None:
        print(f"Residuals saved to {csv_path}")
    return histograms


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Monte Carlo of strip-detector position resolution for four readouts",
    )
    parser.add_argument("num_events", nargs="?", type=int, default=NUM_EVENTS,
                        help=f"Number of events (default: {NUM_EVENTS})")
    parser.add_argument("file_name", nargs="?", default=OUTPUT_FILE,
                        help=f"Output image (default: {OUTPUT_FILE})")
    parser.add_argument("--csv", default=None,
                        help="Also write per-event residuals to this CSV file")
    args = parser.parse_args(argv)

    try:
        silicon_resolution(args.num_events, args.file_name, csv_path=args.csv)
    except (ValueError, OSError) as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
