import math

import numpy as np
import pandas as pd
import pytest

from main import SEED, main, run_simulation, silicon_resolution
from readout import Readout, ReadoutKind


@pytest.mark.parametrize("num_events", [1, 7, 50])
def test_every_histogram_gets_one_fill_per_event(num_events):
    histograms = run_simulation(num_events)
    assert list(histograms) == ["a", "b", "c.i", "c.ii"]
    for h in histograms.values():
        assert h.entries == num_events


def test_single_event_fixed_center_residual():
    x0 = np.random.default_rng(SEED).uniform(0.0, 1.0) - 0.5
    histograms = run_simulation(1)
    assert histograms["a"].mean == -x0


def test_fixed_center_residual_is_uniform(simulated_histograms):
    a = simulated_histograms["a"]
    assert a.n_in_range == 2000
    assert a.mean == pytest.approx(0.0, abs=0.03)
    assert a.variance == pytest.approx(1.0 / 12.0, abs=0.01)


def test_fixed_center_residual_mirrors_true_position(tmp_path):
    csv_path = tmp_path / "residuals.csv"
    run_simulation(200, csv_path=str(csv_path))
    df = pd.read_csv(csv_path, dtype={"Readout": str})
    a = df[df["Readout"] == "a"]
    np.testing.assert_allclose(a["residual"], -a["x_true"], atol=2e-6)


def test_three_level_beats_fixed_center(simulated_histograms):
    assert simulated_histograms["b"].std_dev < simulated_histograms["a"].std_dev


def test_low_noise_centroid_has_smaller_spread(simulated_histograms):
    assert simulated_histograms["c.ii"].variance < simulated_histograms["c.i"].variance


def test_reproducible_with_fixed_seed():
    first = run_simulation(1000)
    second = run_simulation(1000)
    for name in first:
        assert first[name].stats() == second[name].stats()
        np.testing.assert_array_equal(first[name].counts, second[name].counts)


def test_different_seed_changes_the_run():
    assert run_simulation(100, seed=1)["a"].mean != run_simulation(100, seed=2)["a"].mean


@pytest.mark.parametrize("num_events", [0, -5, 2.5, True, "10"])
def test_invalid_event_count(num_events):
    with pytest.raises(ValueError):
        run_simulation(num_events)


def test_centroid_without_charge_is_counted_as_nan(capsys):
    blind = Readout("x", "Blind", ReadoutKind.CENTROID, sigma_noise=0.0, threshold=2.0)
    histograms = run_simulation(20, readouts=[blind])
    h = histograms["x"]
    assert h.entries == 20
    assert h.nan_entries == 20
    assert h.n_in_range == 0
    assert math.isnan(h.mean)
    assert "[!] Blind: 20 events" in capsys.readouterr().out


def test_csv_has_one_row_per_event_and_readout(tmp_path):
    csv_path = tmp_path / "residuals.csv"
    run_simulation(25, csv_path=str(csv_path))
    df = pd.read_csv(csv_path)
    assert list(df.columns) == ["EventID", "Readout", "x_true", "x_measured", "residual"]
    assert len(df) == 100
    # paired samples: one x_true per event shared by all readouts
    assert (df.groupby("EventID")["x_true"].nunique() == 1).all()


def test_silicon_resolution_writes_plot(tmp_path):
    out = tmp_path / "siliconResolution.png"
    histograms = silicon_resolution(100, str(out))
    assert out.exists()
    assert out.stat().st_size > 0
    assert len(histograms) == 4


def test_silicon_resolution_unwritable_path(tmp_path):
    with pytest.raises(OSError):
        silicon_resolution(10, str(tmp_path / "missing" / "out.png"))


def test_main_entry_point(tmp_path, capsys):
    out = tmp_path / "plot.png"
    assert main(["30", str(out)]) == 0
    assert out.exists()

    assert main(["0", str(out)]) == 1
    assert "Error:" in capsys.readouterr().out


def test_duplicate_readout_names_rejected():
    r1 = Readout("c", "First", ReadoutKind.CENTROID, 0.05, 0.2)
    r2 = Readout("c", "Second", ReadoutKind.CENTROID, 0.025, 0.1)
    with pytest.raises(ValueError, match="unique"):
        run_simulation(10, readouts=[r1, r2])
