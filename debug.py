# debug.py
import matplotlib.pyplot as plt
import numpy as np

from event import create_random_event
from readout import READOUTS
from sensor import StripSensor


# ---- Debug helper: charge sharing and all estimates for one hit ----
def debug_event(x_true: float, sensor: StripSensor = None, noise: dict = None) -> dict:
    """
    Print the per-strip charges and what every readout reconstructs.

    Returns readout name -> measured position.
    """
    if sensor is None:
        sensor = StripSensor()
    noise = noise or {}
    charges = sensor.charges(x_true)
    centers = sensor.centers

    print(f"    [debug] x_true = {x_true:+.6f}")
    for s, (xc, q) in enumerate(zip(centers, charges)):
        lo, hi = sensor.strip_edges(s, x_true)
        line = f"    [debug] strip {s} (x={xc:+.0f}) edges [{lo:+.3f}, {hi:+.3f}]  q = {q:.6f}"
        for name, n in noise.items():
            line += f"  q_{name} = {q + n[s]:.6f}"
        print(line)
    print(f"    [debug] sum q = {charges.sum():.8f}")

    measured = {}
    for r in READOUTS:
        x_meas = r.measure(x_true, charges, centers, noise.get(r.name))
        measured[r.name] = x_meas
        print(f"    [debug] {r.title:<10} x_meas = {x_meas:+.6f}  residual = {x_meas - x_true:+.6f}")
    return measured


# ---- Run directly ----
if __name__ == "__main__":
    rng = np.random.default_rng(12345)
    event = create_random_event(0, rng)   # same first event as main.run_simulation
    sensor = StripSensor()

    debug_event(event.x_true, sensor, event.noise)

    from pyscripts.plotting import plot_strip_charges
    plot_strip_charges(sensor, event.x_true, noise=event.noise)
    plt.show()
