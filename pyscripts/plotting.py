import matplotlib.pyplot as plt

from readout import READOUTS
from sensor import StripSensor

cmap = list(plt.get_cmap("tab10").colors)

# ----------------------------------------------------------
# 1. Residual histograms, one panel per readout
# ----------------------------------------------------------

def _draw_stats_box(ax, histogram):
    text = (
        f"Entries  {histogram.entries}\n"
        f"Mean  {histogram.mean:.4f}\n"
        f"Std Dev  {histogram.std_dev:.4f}"
    )
    ax.text(0.97, 0.97, text, transform=ax.transAxes,
            ha="right", va="top", fontsize="small", family="monospace",
            bbox=dict(boxstyle="square", facecolor="white", edgecolor="black"))


def plot_residuals_grid(
    histograms: dict,
    output_file: str = None
):
    """
    Draw the residual histograms of the four readouts on a 2×2 grid.

    Parameters
    ----------
    histograms : dict
        readout name -> Histogram. Panels are filled in dict order
        (left to right, top to bottom); at most four are drawn.
    output_file : str, optional
        If given, the figure is saved there. Errors from an unwritable
        path are not caught.

    Returns
    -------
    fig : matplotlib.figure.Figure
    axs : numpy.ndarray of matplotlib.axes.Axes, shape (2, 2)

    Notes
    -----
    Panels without a histogram are switched off. This function does not
    call `plt.show()`.
    """
    fig, axs = plt.subplots(nrows=2, ncols=2, figsize=(12, 9))

    hists = list(histograms.values())
    for i, ax in enumerate(axs.flat):
        if i >= len(hists):
            ax.axis("off")
            continue
        h = hists[i]
        ax.stairs(h.counts, h.bin_edges, color=cmap[i % len(cmap)], linewidth=1.2)
        ax.set_xlim(h.x_min, h.x_max)
        ax.set_title(h.title)
        ax.set_xlabel(h.x_label)
        ax.set_ylabel(h.y_label)
        _draw_stats_box(ax, h)

    plt.tight_layout()

    if output_file is not None:
        try:
            fig.savefig(output_file)
        except OSError:
            plt.close(fig)
            raise

    return fig, axs


# ----------------------------------------------------------
# 2. Charge sharing for one hit position
# ----------------------------------------------------------

def plot_strip_charges(
    sensor: StripSensor,
    x_true: float,
    readouts=READOUTS,
    noise: dict = None
):
    """
    Bar plot of the charge fraction on every strip for a hit at x_true.

    Thresholds of the centroid readouts are drawn as horizontal lines and the
    true position as a vertical dashed line. If `noise` (readout name ->
    per-strip noise) is given, the noisy charges of each readout are overlaid.

    Returns fig, ax for testing.
    """
    fig, ax = plt.subplots(figsize=(8, 5))

    centers = sensor.centers
    charges = sensor.charges(x_true)
    ax.bar(centers, charges, width=0.9 * sensor.pitch, color="lightgray",
           edgecolor="black", label="charge fraction")

    for i, r in enumerate(readouts):
        if r.threshold <= 0:
            continue
        color = cmap[(i + 2) % len(cmap)]
        ax.axhline(r.threshold, linestyle=":", color=color,
                   label=f"{r.title} threshold ({r.threshold:g})")
        if noise and r.name in noise:
            ax.scatter(centers, charges + noise[r.name], marker="x", color=color,
                       zorder=3, label=f"{r.title} measured")

    ax.axvline(x_true, linestyle="--", color="red", label=f"x_true = {x_true:.3f}")
    ax.set_xticks(centers)
    ax.set_xticklabels(sensor.strip_labels())
    ax.set_xlabel("strip centre (pitch)")
    ax.set_ylabel("charge fraction")
    ax.set_title("Charge sharing between strips")
    ax.grid(True, alpha=0.3)
    ax.legend(fontsize="small")

    plt.tight_layout()

    return fig, ax
