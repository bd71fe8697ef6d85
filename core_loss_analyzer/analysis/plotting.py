"""Plot helpers for inspecting a minor-loop decomposition."""

from __future__ import annotations

import numpy as np

from core_loss_analyzer.models.results import IgseResult


def plot_loop_decomposition(ax, result: IgseResult, *, cmap: str = "tab10", show_loops: bool = True):
    """Plot the rotated waveform with each sample coloured by its loop label.

    Parameters
    ----------
    ax : matplotlib Axes
    result : IgseResult
        Output of :func:`~core_loss_analyzer.analysis.igse.compute_igse`.
    cmap : str
        Qualitative colormap; label ``m`` uses colour ``m % N``.
    show_loops : bool
        Mark each minor loop's start and end sample.
    """
    import matplotlib.pyplot as plt

    t = np.asarray(result.time)
    b = np.asarray(result.flux)
    labels = np.asarray(result.labels)
    colors = plt.get_cmap(cmap)

    ax.plot(t, b, "-", color="lightgrey", lw=1.0, zorder=1)
    for m in np.unique(labels):
        sel = labels == m
        ax.plot(
            t[sel], b[sel], ".",
            color=colors(int(m) % colors.N),
            ms=3,
            label="major" if m == 0 else f"loop {int(m)}",
            zorder=2,
        )

    if show_loops:
        for lp in result.loops:
            ax.plot(
                [t[lp.start], t[lp.end]], [b[lp.start], b[lp.end]], "x",
                color=colors(lp.label % colors.N),
                ms=6,
                zorder=3,
            )

    ax.set_xlabel("time [s]")
    ax.set_ylabel("B [T]")
    ax.set_title(f"{result.name}: {result.n_loops} minor loops, {result.loss_W_per_m3:.4g} W/m$^3$")
    if np.unique(labels).size <= 10:
        ax.legend(loc="best", fontsize="small")
    return ax
