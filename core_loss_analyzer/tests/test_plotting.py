import numpy as np

from core_loss_analyzer.analysis.igse import compute_igse
from core_loss_analyzer.analysis.plotting import plot_loop_decomposition
from core_loss_analyzer.models.profile import SteinmetzProfile


class TestPlotLoopDecomposition:
    def test_smoke(self):
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        t = np.linspace(0.0, 1e-4, 1001)
        theta = 2.0 * np.pi * t / 1e-4
        b = 0.1 * np.sin(theta) + 0.03 * np.sin(5.0 * theta + 0.3)
        res = compute_igse(t, b, SteinmetzProfile(alpha=1.5, beta=2.5, k=1.0))

        fig, ax = plt.subplots()
        out = plot_loop_decomposition(ax, res)
        assert out is ax
        assert len(ax.lines) >= res.n_loops + 2
        plt.close(fig)
