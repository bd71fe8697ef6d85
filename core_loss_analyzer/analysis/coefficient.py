r"""Modified Steinmetz coefficient ``ki``.

IGSE replaces the Steinmetz coefficient ``k`` with ``ki`` so that, for a
sinusoidal excitation, the IGSE integral reproduces the original Steinmetz
equation:

.. math::

    k_i = \frac{k}{2^{\beta-1}\,\pi^{\alpha-1}\,q}, \qquad
    q = 4\int_0^{\pi/2} \cos^{\alpha}(x)\,dx

The integral is evaluated with the trapezoidal rule on a dense uniform grid.
"""

from __future__ import annotations

import math

import numpy as np

from core_loss_analyzer.errors import InvalidCoefficientError
from core_loss_analyzer.models.profile import DEFAULT_QUADRATURE_POINTS


def _check_positive(**coeffs: float) -> None:
    bad = []
    for name, value in coeffs.items():
        try:
            v = float(value)
        except (TypeError, ValueError):
            bad.append(f"{name}={value!r}")
            continue
        if not (math.isfinite(v) and v > 0.0):
            bad.append(f"{name}={value!r}")
    if bad:
        raise InvalidCoefficientError(
            "Steinmetz coefficients must be finite and > 0, got " + ", ".join(bad)
        )


def cos_power_integral(alpha: float, *, n_grid: int = DEFAULT_QUADRATURE_POINTS) -> float:
    """Trapezoidal estimate of the integral of ``cos(x)**alpha`` over ``[0, pi/2]``."""
    n = int(n_grid)
    if n < 2:
        raise ValueError(f"n_grid must be >= 2, got {n_grid}")
    x = np.linspace(0.0, np.pi / 2.0, n)
    # cos(pi/2) is ~6e-17, not 0; clip so fractional powers stay real.
    y = np.clip(np.cos(x), 0.0, None) ** float(alpha)
    return float(np.trapezoid(y, x))


def compute_ki(
    alpha: float,
    beta: float,
    k: float,
    *,
    n_grid: int = DEFAULT_QUADRATURE_POINTS,
) -> float:
    """Compute the modified Steinmetz coefficient ``ki`` from ``(alpha, beta, k)``.

    Raises
    ------
    InvalidCoefficientError
        If any coefficient is not a finite positive number.
    """
    _check_positive(alpha=alpha, beta=beta, k=k)
    a = float(alpha)
    b = float(beta)

    q = 4.0 * cos_power_integral(a, n_grid=n_grid)
    return float(k) / (2.0 ** (b - 1.0) * np.pi ** (a - 1.0) * q)
