"""Tests for the modified Steinmetz coefficient ki."""

from __future__ import annotations

import math

import numpy as np
import pytest

from core_loss_analyzer.analysis.coefficient import compute_ki, cos_power_integral
from core_loss_analyzer.errors import InvalidCoefficientError


def _cos_power_closed_form(alpha: float) -> float:
    # Integral of cos(x)**a over [0, pi/2] = sqrt(pi)/2 * Gamma((a+1)/2) / Gamma(a/2 + 1)
    return math.sqrt(math.pi) / 2.0 * math.gamma((alpha + 1.0) / 2.0) / math.gamma(alpha / 2.0 + 1.0)


@pytest.mark.parametrize("alpha", [1.0, 1.3, 1.5, 2.0, 2.4, 3.0])
def test_cos_power_integral_matches_closed_form(alpha: float) -> None:
    assert cos_power_integral(alpha) == pytest.approx(_cos_power_closed_form(alpha), rel=1e-6)


def test_ki_alpha_beta_two_is_k_over_two_pi_squared() -> None:
    # q = 4 * pi/4 = pi, so ki = k / (2 * pi * pi)
    k = 3.7
    assert compute_ki(2.0, 2.0, k) == pytest.approx(k / (2.0 * np.pi**2), rel=1e-9)


def test_ki_alpha_one() -> None:
    # q = 4 * 1, pi**0 = 1
    k, beta = 0.8, 2.5
    expected = k / (2.0 ** (beta - 1.0) * 4.0)
    assert compute_ki(1.0, beta, k) == pytest.approx(expected, rel=1e-7)


def test_ki_general_formula() -> None:
    a, b, k = 1.45, 2.6, 1.2
    q = 4.0 * _cos_power_closed_form(a)
    expected = k / (2.0 ** (b - 1.0) * np.pi ** (a - 1.0) * q)
    assert compute_ki(a, b, k) == pytest.approx(expected, rel=1e-6)


def test_ki_is_linear_in_k() -> None:
    assert compute_ki(1.5, 2.5, 4.0) == pytest.approx(4.0 * compute_ki(1.5, 2.5, 1.0), rel=1e-12)


@pytest.mark.parametrize(
    "alpha, beta, k",
    [
        (0.0, 2.0, 1.0),
        (1.5, -2.0, 1.0),
        (1.5, 2.0, 0.0),
        (float("nan"), 2.0, 1.0),
        (1.5, float("inf"), 1.0),
    ],
)
def test_ki_rejects_non_positive_coefficients(alpha: float, beta: float, k: float) -> None:
    with pytest.raises(InvalidCoefficientError):
        compute_ki(alpha, beta, k)


def test_invalid_coefficient_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        compute_ki(-1.0, 2.0, 1.0)


def test_quadrature_grid_must_have_two_points() -> None:
    with pytest.raises(ValueError):
        cos_power_integral(1.5, n_grid=1)
