from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest

from core_loss_analyzer.analysis.coefficient import compute_ki
from core_loss_analyzer.cli import main
from core_loss_analyzer.util.exit_codes import ExitCode


ALPHA, BETA, K = 1.5, 2.5, 2.0


def _write_triangle(path: Path, n_half: int = 100, peak: float = 0.1, period: float = 1e-5) -> float:
    b = np.concatenate([np.linspace(0.0, peak, n_half + 1), np.linspace(peak, 0.0, n_half + 1)[1:]])
    t = np.linspace(0.0, period, b.size)
    lines = ["time,flux"] + [f"{ti!r},{bi!r}" for ti, bi in zip(t.tolist(), b.tolist())]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    dt = period / (2 * n_half)
    ki = compute_ki(ALPHA, BETA, K)
    energy = ki * peak ** (BETA - ALPHA) * 2 * n_half * (peak / n_half / dt) ** ALPHA * dt
    return 1000.0 * energy / period


def test_cli_prints_loss(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    expected = _write_triangle(tmp_path / "tri.csv")

    code = main([str(tmp_path / "tri.csv"), "--alpha", str(ALPHA), "--beta", str(BETA), "--k", str(K)])
    assert code == ExitCode.SUCCESS

    out = capsys.readouterr().out.strip().splitlines()
    assert float(out[0]) == pytest.approx(expected, rel=1e-6)


def test_cli_loop_table(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_triangle(tmp_path / "tri.csv")
    code = main([str(tmp_path / "tri.csv"), "--alpha", "1.5", "--beta", "2.5", "--k", "2", "--loops"])
    assert code == ExitCode.SUCCESS
    out = capsys.readouterr().out
    assert "swing_T" in out and "energy" in out


def test_cli_profile_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    expected = _write_triangle(tmp_path / "tri.csv")
    prof = tmp_path / "mat.json"
    prof.write_text(json.dumps({"alpha": ALPHA, "beta": BETA, "k": K}), encoding="utf-8")

    code = main([str(tmp_path / "tri.csv"), "--profile", str(prof)])
    assert code == ExitCode.SUCCESS
    assert float(capsys.readouterr().out.split()[0]) == pytest.approx(expected, rel=1e-6)


def test_cli_missing_coefficients(tmp_path: Path) -> None:
    _write_triangle(tmp_path / "tri.csv")
    assert main([str(tmp_path / "tri.csv"), "--alpha", "1.5"]) == ExitCode.INVALID_INPUT


def test_cli_non_periodic_input(tmp_path: Path) -> None:
    p = tmp_path / "ramp.csv"
    p.write_text("\n".join(f"{i},{0.01 * i}" for i in range(200)) + "\n", encoding="utf-8")
    assert main([str(p), "--alpha", "1.5", "--beta", "2.5", "--k", "2"]) == ExitCode.INVALID_INPUT


def test_cli_missing_file(tmp_path: Path) -> None:
    code = main([str(tmp_path / "nope.csv"), "--alpha", "1.5", "--beta", "2.5", "--k", "2"])
    assert code == ExitCode.INVALID_INPUT


def test_cli_loop_overflow(tmp_path: Path) -> None:
    p = tmp_path / "wiggly.csv"
    b = [0.0, 10.0] + [5.0, 6.0] * 20 + [5.0, 10.0, 0.0]
    p.write_text("\n".join(f"{i},{v}" for i, v in enumerate(b)) + "\n", encoding="utf-8")
    prof = tmp_path / "mat.json"
    prof.write_text(json.dumps({"alpha": 1.5, "beta": 2.5, "k": 2.0, "max_label": 3}), encoding="utf-8")

    assert main([str(p), "--profile", str(prof)]) == ExitCode.LOOP_OVERFLOW
