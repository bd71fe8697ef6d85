"""
Waveform validation.

The loss computation assumes one period of an evenly sampled, periodic
flux-density waveform. This module checks those preconditions on raw
arrays before anything is rotated or decomposed. It never repairs data.

Checks
------
- time and flux are 1D, of equal length, with at least 3 finite samples
- time strictly increasing
- time evenly spaced: max |diff(diff(time))| <= spacing_rel_tol * range(time)
- flux periodic: |flux[0] - flux[-1]| <= tol * range(flux)

Examples
--------
>>> import numpy as np
>>> t = np.linspace(0.0, 1.0, 5)
>>> validate_waveform(t, np.array([0.0, 1.0, 2.0, 1.0, 0.0])).ok
True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from core_loss_analyzer.errors import InvalidWaveformError


MIN_SAMPLES = 3

# Below this many samples per cycle the missing crossing interpolation starts to matter.
UNDERSAMPLED_WARN_SAMPLES = 100


@dataclass(frozen=True)
class ValidationResult:
    """
    Result of validating one waveform.

    Attributes
    ----------
    ok:
        True if no errors were found.
    errors:
        Fatal issues; the loss must not be computed.
    warnings:
        Non-fatal issues; the result is computed but should be reviewed.

    Examples
    --------
    >>> ValidationResult(ok=True, errors=[], warnings=[]).ok
    True
    """
    ok: bool
    errors: List[str]
    warnings: List[str]

    def raise_if_errors(self) -> None:
        """
        Raise InvalidWaveformError if errors exist.

        Examples
        --------
        >>> r = ValidationResult(ok=False, errors=["bad"], warnings=[])
        >>> try:
        ...     r.raise_if_errors()
        ... except ValueError:
        ...     pass
        """
        if self.errors:
            msg = "Invalid waveform:\n" + "\n".join(f"- {e}" for e in self.errors)
            raise InvalidWaveformError(msg)


def validate_time_axis(t: np.ndarray, *, spacing_rel_tol: float = 0.01) -> tuple[list[str], list[str]]:
    """
    Validate that time is strictly increasing and evenly spaced.

    Returns
    -------
    (errors, warnings)

    Examples
    --------
    >>> import numpy as np
    >>> e, w = validate_time_axis(np.array([0.0, 1.0, 0.5]))
    >>> len(e) > 0
    True
    """
    errors: list[str] = []
    warnings: list[str] = []

    if t.size < 2:
        return errors, warnings

    dt = np.diff(t)
    back = np.flatnonzero(dt <= 0.0)
    if back.size:
        errors.append(
            f"time must be strictly increasing (first violation at rows {int(back[0])}->{int(back[0]) + 1})."
        )
        return errors, warnings

    span = float(t[-1] - t[0])
    if t.size >= 3:
        jitter = float(np.max(np.abs(np.diff(dt))))
        if jitter > spacing_rel_tol * span:
            errors.append(
                f"time must be evenly spaced: max |ddt|={jitter:.3g} s exceeds "
                f"{spacing_rel_tol:g} * range(time)={spacing_rel_tol * span:.3g} s. Consider resampling."
            )

    return errors, warnings


def validate_periodic(b: np.ndarray, *, tol: float = 0.1) -> tuple[list[str], list[str]]:
    """
    Validate that the flux closes on itself within ``tol * range(flux)``.

    Examples
    --------
    >>> import numpy as np
    >>> e, w = validate_periodic(np.array([0.0, 1.0, 0.5]), tol=0.1)
    >>> len(e)
    1
    """
    errors: list[str] = []
    warnings: list[str] = []

    if b.size < 2:
        return errors, warnings

    mismatch = abs(float(b[0]) - float(b[-1]))
    span = float(np.ptp(b))
    if mismatch > tol * span:
        errors.append(
            f"flux must be periodic: |B[0]-B[-1]|={mismatch:.3g} T exceeds "
            f"{tol:g} * range(flux)={tol * span:.3g} T."
        )
    elif mismatch > 0.0:
        warnings.append(f"flux does not close exactly: |B[0]-B[-1]|={mismatch:.3g} T.")

    return errors, warnings


def validate_waveform(
    time,
    flux,
    *,
    tol: float = 0.1,
    spacing_rel_tol: float = 0.01,
) -> ValidationResult:
    """
    Validate one cycle of time/flux samples.

    Parameters
    ----------
    time, flux:
        1D sample arrays of equal length.
    tol:
        Periodicity tolerance as a fraction of the flux range (0 strictest, 1 loosest).
    spacing_rel_tol:
        Allowed second difference of time as a fraction of the time range.

    Returns
    -------
    ValidationResult
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not (np.isfinite(tol) and tol > 0.0):
        errors.append(f"tol must be > 0, got {tol!r}.")
    if not (np.isfinite(spacing_rel_tol) and spacing_rel_tol > 0.0):
        errors.append(f"spacing_rel_tol must be > 0, got {spacing_rel_tol!r}.")

    t = np.asarray(time, dtype=np.float64)
    b = np.asarray(flux, dtype=np.float64)

    if t.ndim != 1 or b.ndim != 1:
        errors.append(f"time and flux must be 1D, got shapes {t.shape} and {b.shape}.")
        return ValidationResult(ok=False, errors=errors, warnings=warnings)
    if t.size != b.size:
        errors.append(f"time and flux must have the same number of samples ({t.size} != {b.size}).")
        return ValidationResult(ok=False, errors=errors, warnings=warnings)
    if t.size < MIN_SAMPLES:
        errors.append(f"At least {MIN_SAMPLES} samples are required, got {t.size}.")
        return ValidationResult(ok=False, errors=errors, warnings=warnings)

    for name, arr in (("time", t), ("flux", b)):
        if not np.isfinite(arr).all():
            bad = np.flatnonzero(~np.isfinite(arr))[:10].tolist()
            errors.append(f"{name} has non-finite values at rows {bad} (showing up to 10).")
    if errors:
        return ValidationResult(ok=False, errors=errors, warnings=warnings)

    e2, w2 = validate_time_axis(t, spacing_rel_tol=spacing_rel_tol)
    errors.extend(e2)
    warnings.extend(w2)

    e3, w3 = validate_periodic(b, tol=tol)
    errors.extend(e3)
    warnings.extend(w3)

    if t.size < UNDERSAMPLED_WARN_SAMPLES:
        warnings.append(
            f"Only {t.size} samples per cycle; minor-loop crossings are not interpolated, "
            "so the loss may be inaccurate."
        )

    return ValidationResult(ok=(len(errors) == 0), errors=errors, warnings=warnings)
