from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class MinorLoop:
    """One minor loop found by the decomposer.

    Attributes
    ----------
    label:
        Label assigned in discovery order (>= 1).
    start, end:
        Sample indices of the opening extremum and of the first sample that
        re-crosses its level. Both belong to the loop, ``start < end``.
    """

    label: int
    start: int
    end: int

    @property
    def n_samples(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True)
class IgseResult:
    """Full result of the IGSE computation for one waveform.

    Attributes
    ----------
    name:
        Waveform identifier (copied from the input frame).
    loss_W_per_m3:
        Average core loss density over the cycle.
    energy:
        Summed minor-loop energy density before averaging (mW/cm^3 times s).
    ki:
        Modified Steinmetz coefficient used for every loop.
    period_s:
        Cycle duration ``time[-1] - time[0]``.
    time, flux:
        Waveform rotated to start at its minimum, shape ``(N,)``.
    labels:
        Loop label per sample (uint32, 0 = major loop), shape ``(N,)``.
    loops:
        Minor loops in discovery order.
    loop_table:
        One row per label with swing and energy (see ``loop_energy_table``).
    """

    name: str
    loss_W_per_m3: float
    energy: float
    ki: float
    period_s: float

    time: np.ndarray
    flux: np.ndarray
    labels: np.ndarray
    loops: Tuple[MinorLoop, ...]
    loop_table: pd.DataFrame

    warnings: Tuple[str, ...] = ()

    @property
    def n_loops(self) -> int:
        return len(self.loops)
