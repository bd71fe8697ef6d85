from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class WaveformFrame:
    """
    In-memory representation of one period of a flux-density waveform.

    Notes
    - df has exactly two float64 columns: 't' (time, s) and 'B' (flux density, T).
    - Time is kept as provided; it is never resampled or shifted here.
    """
    name: str
    df: pd.DataFrame
    source_path: Optional[Path] = None
    warnings: Tuple[str, ...] = ()

    @classmethod
    def from_arrays(
        cls,
        time,
        flux,
        *,
        name: str = "waveform",
        source_path: Optional[Path] = None,
        warnings: Tuple[str, ...] = (),
    ) -> WaveformFrame:
        t = np.asarray(time, dtype=np.float64)
        b = np.asarray(flux, dtype=np.float64)
        if t.ndim != 1 or b.ndim != 1:
            raise ValueError(f"time and flux must be 1D, got shapes {t.shape} and {b.shape}")
        if t.size != b.size:
            raise ValueError(f"time and flux length mismatch: {t.size} != {b.size}")
        df = pd.DataFrame({"t": t, "B": b})
        return cls(name=name, df=df, source_path=source_path, warnings=tuple(warnings))

    @property
    def time(self) -> np.ndarray:
        return self.df["t"].to_numpy(dtype=np.float64)

    @property
    def flux(self) -> np.ndarray:
        return self.df["B"].to_numpy(dtype=np.float64)

    @property
    def n_samples(self) -> int:
        return int(len(self.df))
