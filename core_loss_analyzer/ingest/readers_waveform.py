from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

import numpy as np
import pandas as pd

from core_loss_analyzer.errors import InvalidWaveformError
from core_loss_analyzer.models.frames import WaveformFrame


ColumnRef = Union[str, int, None]

_COMMENT_PREFIXES = ("#", "%")


@dataclass(frozen=True)
class WaveformReaderConfig:
    """
    Options for :class:`WaveformReader`.

    time_col / flux_col:
        Column name (header present) or 0-based position. Defaults are the
        first and second columns.
    delimiter:
        Field separator. None detects ',', ';', tab, else any whitespace.
    time_scale / flux_scale:
        Multipliers applied after reading (e.g. 1e-6 for time in us,
        1e-3 for flux in mT).
    """
    time_col: ColumnRef = None
    flux_col: ColumnRef = None
    delimiter: Optional[str] = None
    time_scale: float = 1.0
    flux_scale: float = 1.0


def _is_number(tok: str) -> bool:
    try:
        float(tok)
    except ValueError:
        return False
    return True


class WaveformReader:
    """
    Reader for one-cycle waveform exports (CSV / delimited text).

    Contract:
      - Lines starting with '#' or '%' and blank lines are ignored.
      - A header row is detected when the first data line is not all numeric.
      - At least two numeric columns: time [s] and flux density [T].
      - Values are returned exactly as read (after optional scaling);
        rows are never dropped, sorted or resampled.
    """

    def __init__(self, config: Optional[WaveformReaderConfig] = None):
        self.config = config or WaveformReaderConfig()

    def read(self, file_path: Union[str, Path], *, name: Optional[str] = None) -> WaveformFrame:
        fp = Path(file_path).expanduser().resolve()
        if not fp.is_file():
            raise FileNotFoundError(str(fp))

        lines = self._data_lines(fp)
        if not lines:
            raise InvalidWaveformError(f"{fp.name}: no data lines.")

        sep = self.config.delimiter or self._detect_delimiter(lines[0])
        first = [tok.strip() for tok in (lines[0].split() if sep == r"\s+" else lines[0].split(sep))]
        has_header = not all(_is_number(tok) for tok in first if tok)

        df = pd.read_csv(
            io.StringIO("\n".join(lines)),
            sep=sep,
            header=0 if has_header else None,
            engine="python",
            skipinitialspace=(sep != r"\s+"),
        )
        if df.shape[1] < 2:
            raise InvalidWaveformError(f"{fp.name}: expected >= 2 columns, got {df.shape[1]}.")

        t_name = self._resolve_column(df, self.config.time_col, default_pos=0, what="time", fp=fp)
        b_name = self._resolve_column(df, self.config.flux_col, default_pos=1, what="flux", fp=fp)

        try:
            t = pd.to_numeric(df[t_name], errors="raise").to_numpy(dtype=np.float64)
            b = pd.to_numeric(df[b_name], errors="raise").to_numpy(dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidWaveformError(f"{fp.name}: non-numeric time/flux values ({e}).") from e

        warnings: List[str] = []
        if has_header:
            warnings.append(f"Columns used: time='{t_name}', flux='{b_name}'")
        if df.shape[1] > 2:
            warnings.append(f"Ignored {df.shape[1] - 2} extra column(s)")

        return WaveformFrame.from_arrays(
            t * float(self.config.time_scale),
            b * float(self.config.flux_scale),
            name=name or fp.stem,
            source_path=fp,
            warnings=tuple(warnings),
        )

    @staticmethod
    def _data_lines(fp: Path) -> List[str]:
        out: List[str] = []
        with fp.open("r", encoding="utf-8", errors="replace") as fh:
            for raw in fh:
                s = raw.strip()
                if not s or s.startswith(_COMMENT_PREFIXES):
                    continue
                out.append(s)
        return out

    @staticmethod
    def _detect_delimiter(line: str) -> str:
        for cand in (",", ";", "\t"):
            if cand in line:
                return cand
        return r"\s+"

    @staticmethod
    def _resolve_column(df: pd.DataFrame, ref: ColumnRef, *, default_pos: int, what: str, fp: Path):
        cols = list(df.columns)
        if ref is None:
            return cols[default_pos]
        if isinstance(ref, int) or (isinstance(ref, str) and ref.isdigit() and ref not in cols):
            pos = int(ref)
            if not (0 <= pos < len(cols)):
                raise InvalidWaveformError(f"{fp.name}: {what} column {pos} out of range (ncols={len(cols)}).")
            return cols[pos]
        if ref not in cols:
            raise InvalidWaveformError(f"{fp.name}: {what} column '{ref}' not found. Present={cols}")
        return ref
