"""Core Loss Analyzer -- IGSE core loss from one cycle of a flux-density waveform.

This package provides tools for:
- Reading one-cycle time/flux exports (CSV or delimited text)
- Validating the sampling and periodicity preconditions
- Decomposing the cycle into nested minor loops
- Computing the modified Steinmetz coefficient ki
- Summing the per-loop IGSE energy and averaging it into a loss density (W/m^3)

Key principles:
- No interpolation: minor-loop boundaries are sample indices
- No silent fallbacks: invalid input and loop-count overflow raise
- Full traceability: per-loop energies are returned with the loss

Main subpackages:
- analysis: Coefficient, loop decomposition, energy integration, orchestration
- ingest: Waveform reader and input validation
- models: Data models (WaveformFrame, SteinmetzProfile, IgseResult)
- util: Logging setup and CLI exit codes
"""

from .analysis.igse import analyze_waveform, compute_igse, compute_igse_loss
from .errors import (
    DecompositionError,
    IgseError,
    InvalidCoefficientError,
    InvalidWaveformError,
    LoopCountOverflowError,
)
from .models import IgseResult, SteinmetzProfile, WaveformFrame

__all__ = [
    "analyze_waveform",
    "compute_igse",
    "compute_igse_loss",
    "IgseError",
    "InvalidCoefficientError",
    "InvalidWaveformError",
    "LoopCountOverflowError",
    "DecompositionError",
    "IgseResult",
    "SteinmetzProfile",
    "WaveformFrame",
]
