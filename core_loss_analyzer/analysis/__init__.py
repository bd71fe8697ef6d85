"""IGSE analysis package.

Design principle:
  - Ingest produces validated :class:`~core_loss_analyzer.models.frames.WaveformFrame` objects.
  - Analysis consumes one cycle of samples and produces the loss and its diagnostics.

Project-wide constraint:
  - No interpolation at minor-loop crossings. Loop boundaries are sample indices.
"""

from .coefficient import compute_ki, cos_power_integral
from .energy import loop_energy_table, minor_loop_energy, total_minor_loop_energy
from .igse import (
    analyze_waveform,
    analyze_waveforms,
    compute_igse,
    compute_igse_loss,
    rotate_to_minimum,
)
from .loops import decompose_loops, find_outermost_loop, label_loops

__all__ = [
    "compute_ki",
    "cos_power_integral",
    "find_outermost_loop",
    "decompose_loops",
    "label_loops",
    "minor_loop_energy",
    "total_minor_loop_energy",
    "loop_energy_table",
    "rotate_to_minimum",
    "compute_igse",
    "compute_igse_loss",
    "analyze_waveform",
    "analyze_waveforms",
]
