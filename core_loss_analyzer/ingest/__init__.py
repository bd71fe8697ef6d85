"""Ingest package - waveform readers and input validation.

Key classes:
- WaveformReader: Reads one-cycle time/flux exports (CSV or delimited text)
- ValidationResult: Errors and warnings found on a raw waveform

Design principle:
- Readers produce WaveformFrame objects, values exactly as stored
- Validation reports problems; it never repairs, sorts or resamples data
"""

from .readers_waveform import WaveformReader, WaveformReaderConfig
from .validation import ValidationResult, validate_waveform

__all__ = [
    "WaveformReader",
    "WaveformReaderConfig",
    "ValidationResult",
    "validate_waveform",
]
