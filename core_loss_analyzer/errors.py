"""Exception types raised by the IGSE core-loss pipeline.

All errors derive from :class:`IgseError` so callers can catch the whole
family at once. Input problems also derive from :class:`ValueError` and
runtime exhaustion from :class:`RuntimeError`, so code written against the
builtin types keeps working.
"""

from __future__ import annotations


class IgseError(Exception):
    """Base class for core-loss computation failures."""


class InvalidCoefficientError(IgseError, ValueError):
    """A Steinmetz coefficient (alpha, beta or k) is not a finite positive number."""


class InvalidWaveformError(IgseError, ValueError):
    """The time/flux waveform violates an input precondition."""


class LoopCountOverflowError(IgseError, RuntimeError):
    """The minor-loop label counter reached its representable maximum.

    Usually caused by very noisy input (oscillations near machine epsilon).
    Smoothing or decimating the waveform before retrying is the normal remedy.
    """

    def __init__(self, max_label: int, n_samples: int):
        self.max_label = int(max_label)
        self.n_samples = int(n_samples)
        super().__init__(
            f"Too many minor loops: label counter reached {self.max_label} "
            f"on a waveform of {self.n_samples} samples."
        )


class DecompositionError(IgseError, RuntimeError):
    """Internal-consistency failure of the minor-loop region bookkeeping."""
