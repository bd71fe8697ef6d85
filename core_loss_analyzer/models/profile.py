"""Steinmetz profile -- bundles all computation-relevant configuration.

A SteinmetzProfile groups every parameter that affects the loss result
into one frozen dataclass.  It can be:

- Constructed directly from the material's Steinmetz coefficients
- Overridden field-by-field via ``dataclasses.replace()``
- Serialized to/from a dict (or a JSON file) for provenance
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np


# Label counter limit: labels are stored as uint32.
MAX_LOOP_LABEL: int = int(np.iinfo(np.uint32).max)

# Uniform grid size for the cos(x)**alpha quadrature over [0, pi/2].
DEFAULT_QUADRATURE_POINTS: int = 10_001


@dataclass(frozen=True)
class SteinmetzProfile:
    """Frozen configuration for the IGSE computation.

    Required fields
    ---------------
    alpha : float
        Steinmetz frequency exponent.
    beta : float
        Steinmetz flux-density exponent.
    k : float
        Steinmetz coefficient (loss in mW/cm^3 for flux in T and time in s).

    Optional fields (sensible defaults)
    ------------------------------------
    periodicity_tol : float
        Allowed ``|B[0] - B[-1]|`` as a fraction of the flux range.
    spacing_rel_tol : float
        Allowed second difference of time as a fraction of the time range.
    quadrature_points : int
        Grid size used for the modified coefficient ``ki``.
    max_label : int
        Minor-loop label limit; reaching it raises ``LoopCountOverflowError``.
    """

    alpha: float
    beta: float
    k: float

    periodicity_tol: float = 0.1
    spacing_rel_tol: float = 0.01
    quadrature_points: int = DEFAULT_QUADRATURE_POINTS
    max_label: int = MAX_LOOP_LABEL

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> SteinmetzProfile:
        """Reconstruct from a dict (e.g. loaded from JSON). Unknown keys are rejected."""
        d = dict(d)  # shallow copy
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(d) - known)
        if unknown:
            raise ValueError(f"Unknown profile keys: {unknown}")
        return cls(**d)

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> SteinmetzProfile:
        p = Path(path).expanduser()
        with p.open("r", encoding="utf-8") as fh:
            return cls.from_dict(json.load(fh))
