from .frames import WaveformFrame
from .profile import DEFAULT_QUADRATURE_POINTS, MAX_LOOP_LABEL, SteinmetzProfile
from .results import IgseResult, MinorLoop

__all__ = [
    "DEFAULT_QUADRATURE_POINTS",
    "MAX_LOOP_LABEL",
    "SteinmetzProfile",
    "WaveformFrame",
    "IgseResult",
    "MinorLoop",
]
