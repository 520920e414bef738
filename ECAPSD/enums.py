# =========== START of enums.py ===========
from __future__ import annotations
from enum import Enum, auto



################################################
#                       ENUMS                  #
################################################


class TransformMode(Enum):
    """Selects how a column's time series is projected onto a frequency"""
    LITERAL = auto()       # Constant phase 2*pi*f for every time step (default)
    CONVENTIONAL = auto()  # Phase 2*pi*f*j/T advances with the time index j

    @classmethod
    def from_string(cls, value: str) -> 'TransformMode':
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Invalid transform mode: {value}") from None


# =========== END of enums.py ===========
