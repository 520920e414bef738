# =========== START of rules.py ===========
from __future__ import annotations
import numbers
from dataclasses import dataclass
from typing import Sequence, Tuple
import numpy as np
import numpy.typing as npt



################################################
#                   RULE ENGINE                #
################################################

class InvalidNeighborhoodError(AssertionError):
    """A neighborhood outside {0,1}^3 reached the rule table. Only a programming
    defect can cause this, so it is never caught."""


def wolfram_code_to_rule(code: int) -> Tuple[int, ...]:
    """Expand a Wolfram rule number (0-255) into the 8-entry table.
    Entry k holds the output for neighborhood value 7-k, i.e. bit (7-k) of the code."""
    if isinstance(code, (bool, np.bool_)) or not isinstance(code, numbers.Integral) or not 0 <= code <= 255:
        raise ValueError(f"Wolfram code must be an integer in 0..255, got {code!r}")
    return tuple((int(code) >> (7 - k)) & 1 for k in range(8))


def neighborhood_index(left: int, center: int, right: int) -> int:
    """Lookup index of a neighborhood: (0,0,0) -> 7 ... (1,1,1) -> 0."""
    for value in (left, center, right):
        if isinstance(value, (bool, np.bool_)) or value not in (0, 1):
            raise InvalidNeighborhoodError(f"Not allowed: neighborhood {(left, center, right)!r}")
    return 7 - (4 * int(left) + 2 * int(center) + int(right))


@dataclass(frozen=True)
class RuleTable:
    """
    Elementary CA update function as 8 binary outputs.
    Indexing follows the Wolfram convention with the left cell as most significant bit,
    so entry 0 is the output for (1,1,1) and entry 7 the output for (0,0,0).
    """
    entries: Tuple[int, ...]

    def __post_init__(self):
        entries = tuple(self.entries)
        if len(entries) != 8:
            raise ValueError(f"Rule table needs exactly 8 entries, got {len(entries)}")
        if any(isinstance(v, bool) or v not in (0, 1) for v in entries):
            raise ValueError(f"Rule table entries must be 0 or 1, got {list(entries)}")
        object.__setattr__(self, 'entries', tuple(int(v) for v in entries))

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> 'RuleTable':
        return cls(tuple(values))

    @classmethod
    def from_wolfram_code(cls, code: int) -> 'RuleTable':
        return cls(wolfram_code_to_rule(code))

    @property
    def wolfram_code(self) -> int:
        code = 0
        for k, bit in enumerate(self.entries):
            code |= bit << (7 - k)
        return code

    def result(self, left: int, center: int, right: int) -> int:
        """Next value of the center cell for the given neighborhood."""
        if self.entries[neighborhood_index(left, center, right)] == 1:
            return 1
        else:
            return 0

    def __call__(self, left: int, center: int, right: int) -> int:
        return self.result(left, center, right)

    def lookup_array(self) -> npt.NDArray[np.uint8]:
        """Entries as a uint8 array for the compiled grid kernel."""
        return np.array(self.entries, dtype=np.uint8)

    def describe(self) -> str:
        return f"Rule {self.wolfram_code} {list(self.entries)}"


# =========== END of rules.py ===========
