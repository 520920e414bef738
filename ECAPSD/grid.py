# =========== START of grid.py ===========
from __future__ import annotations
import numbers
from typing import Optional, Protocol, runtime_checkable
import numpy as np
import numpy.typing as npt
from numba import njit

from .logging_config import logger
from .rules import RuleTable, InvalidNeighborhoodError
from .settings import ConfigurationError, GlobalSettings
from .utils import timer_decorator


GridArray = npt.NDArray[np.uint8]


@runtime_checkable
class RandomSource(Protocol):
    """Anything that draws integers like numpy.random.Generator.integers."""

    def integers(self, low: int, high: int, size: int) -> npt.NDArray[np.int64]:
        ...


################################################
#                  GRID KERNEL                 #
################################################


@njit(cache=True)
def _evolve_rows(grid: npt.NDArray[np.uint8], lookup: npt.NDArray[np.uint8]) -> None:
    """Fill rows 1..T-1 in place from row 0. Columns 0 and N-1 are never written."""
    num_rows, num_cols = grid.shape
    for m in range(1, num_rows):
        for i in range(1, num_cols - 1):
            left = np.int64(grid[m - 1, i - 1])
            center = np.int64(grid[m - 1, i])
            right = np.int64(grid[m - 1, i + 1])
            grid[m, i] = lookup[7 - (4 * left + 2 * center + right)]


################################################
#                 GRID BUILDER                 #
################################################


class GridBuilder:
    """
    Builds the (T, N) space-time grid of an elementary CA.

    Row 0 is N unbiased coin flips from the random source. Every later row applies the
    rule to the interior cells of the row above. The edge columns use a fixed zero
    boundary: past row 0 they are never updated and hold 0. This differs from the
    periodic (wraparound) boundary most ECA literature assumes.
    """

    def __init__(self, columns: int, time_steps: int, rule: RuleTable,
                 rng: Optional[RandomSource] = None, seed: Optional[int] = None):
        if isinstance(columns, (bool, np.bool_)) or not isinstance(columns, numbers.Integral) or columns < GlobalSettings.Simulation.MIN_COLUMNS:
            raise ConfigurationError(f"columns must be an integer >= {GlobalSettings.Simulation.MIN_COLUMNS}, got {columns!r}")
        if isinstance(time_steps, (bool, np.bool_)) or not isinstance(time_steps, numbers.Integral) or time_steps < GlobalSettings.Simulation.MIN_TIME_STEPS:
            raise ConfigurationError(f"timeSteps must be an integer >= {GlobalSettings.Simulation.MIN_TIME_STEPS}, got {time_steps!r}")
        self.columns = int(columns)
        self.time_steps = int(time_steps)
        self.rule = rule
        self.rng: RandomSource = rng if rng is not None else np.random.default_rng(seed)

    def initial_row(self) -> GridArray:
        """Draw row 0. This is the only use of randomness in a run."""
        row = np.asarray(self.rng.integers(0, 2, size=self.columns))
        if row.shape != (self.columns,):
            raise ValueError(f"Random source returned shape {row.shape}, expected ({self.columns},)")
        if not np.isin(row, (0, 1)).all():
            raise InvalidNeighborhoodError(f"Random source produced non-binary values: {np.unique(row).tolist()}")
        return row.astype(np.uint8)

    @timer_decorator
    def build(self) -> GridArray:
        grid = np.zeros((self.time_steps, self.columns), dtype=np.uint8)
        grid[0] = self.initial_row()
        logger.debug(f"Row 0 drawn: {int(grid[0].sum())}/{self.columns} cells active")
        _evolve_rows(grid, self.rule.lookup_array())
        logger.info(f"Built {self.time_steps}x{self.columns} grid with {self.rule.describe()}, "
                    f"mean activation {float(grid.mean()):.4f}")
        return grid

    def step_row(self, previous: GridArray) -> GridArray:
        """Next row from `previous` using the rule table directly, cell by cell.
        Matches one row of the compiled kernel; used for inspection and tests."""
        row = np.zeros_like(previous, dtype=np.uint8)
        for i in range(1, len(previous) - 1):
            row[i] = self.rule.result(previous[i - 1], previous[i], previous[i + 1])
        return row


def build_grid(columns: int, time_steps: int, rule: RuleTable,
               rng: Optional[RandomSource] = None, seed: Optional[int] = None) -> GridArray:
    return GridBuilder(columns, time_steps, rule, rng=rng, seed=seed).build()


# =========== END of grid.py ===========
