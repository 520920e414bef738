import numpy as np
import pytest


class FixedRowSource:
    """Random source that always returns the same initial row."""

    def __init__(self, row):
        self.row = np.asarray(row)
        self.calls = 0

    def integers(self, low, high, size):
        self.calls += 1
        assert (low, high) == (0, 2), f"Expected coin flips, got range [{low}, {high})"
        assert size == len(self.row), f"Expected size {len(self.row)}, got {size}"
        return self.row.copy()


@pytest.fixture
def fixed_row_source():
    return FixedRowSource
