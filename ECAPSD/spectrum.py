# =========== START of spectrum.py ===========
# -*- coding: utf-8 -*-
"""
Frequency sampling and the direct spectral transform of grid columns.

Every coefficient is computed straight from its column's time series in O(T).
No FFT is involved. Two transforms are provided:

- ``literal_transform``: the phase is ``2*pi*f`` for every time step, so the
  coefficient is the column's mean activation rotated by a fixed angle. This is
  the default; every bin then reports the squared column mean.
- ``conventional_transform``: the textbook DFT coefficient, with phase
  ``2*pi*f*j/T`` advancing with the time index ``j``.
"""

from __future__ import annotations
import math
import numbers
from typing import Callable, Dict, Tuple
import numpy as np
import numpy.typing as npt
from numba import njit

from .enums import TransformMode
from .logging_config import logger
from .settings import ConfigurationError
from .utils import timer_decorator


FrequencyArray = npt.NDArray[np.float64]
SpectrumArray = npt.NDArray[np.complex128]


def sample_frequencies(start: float, stop: float, steps: int) -> FrequencyArray:
    """
    Evenly spaced frequencies from ``start`` to ``stop``.

    Returns ``steps + 1`` values: element 0 is ``start`` and element k is
    ``start + ((stop - start) / steps) * k``. Callers aggregating ``steps`` bins
    leave the last value unused.
    """
    if isinstance(steps, (bool, np.bool_)) or not isinstance(steps, numbers.Integral) or steps <= 0:
        raise ConfigurationError(f"Frequency step count must be a positive integer, got {steps!r}")
    size = (stop - start) / steps
    values = [start]
    for k in range(1, int(steps) + 1):
        values.append(start + size * k)
    return np.array(values, dtype=np.float64)


@njit(cache=True)
def _accumulate_constant_phase(grid: npt.NDArray[np.uint8], column: int,
                               cos_phase: float, sin_phase: float) -> Tuple[float, float]:
    """Term-by-term sums over j, in time order."""
    num_rows = grid.shape[0]
    re = 0.0
    im = 0.0
    for j in range(num_rows):
        re += grid[j, column] * cos_phase / num_rows
        im += grid[j, column] * sin_phase / num_rows
    return re, im


@njit(cache=True)
def _accumulate_advancing_phase(grid: npt.NDArray[np.uint8], column: int,
                                frequency: float) -> Tuple[float, float]:
    num_rows = grid.shape[0]
    re = 0.0
    im = 0.0
    for j in range(num_rows):
        phase = 2.0 * math.pi * frequency * j / num_rows
        re += grid[j, column] * math.cos(phase) / num_rows
        im += grid[j, column] * math.sin(phase) / num_rows
    return re, im


def literal_transform(grid: npt.NDArray[np.uint8], column: int, frequency: float) -> complex:
    """Constant-phase coefficient of one column. The phase does not depend on j."""
    num_rows = grid.shape[0]
    phase = 2.0 * math.pi * num_rows * frequency / num_rows
    re, im = _accumulate_constant_phase(grid, column, math.cos(phase), math.sin(phase))
    return complex(re, im)


def conventional_transform(grid: npt.NDArray[np.uint8], column: int, frequency: float) -> complex:
    """DFT coefficient of one column with phase 2*pi*f*j/T at time step j."""
    re, im = _accumulate_advancing_phase(grid, column, float(frequency))
    return complex(re, im)


_TRANSFORMS: Dict[TransformMode, Callable[[npt.NDArray[np.uint8], int, float], complex]] = {
    TransformMode.LITERAL: literal_transform,
    TransformMode.CONVENTIONAL: conventional_transform,
}


def get_transform(mode: TransformMode) -> Callable[[npt.NDArray[np.uint8], int, float], complex]:
    try:
        return _TRANSFORMS[mode]
    except KeyError:
        raise ValueError(f"Unsupported transform mode: {mode!r}") from None


@timer_decorator
def compute_spectrum(grid: npt.NDArray[np.uint8], frequencies: FrequencyArray,
                     mode: TransformMode = TransformMode.LITERAL) -> SpectrumArray:
    """One coefficient per (frequency, column). Shape is (len(frequencies), N)."""
    transform = get_transform(mode)
    num_cols = grid.shape[1]
    spectrum = np.zeros((len(frequencies), num_cols), dtype=np.complex128)
    for j, frequency in enumerate(frequencies):
        for i in range(num_cols):
            spectrum[j, i] = transform(grid, i, float(frequency))
    logger.info(f"Computed {mode.name.lower()} spectrum: {len(frequencies)} frequencies x {num_cols} columns")
    return spectrum


# =========== END of spectrum.py ===========
