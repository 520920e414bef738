# =========== START of analytics.py ===========
from __future__ import annotations
from typing import List, Tuple
import numpy as np
import numpy.typing as npt

from .logging_config import logger
from .utils import timer_decorator


PowerCurve = List[Tuple[float, float]]


################################################
#              DENSITY AGGREGATION             #
################################################


@timer_decorator
def density(spectrum: npt.NDArray[np.complex128], steps: int) -> npt.NDArray[np.float64]:
    """Column-averaged squared magnitude for each of the first `steps` frequency bins.
    Columns are summed one at a time, left to right."""
    num_bins, num_cols = spectrum.shape
    if steps > num_bins:
        raise ValueError(f"Cannot aggregate {steps} bins from a spectrum with {num_bins} frequencies")
    s = np.zeros(steps, dtype=np.float64)
    for f in range(steps):
        for i in range(num_cols):
            value = spectrum[f, i]
            s[f] += (value.real * value.real) + (value.imag * value.imag)
        s[f] = s[f] / num_cols
    return s


def assemble_power_curve(frequencies: npt.NDArray[np.float64], densities: npt.NDArray[np.float64]) -> PowerCurve:
    """Pair density bin k with frequency k. Frequencies past the last bin are dropped."""
    if len(densities) > len(frequencies):
        raise ValueError(f"{len(densities)} density bins but only {len(frequencies)} frequencies")
    curve = [(float(frequencies[k]), float(densities[k])) for k in range(len(densities))]
    unused = len(frequencies) - len(densities)
    if unused:
        logger.debug(f"Power curve uses {len(densities)} of {len(frequencies)} sampled frequencies ({unused} unused)")
    return curve


def summarize_curve(curve: PowerCurve) -> dict:
    """Min/max/mean power and the frequency of the peak."""
    if not curve:
        return {'bins': 0}
    powers = np.array([p for _, p in curve])
    peak = int(np.argmax(powers))
    return {
        'bins': len(curve),
        'min_power': float(powers.min()),
        'max_power': float(powers.max()),
        'mean_power': float(powers.mean()),
        'peak_frequency': curve[peak][0],
    }


# =========== END of analytics.py ===========
