# =========== START of pipeline.py ===========
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional
import numpy as np
import numpy.typing as npt

from .analytics import PowerCurve, assemble_power_curve, density, summarize_curve
from .grid import GridBuilder, RandomSource
from .logging_config import logger
from .rules import RuleTable
from .settings import SimulationConfig
from .spectrum import compute_spectrum, sample_frequencies
from .utils import log_errors, perf_logger


Renderer = Callable[[PowerCurve], object]


@dataclass(frozen=True)
class PipelineResult:
    config: SimulationConfig
    rule: RuleTable
    grid: npt.NDArray[np.uint8]
    frequencies: npt.NDArray[np.float64]
    spectrum: npt.NDArray[np.complex128]
    densities: npt.NDArray[np.float64]
    curve: PowerCurve


@log_errors
def run_pipeline(config: SimulationConfig,
                 rng: Optional[RandomSource] = None,
                 renderer: Optional[Renderer] = None) -> PipelineResult:
    """
    Rule -> grid -> frequencies -> spectrum -> densities -> power curve -> renderer.
    The configuration is validated before anything is computed. `rng` overrides the
    config seed for row 0. When `renderer` is given it receives the finished curve.
    """
    config.validate()
    logger.info(f"Starting run: {config.as_dict()}")

    with perf_logger.measure("rule"):
        rule = RuleTable.from_sequence(config.rule)

    with perf_logger.measure("grid"):
        grid = GridBuilder(config.columns, config.time_steps, rule, rng=rng, seed=config.seed).build()

    with perf_logger.measure("frequencies"):
        frequencies = sample_frequencies(config.freq_start, config.freq_stop, config.freq_steps)
        logger.debug(f"Sampled {len(frequencies)} frequencies in [{frequencies[0]}, {frequencies[-1]}]")

    with perf_logger.measure("spectrum"):
        spectrum = compute_spectrum(grid, frequencies, config.transform_mode)

    with perf_logger.measure("density"):
        densities = density(spectrum, config.freq_steps)
        curve = assemble_power_curve(frequencies, densities)

    summary = summarize_curve(curve)
    logger.info(f"Power curve: {summary}")

    if renderer is not None:
        with perf_logger.measure("render"):
            renderer(curve)

    perf_logger.sample_memory()
    return PipelineResult(config=config, rule=rule, grid=grid, frequencies=frequencies,
                          spectrum=spectrum, densities=densities, curve=curve)


# =========== END of pipeline.py ===========
