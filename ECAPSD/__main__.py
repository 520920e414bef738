# =========== START of __main__.py ===========
from __future__ import annotations
import argparse
import os
import sys
from dataclasses import replace
from functools import partial
from typing import List, Optional
import setproctitle

from .enums import TransformMode
from .logging_config import APP_DIR, logger, setup_directories, setup_logging
from .pipeline import run_pipeline
from .render import render_power_curve
from .settings import ConfigurationError, GlobalSettings, SimulationConfig
from .utils import perf_logger



def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog='ecapsd',
        description='Simulate an elementary cellular automaton and plot the '
                    'column-averaged power spectrum of its cell time series.',
    )
    p.add_argument('--config', metavar='PATH',
                   help='JSON file with columns, timeSteps, rule, freqStart, freqStop, freqSteps')
    p.add_argument('--columns', type=int, help=f'Grid width N (default {GlobalSettings.Simulation.COLUMNS})')
    p.add_argument('--time-steps', type=int, help=f'Grid rows T (default {GlobalSettings.Simulation.TIME_STEPS})')
    p.add_argument('--rule', type=int, metavar='CODE', help='Wolfram rule number 0-255 (default 110)')
    p.add_argument('--freq-start', type=float, help=f'First frequency (default {GlobalSettings.Spectrum.FREQ_START})')
    p.add_argument('--freq-stop', type=float, help=f'Last sampled frequency (default {GlobalSettings.Spectrum.FREQ_STOP})')
    p.add_argument('--freq-steps', type=int, help=f'Frequency bins to aggregate (default {GlobalSettings.Spectrum.FREQ_STEPS})')
    p.add_argument('--seed', type=int, help='Seed for the initial row')
    p.add_argument('--conventional-dft', action='store_true',
                   help='Advance the phase with the time index instead of the constant-phase transform')
    p.add_argument('-o', '--output', default=GlobalSettings.Visualization.OUTPUT_FILE,
                   help='Image file to write (default %(default)s)')
    p.add_argument('--y-range', type=float, nargs=2, metavar=('LOW', 'HIGH'),
                   help='Fixed power axis range, e.g. 0.330 0.334; autoscaled when omitted')
    p.add_argument('--log-dir', help=f'Directory for log files (default ./{APP_DIR}/Resources/logs)')
    p.add_argument('--log-level', choices=['DEBUG', 'DETAIL', 'INFO', 'WARNING', 'ERROR'],
                   help='Log level for file and console')
    return p


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    config = SimulationConfig.from_json(args.config) if args.config else SimulationConfig.from_defaults()
    overrides = {
        'columns': args.columns,
        'time_steps': args.time_steps,
        'rule': args.rule,
        'freq_start': args.freq_start,
        'freq_stop': args.freq_stop,
        'freq_steps': args.freq_steps,
        'seed': args.seed,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if args.conventional_dft:
        overrides['transform_mode'] = TransformMode.CONVENTIONAL
    if overrides:
        config = replace(config, **overrides)
    return config.validate()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setproctitle.setproctitle(APP_DIR)
    if args.log_dir:
        log_dir = args.log_dir
        os.makedirs(log_dir, exist_ok=True)
    else:
        paths, _ = setup_directories()
        log_dir = paths['logs']
    setup_logging(log_dir, args.log_level)

    try:
        config = config_from_args(args)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        parser.exit(2, f"{parser.prog}: error: {e}\n")

    renderer = partial(render_power_curve, output_path=args.output,
                       y_range=tuple(args.y_range) if args.y_range else GlobalSettings.Visualization.Y_RANGE)
    run_pipeline(config, renderer=renderer)

    logger.info("Performance summary:")
    perf_logger.log_summary()
    return 0


if __name__ == '__main__':
    sys.exit(main())


# =========== END of __main__.py ===========
