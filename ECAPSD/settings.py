# =========== START of settings.py ===========
from __future__ import annotations
import json
import math
import numbers
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Mapping, Optional, Tuple
import numpy as np

from .enums import TransformMode
from .rules import wolfram_code_to_rule
from .logging_config import logger



class ConfigurationError(ValueError):
    """Raised when a configuration is rejected before any computation starts."""


################################################
#                 GLOBAL SETTINGS              #
################################################


class GlobalSettings:

    class Simulation:
        COLUMNS: int = 700  # Cells per row (grid width N)
        TIME_STEPS: int = 1024  # Rows in the space-time grid (T)
        RULE: Tuple[int, ...] = (0, 1, 1, 0, 1, 1, 1, 0)  # Rule 110
        SEED: Optional[int] = None  # None draws fresh OS entropy for row 0
        MIN_COLUMNS: int = 3  # Fewer columns leaves no interior cell to update
        MIN_TIME_STEPS: int = 1

    class Spectrum:
        FREQ_START: float = 0.0
        FREQ_STOP: float = 10.0
        FREQ_STEPS: int = 100  # Aggregated bins; the sampler yields one more frequency than this
        TRANSFORM_MODE: TransformMode = TransformMode.LITERAL

    class Visualization:
        OUTPUT_FILE: str = "scatter.svg"
        MARKER: str = 's'  # Square
        MARKER_COLOR: str = '#DD3355'
        MARKER_SIZE: float = 12.0
        X_RANGE: Tuple[float, float] = (0.0, 10.0)
        Y_RANGE: Optional[Tuple[float, float]] = None  # None autoscales
        LEGACY_Y_RANGE: Tuple[float, float] = (0.330, 0.334)
        X_LABEL: str = "Frequency"
        Y_LABEL: str = "Power Spectrum"
        FIGURE_SIZE: Tuple[float, float] = (8.0, 6.0)


# Recognized external field names mapped to SimulationConfig attributes
_FIELD_ALIASES: Dict[str, str] = {
    'columns': 'columns',
    'timeSteps': 'time_steps',
    'time_steps': 'time_steps',
    'rule': 'rule',
    'freqStart': 'freq_start',
    'freq_start': 'freq_start',
    'freqStop': 'freq_stop',
    'freq_stop': 'freq_stop',
    'freqSteps': 'freq_steps',
    'freq_steps': 'freq_steps',
    'seed': 'seed',
    'transformMode': 'transform_mode',
    'transform_mode': 'transform_mode',
}


@dataclass(frozen=True)
class SimulationConfig:
    """Every input of one run. Built once, never mutated."""
    columns: int = GlobalSettings.Simulation.COLUMNS
    time_steps: int = GlobalSettings.Simulation.TIME_STEPS
    rule: Tuple[int, ...] = GlobalSettings.Simulation.RULE
    freq_start: float = GlobalSettings.Spectrum.FREQ_START
    freq_stop: float = GlobalSettings.Spectrum.FREQ_STOP
    freq_steps: int = GlobalSettings.Spectrum.FREQ_STEPS
    seed: Optional[int] = GlobalSettings.Simulation.SEED
    transform_mode: TransformMode = field(default=GlobalSettings.Spectrum.TRANSFORM_MODE)

    def __post_init__(self):
        # Accept a Wolfram code or any sequence for the rule but store it immutably
        rule = self.rule
        if _is_int(rule):
            try:
                rule = wolfram_code_to_rule(rule)
            except ValueError as e:
                raise ConfigurationError(str(e)) from e
        try:
            rule = tuple(rule)
        except TypeError:
            raise ConfigurationError(f"rule must be a Wolfram code or 8 binary values, got {rule!r}") from None
        object.__setattr__(self, "rule", rule)

    @classmethod
    def from_defaults(cls, **overrides: Any) -> 'SimulationConfig':
        return cls(**overrides)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'SimulationConfig':
        """Build a config from a mapping using the recognized field names.
        Unknown keys are rejected."""
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            attr = _FIELD_ALIASES.get(key)
            if attr is None:
                raise ConfigurationError(f"Unknown configuration field: '{key}'")
            if attr == 'transform_mode' and isinstance(value, str):
                try:
                    value = TransformMode.from_string(value)
                except ValueError as e:
                    raise ConfigurationError(str(e)) from e
            kwargs[attr] = value
        return cls(**kwargs)

    @classmethod
    def from_json(cls, path: str) -> 'SimulationConfig':
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file {path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a JSON object")
        logger.debug(f"Loaded configuration fields from {path}: {sorted(data.keys())}")
        return cls.from_mapping(data)

    def validate(self) -> 'SimulationConfig':
        """Reject invalid configurations. Returns self so calls can be chained."""
        if not _is_int(self.columns) or self.columns < GlobalSettings.Simulation.MIN_COLUMNS:
            raise ConfigurationError(
                f"columns must be an integer >= {GlobalSettings.Simulation.MIN_COLUMNS}, got {self.columns!r}")
        if not _is_int(self.time_steps) or self.time_steps < GlobalSettings.Simulation.MIN_TIME_STEPS:
            raise ConfigurationError(
                f"timeSteps must be an integer >= {GlobalSettings.Simulation.MIN_TIME_STEPS}, got {self.time_steps!r}")
        if len(self.rule) != 8:
            raise ConfigurationError(f"rule must have exactly 8 entries, got {len(self.rule)}")
        if any(not _is_int(v) or v not in (0, 1) for v in self.rule):
            raise ConfigurationError(f"rule entries must be 0 or 1, got {list(self.rule)}")
        if not _is_int(self.freq_steps) or self.freq_steps <= 0:
            raise ConfigurationError(f"freqSteps must be a positive integer, got {self.freq_steps!r}")
        for name, value in (('freqStart', self.freq_start), ('freqStop', self.freq_stop)):
            if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real) or not math.isfinite(value):
                raise ConfigurationError(f"{name} must be a finite number, got {value!r}")
        if not isinstance(self.transform_mode, TransformMode):
            raise ConfigurationError(f"transform_mode must be a TransformMode, got {self.transform_mode!r}")
        if self.seed is not None and (not _is_int(self.seed) or self.seed < 0):
            raise ConfigurationError(f"seed must be a non-negative integer or None, got {self.seed!r}")
        return self

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['transform_mode'] = self.transform_mode.name
        return data


def _is_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, (bool, np.bool_))


# =========== END of settings.py ===========
