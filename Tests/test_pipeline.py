import numpy as np
import pytest

from ECAPSD.enums import TransformMode
from ECAPSD.pipeline import run_pipeline
from ECAPSD.render import render_power_curve
from ECAPSD.settings import ConfigurationError, SimulationConfig

SMALL = {'columns': 5, 'timeSteps': 3, 'rule': [0, 1, 1, 0, 1, 1, 1, 0],
         'freqStart': 0, 'freqStop': 1, 'freqSteps': 2}


def test_end_to_end_hand_computed(fixed_row_source):
    config = SimulationConfig.from_mapping(SMALL)
    received = []
    result = run_pipeline(config, rng=fixed_row_source([0, 1, 1, 0, 1]), renderer=received.append)

    assert result.grid.tolist() == [[0, 1, 1, 0, 1], [0, 1, 1, 1, 0], [0, 1, 0, 1, 0]]
    assert len(result.frequencies) == 3
    assert result.spectrum.shape == (3, 5)
    assert len(result.curve) == 2
    assert [f for f, _ in result.curve] == [0.0, 0.5]
    # Column means are 0, 1, 2/3, 2/3, 1/3 so every bin is (0 + 1 + 4/9 + 4/9 + 1/9) / 5
    assert [p for _, p in result.curve] == pytest.approx([0.4, 0.4])
    assert received == [result.curve]


def test_conventional_mode_end_to_end(fixed_row_source):
    config = SimulationConfig.from_mapping({**SMALL, 'transformMode': 'conventional'})
    result = run_pipeline(config, rng=fixed_row_source([0, 1, 1, 0, 1]))
    assert len(result.curve) == 2
    assert result.curve[0][1] == pytest.approx(0.4)
    assert all(p >= 0 for _, p in result.curve)


def test_same_seed_is_deterministic():
    config = SimulationConfig(columns=40, time_steps=32, rule=110, freq_steps=8, seed=99)
    a = run_pipeline(config)
    b = run_pipeline(config)
    assert np.array_equal(a.grid, b.grid)
    assert a.curve == b.curve


def test_invalid_config_rejected_before_any_work(fixed_row_source):
    source = fixed_row_source([0, 1])
    with pytest.raises(ConfigurationError):
        run_pipeline(SimulationConfig(columns=2, time_steps=3), rng=source)
    assert source.calls == 0


def test_render_writes_image(tmp_path, fixed_row_source):
    output = tmp_path / "spectrum.svg"
    config = SimulationConfig.from_mapping(SMALL)
    run_pipeline(config, rng=fixed_row_source([0, 1, 1, 0, 1]),
                 renderer=lambda curve: render_power_curve(curve, str(output)))
    assert output.exists()
    assert output.stat().st_size > 0


def test_render_failure_propagates(tmp_path):
    missing_dir = tmp_path / "does_not_exist" / "out.png"
    with pytest.raises(OSError):
        render_power_curve([(0.0, 0.1), (0.1, 0.2)], str(missing_dir), y_range=(0.0, 1.0))


def test_pipeline_result_keeps_config_and_rule():
    config = SimulationConfig(columns=10, time_steps=4, rule=30, freq_steps=3, seed=0,
                              transform_mode=TransformMode.LITERAL)
    result = run_pipeline(config)
    assert result.config is config
    assert result.rule.wolfram_code == 30
