import json

import pytest

from ECAPSD.__main__ import build_parser, config_from_args, main
from ECAPSD.enums import TransformMode
from ECAPSD.settings import ConfigurationError


@pytest.fixture(autouse=True)
def no_global_logging(monkeypatch):
    # Keep handlers off the root logger so later tests are unaffected
    monkeypatch.setattr("ECAPSD.__main__.setup_logging", lambda *args, **kwargs: None)


def test_overrides_applied_over_defaults():
    args = build_parser().parse_args(['--columns', '20', '--rule', '30', '--seed', '4', '--conventional-dft'])
    config = config_from_args(args)
    assert config.columns == 20
    assert config.time_steps == 1024
    assert config.rule == (0, 0, 0, 1, 1, 1, 1, 0)
    assert config.seed == 4
    assert config.transform_mode is TransformMode.CONVENTIONAL


def test_overrides_applied_over_config_file(tmp_path):
    path = tmp_path / "run.json"
    path.write_text(json.dumps({'columns': 9, 'timeSteps': 5, 'freqSteps': 4}))
    args = build_parser().parse_args(['--config', str(path), '--time-steps', '6'])
    config = config_from_args(args)
    assert (config.columns, config.time_steps, config.freq_steps) == (9, 6, 4)


def test_invalid_override_raises_configuration_error():
    args = build_parser().parse_args(['--freq-steps', '0'])
    with pytest.raises(ConfigurationError):
        config_from_args(args)


def test_main_writes_plot(tmp_path):
    output = tmp_path / "scatter.svg"
    code = main(['--columns', '8', '--time-steps', '6', '--freq-steps', '4', '--seed', '1',
                 '--output', str(output), '--log-dir', str(tmp_path), '--y-range', '0.0', '1.0'])
    assert code == 0
    assert output.exists()


def test_main_exits_on_bad_configuration(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(['--columns', '2', '--log-dir', str(tmp_path)])
    assert exc.value.code == 2


@pytest.mark.parametrize("extra", [['--seed', '-1'], ['--config', 'does_not_exist.json']])
def test_main_exits_on_rejected_input(tmp_path, extra):
    with pytest.raises(SystemExit) as exc:
        main(['--log-dir', str(tmp_path)] + extra)
    assert exc.value.code == 2


def test_main_creates_missing_log_dir(tmp_path):
    log_dir = tmp_path / "nested" / "logs"
    main(['--columns', '5', '--time-steps', '3', '--freq-steps', '2', '--seed', '0',
          '--output', str(tmp_path / "out.svg"), '--log-dir', str(log_dir)])
    assert log_dir.is_dir()
