import logging
import os

import pytest

from ECAPSD import logging_config
from ECAPSD.logging_config import DETAIL_LEVEL_NUM, FindFontFilter, setup_directories, setup_logging
from ECAPSD.utils import PerformanceLogger, log_errors, timer_decorator, perf_logger


def test_measure_records_duration():
    perf = PerformanceLogger()
    with perf.measure("stage"):
        pass
    stats = perf.get_stats()
    assert stats["stage"]["count"] == 1
    assert stats["stage"]["min"] >= 0.0
    assert not perf.active_measurements


def test_sample_memory_positive():
    perf = PerformanceLogger()
    assert perf.sample_memory() > 0
    assert len(perf.memory_usage) == 1


def test_timer_decorator_logs_to_global_perf_logger():
    @timer_decorator
    def work(x):
        return x * 2

    assert work(21) == 42
    assert "work_total_time" in perf_logger.get_stats()


def test_log_errors_reraises(caplog):
    @log_errors
    def broken():
        raise RuntimeError("boom")

    with caplog.at_level(logging.ERROR):
        with pytest.raises(RuntimeError):
            broken()
    assert "Error in broken: boom" in caplog.text


def test_detail_level_registered():
    assert logging.getLevelName(DETAIL_LEVEL_NUM) == "DETAIL"
    assert hasattr(logging.getLogger("ECAPSD"), "detail")


def test_find_font_filter():
    f = FindFontFilter()
    keep = logging.LogRecord("ECAPSD", logging.INFO, __file__, 1, "grid built", None, None)
    drop = logging.LogRecord("matplotlib.font_manager", logging.INFO, __file__, 1, "findfont: score", None, None)
    assert f.filter(keep)
    assert not f.filter(drop)


def test_setup_directories_and_logging(tmp_path, monkeypatch):
    paths, base = setup_directories(str(tmp_path / "app"))
    assert os.path.isdir(paths["logs"])
    assert base == str(tmp_path / "app")

    root = logging.getLogger()
    before = list(root.handlers)
    old_level = root.level
    monkeypatch.setattr(logging_config, "_current_log_file", None)
    try:
        setup_logging(paths["logs"], "DEBUG")
        added = [h for h in root.handlers if h not in before]
        assert any(isinstance(h, logging.FileHandler) for h in added)
        assert os.listdir(paths["logs"])
    finally:
        for h in root.handlers[:]:
            if h not in before:
                root.removeHandler(h)
                h.close()
        root.setLevel(old_level)
