# =========== START of utils.py ===========
from __future__ import annotations
import os
import time
import traceback
from collections import defaultdict
from contextlib import contextmanager
from functools import wraps
from typing import Any, Dict, List, Set
import numpy as np
import psutil

from .logging_config import logger, LogSettings



class PerformanceLogger:
    def __init__(self):
        self.metrics: Dict[str, List[float]] = defaultdict(list)
        self.start_times: Dict[str, float] = {}
        self.active_measurements: Set[str] = set()
        self.memory_usage: List[float] = []

    @contextmanager
    def measure(self, name: str):
        """Context manager for measuring execution time"""
        try:
            self.start_measurement(name)
            yield
        finally:
            self.end_measurement(name)

    def start_measurement(self, name: str):
        """Start measuring a named operation"""
        if name in self.active_measurements:
            logger.warning(f"Measurement '{name}' already active")
            return
        self.start_times[name] = time.perf_counter()
        self.active_measurements.add(name)

    def end_measurement(self, name: str):
        """End measuring a named operation"""
        if name not in self.active_measurements:
            logger.warning(f"Measurement '{name}' not active")
            return
        duration = time.perf_counter() - self.start_times[name]
        self.log_metric(name, duration)
        self.active_measurements.remove(name)

    def log_metric(self, name: str, value: float, max_history: int = 1000):
        self.metrics[name].append(value)
        if len(self.metrics[name]) > max_history:
            self.metrics[name] = self.metrics[name][-max_history:]

    def sample_memory(self) -> float:
        """Record and return resident memory of this process in MB"""
        rss_mb = psutil.Process(os.getpid()).memory_info().rss / (1024 * 1024)
        self.memory_usage.append(rss_mb)
        return rss_mb

    def get_stats(self) -> Dict[str, Any]:
        """Get performance statistics"""
        stats = {}
        for name, measurements in self.metrics.items():
            if measurements:
                stats[name] = {
                    'avg': float(np.mean(measurements)),
                    'min': float(np.min(measurements)),
                    'max': float(np.max(measurements)),
                    'count': len(measurements)
                }
        return stats

    def log_summary(self):
        stats = self.get_stats()
        for name, s in sorted(stats.items()):
            logger.info(f"  {name}: avg={s['avg']:.4f}s min={s['min']:.4f}s max={s['max']:.4f}s (n={s['count']})")
        if self.memory_usage:
            logger.info(f"  Peak resident memory: {max(self.memory_usage):.1f} MB")

    def reset(self):
        """Reset all measurements"""
        self.metrics.clear()
        self.start_times.clear()
        self.active_measurements.clear()
        self.memory_usage.clear()


perf_logger = PerformanceLogger()


def timer_decorator(func):
    """Decorator to measure execution time of a pipeline stage into perf_logger."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        metric_name = f"{func.__name__}_total_time"
        start_time = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            execution_time = time.perf_counter() - start_time
            perf_logger.log_metric(metric_name, execution_time)
            if LogSettings.Performance.ENABLE_DETAILED_LOGGING:
                logger.detail(f"{func.__name__} finished in {execution_time:.4f}s")  # type: ignore [attr-defined]
    return wrapper

def log_errors(func):
    """Decorator to catch and log errors with context"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            logger.error(
                f"Error in {func.__name__}: {str(e)}\n"
                f"Traceback:\n{traceback.format_exc()}"
            )
            raise
    return wrapper


# =========== END of utils.py ===========
