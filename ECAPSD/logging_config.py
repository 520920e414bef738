# =========== START of logging_config.py ===========
from __future__ import annotations
import sys
import logging
import os
from datetime import datetime
from typing import Dict, Optional, Tuple



_current_log_file: Optional[str] = None

class LogSettings:
    class Logging:
        LOG_LEVEL: str = "INFO"
        CONSOLE_LOG_LEVEL: str = "INFO"

    class Performance:
        ENABLE_PERIODIC_REPORTING: bool = False
        ENABLE_DETAILED_LOGGING: bool = False

# --- Custom Log Level ---
DETAIL_LEVEL_NUM = 15  # Between DEBUG (10) and INFO (20)
logging.addLevelName(DETAIL_LEVEL_NUM, "DETAIL")

def detail(self, message, *args, **kws):
    """Logs a message with level DETAIL on this logger."""
    if self.isEnabledFor(DETAIL_LEVEL_NUM):
        # Yes, logger takes its '*args' as 'args'.
        self._log(DETAIL_LEVEL_NUM, message, args, **kws)

# Add the 'detail' method to the Logger class
logging.Logger.detail = detail  # type: ignore [attr-defined]
# --- End Custom Log Level ---


class FindFontFilter(logging.Filter):
    def filter(self, record):
        return "findfont" not in record.getMessage() and not record.name.startswith('matplotlib')


def _resolve_level(level_name: str) -> int:
    level_name = level_name.upper()
    if level_name == "DETAIL":
        return DETAIL_LEVEL_NUM
    return getattr(logging, level_name, logging.INFO)


def setup_logging(log_dir: str, log_level: Optional[str] = None) -> logging.Logger:
    """Setup logging with a timestamped main log file and a console handler.
       Safe to call more than once; only the first call attaches handlers."""
    global _current_log_file
    root_logger = logging.getLogger()
    if root_logger.handlers and _current_log_file is not None:
        return logger # Already initialized

    timestamp_24hr = datetime.now().strftime("%Y%m%d_%H%M%S") # 24-hour format

    # --- Main Logger Setup ---
    file_log_level = _resolve_level(log_level or LogSettings.Logging.LOG_LEVEL)
    console_log_level = _resolve_level(LogSettings.Logging.CONSOLE_LOG_LEVEL)
    if log_level:
        console_log_level = file_log_level
    main_formatter = logging.Formatter('%(asctime)s - %(levelname)s - [%(name)s] - %(message)s')

    # --- Create Handlers ---
    main_log_filename = f'ECAPSD_{timestamp_24hr}.log'
    main_file_handler = logging.FileHandler(os.path.join(log_dir, main_log_filename))
    main_file_handler.setFormatter(main_formatter)
    main_file_handler.setLevel(file_log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(main_formatter)
    console_handler.setLevel(console_log_level)
    console_handler.addFilter(FindFontFilter())

    # Set root level to the *lowest* of all handlers
    root_logger.setLevel(min(file_log_level, console_log_level))
    root_logger.addHandler(main_file_handler)
    root_logger.addHandler(console_handler)
    _current_log_file = os.path.join(log_dir, main_log_filename)

    # --- Matplotlib logger: warnings only ---
    matplotlib_logger = logging.getLogger('matplotlib')
    matplotlib_logger.setLevel(logging.WARNING)

    # --- Numba logger: its INFO/DEBUG output is compiler noise ---
    numba_logger = logging.getLogger('numba')
    numba_logger.setLevel(logging.WARNING)

    logger.info(f"Logging initialized. Root Level: {logging.getLevelName(root_logger.level)}, "
                f"File Handler Level: {logging.getLevelName(file_log_level)}, "
                f"Console Handler Level: {logging.getLevelName(console_log_level)}")
    logger.info(f"Log file: {_current_log_file}")
    return logger


APP_DIR = "ECAPSD"
SUBDIRS = {
    'logs': 'logs',
}

def setup_directories(base_dir: Optional[str] = None) -> Tuple[Dict[str, str], str]:
    """Sets up the necessary directories for the application."""
    base_path = base_dir or os.path.join(os.getcwd(), APP_DIR)
    resources_path = os.path.join(base_path, "Resources")

    paths = {}
    for key, subdir in SUBDIRS.items():
        path = os.path.join(resources_path, subdir)
        os.makedirs(path, exist_ok=True)
        paths[key] = path

    return paths, base_path


logger = logging.getLogger(APP_DIR)


# =========== END of logging_config.py ===========
