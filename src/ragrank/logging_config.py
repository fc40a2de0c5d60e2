"""Logging setup for hosts embedding the ranking engine (console + rotating file)"""
import glob
import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s'


def setup_logging(
    log_file: Optional[str] = "logs/ragrank.log",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    keep_sessions: int = 5,
) -> Optional[Path]:
    """
    Configure the "ragrank" logger hierarchy.

    The engine itself only emits records through module loggers; nothing is
    written anywhere until a host calls this function.

    Destinations:
    - Console: brief lines (INFO by default)
    - File: per-stage DEBUG detail (scores, counts), one file per session,
      rotated at 10MB. Pass log_file=None for console only.

    Args:
        log_file: Base path of the log file; a timestamp is appended per session
        console_level: Console logging level
        file_level: File logging level
        keep_sessions: Number of session log files to keep (older ones are removed)

    Returns:
        Path of the session log file, or None when file logging is disabled
    """
    engine_logger = logging.getLogger("ragrank")
    engine_logger.setLevel(min(console_level, file_level))
    for handler in list(engine_logger.handlers):
        handler.close()
        engine_logger.removeHandler(handler)
    engine_logger.propagate = False

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    engine_logger.addHandler(console_handler)

    if log_file is None:
        return None

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # Newest first; the new session takes one of the keep_sessions slots
    log_pattern = str(log_path.parent / f"{log_path.stem}_*.log")
    existing_logs = sorted(glob.glob(log_pattern), reverse=True)
    for old_log in existing_logs[max(keep_sessions - 1, 0):]:
        try:
            Path(old_log).unlink()
        except OSError:
            pass

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    session_log = log_path.parent / f"{log_path.stem}_{timestamp}.log"

    file_handler = RotatingFileHandler(
        session_log,
        mode='a',
        maxBytes=10*1024*1024,
        backupCount=10,
        encoding='utf-8'
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    engine_logger.addHandler(file_handler)

    engine_logger.info(
        f"Logging configured: console={logging.getLevelName(console_level)}, "
        f"file={session_log} ({logging.getLevelName(file_level)})"
    )
    return session_log
