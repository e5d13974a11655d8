"""Logging configuration: brief console output plus a detailed per-session log file"""
import glob
import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Session log files kept on disk, including the new one
KEEP_SESSION_LOGS = 5


def _cleanup_old_logs(log_path: Path, keep: int = KEEP_SESSION_LOGS):
    """Delete the oldest session logs so that `keep` remain after this session starts."""
    pattern = str(log_path.parent / f"{log_path.stem}_*.log")
    existing = sorted(glob.glob(pattern), reverse=True)  # newest first (timestamped names)
    for old_log in existing[keep - 1:]:
        try:
            Path(old_log).unlink()
        except OSError as e:
            print(f"WARNING: could not delete old log {old_log}: {e}", file=sys.stderr)


def setup_logging(
    log_file: str = "logs/modassist.log",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Configure root logging with two destinations.

    - Console: `LEVEL: message`, INFO by default
    - File: timestamp, level, logger and line number, DEBUG by default;
      one file per session (`<stem>_<YYYYmmdd_HHMMSS>.log`), rotated at 10MB

    Search scoring details (expanded terms, candidate counts, skipped
    entries) are logged at DEBUG and therefore only reach the file.

    Args:
        log_file: Base path of the log file (relative to working directory)
        console_level: Console logging level
        file_level: File logging level

    Returns:
        Path of this session's log file
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    _cleanup_old_logs(log_path)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    session_log = log_path.parent / f"{log_path.stem}_{timestamp}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # handlers filter
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

    file_handler = RotatingFileHandler(
        session_log,
        mode='a',
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=10,
        encoding='utf-8'
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    # Keep HTTP access noise out of the console
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.info(
        f"Logging configured: console={logging.getLevelName(console_level)}, "
        f"file={session_log} ({logging.getLevelName(file_level)})"
    )
    return session_log
