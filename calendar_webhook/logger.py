"""
calendar_webhook/logger.py
--------------------------
Logging setup shared by the webhook service modules.
Writes one file per logger per day and prunes files past retention.
"""

import datetime
import logging
import os
from glob import glob

LOG_RETENTION_DAYS = 14


def _log_dir() -> str:
    return os.getenv("LOG_DIR", "logs")


def _cleanup_old_logs(log_dir: str):
    """Remove <name>_YYYYMMDD.log files older than the retention period."""
    cutoff = datetime.datetime.now() - datetime.timedelta(days=LOG_RETENTION_DAYS)
    for path in glob(os.path.join(log_dir, "*.log")):
        stamp = os.path.basename(path).rsplit("_", 1)[-1].replace(".log", "")
        if len(stamp) != 8 or not stamp.isdigit():
            continue
        try:
            date = datetime.datetime.strptime(stamp, "%Y%m%d")
        except ValueError:
            continue
        if date < cutoff:
            try:
                os.remove(path)
            except OSError:
                # another worker got there first
                continue


# Names handed out by get_logger(), so their handlers can be rebuilt later
_NAMES = set()


def _attach_handlers(logger: logging.Logger, name: str):
    logger.setLevel(logging.INFO)
    log_dir = _log_dir()
    os.makedirs(log_dir, exist_ok=True)

    log_path = os.path.join(log_dir, f"{name}_{datetime.datetime.now():%Y%m%d}.log")
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s"))
    logger.addHandler(handler)

    if os.getenv("ENV", "dev").lower() != "prod":
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(console)

    _cleanup_old_logs(log_dir)


def get_logger(name: str) -> logging.Logger:
    """
    Returns a configured logger for the given name.
    Logs to $LOG_DIR/<name>_YYYYMMDD.log (default logs/).
    Console output is disabled when ENV=prod.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        _attach_handlers(logger, name)
        _NAMES.add(name)

    return logger


def reconfigure_loggers():
    """Rebuild handlers of every logger from get_logger() with the current LOG_DIR and ENV."""
    for name in sorted(_NAMES):
        logger = logging.getLogger(name)
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)
        _attach_handlers(logger, name)
