import logging
import os
from pathlib import Path
from logging.handlers import RotatingFileHandler
from tt.common.setup import PATHS

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Environment switches, read once when the module is first imported. Settings can't drive these, since the settings
# loader itself logs.
LEVEL_ENV = "TASKTIMER_LOG_LEVEL"
CONSOLE_ENV = "TASKTIMER_LOG_CONSOLE"

# Maps a level name like "info" to its logging constant, falling back to `default` for anything unknown.
def level_from_env(default=logging.DEBUG):
    name = os.getenv(LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default

def console_from_env():
    return os.getenv(CONSOLE_ENV, "").strip().lower() in ("1", "true", "yes", "on")

# Adds `handler` under `handler_name` unless the logger already carries one by that name, so repeated get_logger()
# calls never double up output.
def _attach(logger, handler_name, handler, level, fmt):
    if any(h.get_name() == handler_name for h in logger.handlers):
        return
    handler.setLevel(level)
    handler.setFormatter(fmt)
    handler.set_name(handler_name)
    logger.addHandler(handler)

# Task timer logger: a rotating tasktimer.log kept across runs, a latest.log holding only the current run, and an
# optional console stream. Everything lands under PATHS.logs, which follows TASKTIMER_HOME.
def get_logger(
        name = "tasktimer",
        level = None,
        log_dir: Path | None = None,
        max_bytes = 2 * 1024 * 1024,
        backup_count = 3,
        console = None,
) -> logging.Logger:
    level = level_from_env() if level is None else level
    console = console_from_env() if console is None else console

    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(level)

    log_dir = log_dir or PATHS.logs
    log_dir.mkdir(parents=True,exist_ok=True)
    fmt = logging.Formatter(LOG_FORMAT,LOG_DATE_FORMAT)

    _attach(logger, f"{name}:persistent",
            RotatingFileHandler(log_dir / f"{name}.log", maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"),
            level, fmt)
    _attach(logger, f"{name}:latest",
            logging.FileHandler(log_dir / "latest.log", mode="w", encoding="utf-8"),
            level, fmt)
    if console:
        _attach(logger, f"{name}:console", logging.StreamHandler(), level, fmt)
    return logger

log = get_logger()
log.info(f"=== INITIALIZED NEW SESSION (level {logging.getLevelName(log.level)}) ===")
