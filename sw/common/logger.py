import logging
from datetime import datetime
from logging.handlers import RotatingFileHandler
from sw.common.setup import PATHS

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# stopwatch.log rolls over at 5 MB, keeping 5 old files
_ROTATE_BYTES = 5 * 1024 * 1024
_ROTATE_COUNT = 5


def _attach(logger, handler, handler_name, level, fmt):
    handler.setLevel(level)
    handler.setFormatter(fmt)
    handler.set_name(handler_name)
    logger.addHandler(handler)


# Deletes all but the newest `keep` per-run debug logs.
def _prune_debug_runs(debug_dir, name, keep):
    runs = sorted(debug_dir.glob(f"{name}_*.log"), key=lambda p: p.stat().st_mtime, reverse=True)
    for run in runs[keep:]:
        try: run.unlink()
        except OSError: pass


# Builds the stopwatch logger. Three file handlers go into PATHS.logs:
#   stopwatch.log          - rotating history across sessions, at `level`
#   latest.log             - just this session, overwritten on every launch, at `level`
#   debug/stopwatch_*.log  - every DEBUG line of this session (tick-rate chatter included), last `debug_runs_kept` kept
# Calling this twice never stacks handlers, they're matched by name.
def get_logger(name="stopwatch", level=logging.INFO, debug_runs_kept: int = 10) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(logging.DEBUG)

    fmt = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)
    installed = {h.get_name() for h in logger.handlers}

    if f"{name}:history" not in installed:
        history = RotatingFileHandler(
            filename=PATHS.logs / f"{name}.log",
            maxBytes=_ROTATE_BYTES,
            backupCount=_ROTATE_COUNT,
            encoding="utf-8",
        )
        _attach(logger, history, f"{name}:history", level, fmt)

    if f"{name}:latest" not in installed:
        latest = logging.FileHandler(PATHS.logs / "latest.log", mode="w", encoding="utf-8")
        _attach(logger, latest, f"{name}:latest", level, fmt)

    if f"{name}:session_debug" not in installed:
        debug_dir = PATHS.logs / "debug"
        debug_dir.mkdir(parents=True, exist_ok=True)
        session_file = debug_dir / f"{name}_{datetime.now():%Y-%m-%d_%H-%M-%S}.log"
        _attach(logger, logging.FileHandler(session_file, encoding="utf-8"), f"{name}:session_debug", logging.DEBUG, fmt)
        _prune_debug_runs(debug_dir, name, debug_runs_kept)

    return logger

log = get_logger()
log.info("=== STOPWATCH SESSION STARTED ===")
