from __future__ import annotations
import logging
import sys
from loguru import logger
from dart_export.core.config import Settings, get_settings

_CONSOLE_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> "
    "<level>{level: <8}</level> "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# Third-party loggers routed through loguru
_BRIDGED = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "urllib3")


# --- stdlib → loguru bridge -------------------------------------------------
class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame, depth = logging.currentframe(), 2
        # Walk the stack to find the caller outside logging module
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[attr-defined]
            depth += 1
        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def init_logging(settings: Settings | None = None):
    """Configure loguru sinks from settings and bridge stdlib loggers into it.

    Console output is colorized text, or one JSON object per line when
    JSON_LOGS is on. LOG_FILE_PATH adds a rotating file sink. Calling this
    again replaces the previous sinks.
    """
    s = settings or get_settings()
    logger.remove()

    level = (s.LOG_LEVEL or "INFO").upper()
    json_logs = bool(s.JSON_LOGS)

    logger.add(
        sys.stdout,
        level=level,
        colorize=not json_logs,
        serialize=json_logs,
        backtrace=False,
        diagnose=False,
        format=_CONSOLE_FMT,
        enqueue=True,
    )

    if s.LOG_FILE_PATH:
        logger.add(
            s.LOG_FILE_PATH,
            level=level,
            rotation="10 MB",
            retention="14 days",
            compression="zip",
            enqueue=True,
            serialize=json_logs,
            colorize=False,
            backtrace=False,
            diagnose=False,
            format=_CONSOLE_FMT,
        )

    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(level)
    for name in _BRIDGED:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.setLevel(level)
        std_logger.propagate = False

    logger.bind(env=s.ENV).debug("logging initialised (level={}, json={})", level, json_logs)
    return logger
