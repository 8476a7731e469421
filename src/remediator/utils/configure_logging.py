# src/remediator/utils/configure_logging.py
import logging
import sys
from typing import Optional, Union

from tqdm import tqdm

from remediator.model import LoggingSettings

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"


class LogWithTqdm(logging.Handler):
    """
    Writes log records through `tqdm.write()` so they land above the
    progress bar of `remediator fix --in-place` instead of through it.
    """
    def emit(self, record):
        try:
            tqdm.write(self.format(record), file=sys.stderr)
            self.flush()
        except Exception:
            self.handleError(record)


def resolve_level(level: Union[str, int, None], fallback: int) -> int:
    """Maps 'debug' / 'INFO' / 10 to a logging level; unknown names give the fallback."""
    if level is None:
        return fallback
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else fallback


def configure_logger(
        settings: Optional[LoggingSettings] = None,
        override_level: Optional[str] = None
) -> LogWithTqdm:
    """
    Installs the tqdm-aware handler on the root logger from the 'logging'
    section of settings.json.

    Args:
        settings (LoggingSettings): Root level, per-module levels and silenced loggers.
        override_level (str): Root level that wins over the settings (the --log-level option).

    Returns:
        LogWithTqdm: The installed handler. Calling this again replaces it.
    """
    settings = settings or LoggingSettings()

    handler = LogWithTqdm()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    for existing in [h for h in root_logger.handlers if isinstance(h, LogWithTqdm)]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(resolve_level(override_level or settings.level, logging.WARNING))

    for name, level in settings.module_levels.items():
        logging.getLogger(name).setLevel(resolve_level(level, logging.INFO))

    # Silenced loggers only report at their own (high) level.
    for name, level in settings.silenced.items():
        logging.getLogger(name).setLevel(resolve_level(level, logging.CRITICAL))

    return handler
