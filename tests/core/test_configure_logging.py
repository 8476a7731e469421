# tests/core/test_configure_logging.py
import logging

import pytest

from remediator.app import main
from remediator.model import LoggingSettings
from remediator.utils.configure_logging import LogWithTqdm, configure_logger, resolve_level


@pytest.fixture(autouse=True)
def restore_logging():
    """Zet de root logger en de aangepaste module loggers na elke test terug."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    touched = ["remediator.rules", "flask"]
    levels = {name: logging.getLogger(name).level for name in touched}
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, old in levels.items():
        logging.getLogger(name).setLevel(old)


def _tqdm_handlers():
    return [h for h in logging.getLogger().handlers if isinstance(h, LogWithTqdm)]


@pytest.mark.parametrize("level, expected", [
    ("debug", logging.DEBUG),
    (" INFO ", logging.INFO),
    (logging.ERROR, logging.ERROR),
    ("verbose", logging.WARNING),
    (None, logging.WARNING),
])
def test_resolve_level(level, expected):
    assert resolve_level(level, logging.WARNING) == expected


def test_settings_drive_the_levels():
    settings = LoggingSettings(
        level="ERROR",
        module_levels={"remediator.rules": "DEBUG"},
        silenced={"flask": "CRITICAL"},
    )
    configure_logger(settings)

    assert logging.getLogger().level == logging.ERROR
    assert logging.getLogger("remediator.rules").level == logging.DEBUG
    assert logging.getLogger("flask").level == logging.CRITICAL


def test_override_level_wins():
    configure_logger(LoggingSettings(level="ERROR"), override_level="debug")
    assert logging.getLogger().level == logging.DEBUG


def test_reconfiguring_replaces_only_its_own_handler():
    other = logging.NullHandler()
    logging.getLogger().addHandler(other)

    first = configure_logger()
    second = configure_logger()

    assert _tqdm_handlers() == [second]
    assert first is not second
    assert other in logging.getLogger().handlers


def test_records_are_written_to_stderr(capsys):
    configure_logger(LoggingSettings(level="INFO"))
    logging.getLogger("remediator.test").info("remediated %d file(s)", 3)

    err = capsys.readouterr().err
    assert "INFO - [remediator.test:" in err
    assert "remediated 3 file(s)" in err


def test_cli_log_level_option(tmp_path):
    page = tmp_path / "page.html"
    page.write_text("<html></html>", encoding="utf-8")

    assert main(["--log-level", "DEBUG", "fix", str(page), "-o", str(tmp_path / "out.html")]) == 0
    assert logging.getLogger().level == logging.DEBUG
    assert len(_tqdm_handlers()) == 1
