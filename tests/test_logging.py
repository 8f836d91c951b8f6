"""Tests for sitemin.logging."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from sitemin.cli import main
from sitemin.logging import FILE_LINE, ConsoleFormatter, configure_logging, get_logger
from tests._fixtures.site_builder import SiteBuilder


def _record(message: str, level: int = logging.INFO, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("sitemin.orchestrator", level, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_console_formatter_prints_file_lines_bare() -> None:
    formatter = ConsoleFormatter()
    line = "[CSS ] 40%  saved : style.css"

    assert formatter.format(_record(line, **FILE_LINE)) == line
    assert formatter.format(_record("Build finished")) == "[sitemin] INFO Build finished"
    assert formatter.format(_record("disk full", logging.WARNING)) == "[sitemin] WARNING disk full"


def test_get_logger_nests_under_package_logger() -> None:
    assert get_logger().name == "sitemin"
    assert get_logger("walker").name == "sitemin.walker"


def test_configure_logging_replaces_handlers(tmp_path: Path) -> None:
    configure_logging()
    logger = configure_logging(verbose=True, log_file=tmp_path / "build.log")

    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert len(logger.handlers) == 2
    assert isinstance(logger.handlers[0].formatter, ConsoleFormatter)


def test_log_file_keeps_full_context_for_file_lines(tmp_path: Path) -> None:
    log_file = tmp_path / "build.log"
    configure_logging(log_file=log_file)

    get_logger("orchestrator").info("[COPY]             : robots.txt", extra=FILE_LINE)
    for handler in logging.getLogger("sitemin").handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "INFO sitemin.orchestrator: [COPY]             : robots.txt" in content


def test_build_prints_per_file_lines_without_prefix(
    site_builder: SiteBuilder, capsys: pytest.CaptureFixture[str]
) -> None:
    site_builder.write({"index.html": "<p>\n  x\n</p>\n"})

    main(["build", str(site_builder.path())])

    err_lines = capsys.readouterr().err.splitlines()
    assert any(line.startswith("[HTML] ") and line.endswith(": index.html") for line in err_lines)
    assert any(line.startswith("[sitemin] INFO Build finished") for line in err_lines)
