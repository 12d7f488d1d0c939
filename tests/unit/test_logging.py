"""Unit tests for logging setup."""

import io
import json
import logging

import pytest

from wfdocs.utils.logging import (
    ROOT_LOGGER,
    HumanFormatter,
    JSONFormatter,
    LogMode,
    VerboseFormatter,
    configure_from_cli,
    setup_logging,
)


def _record(msg: str = "hello", level: int = logging.WARNING, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("wfdocs.test", level, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:
    def test_human(self) -> None:
        assert HumanFormatter(use_colors=False).format(_record()) == "[WARNING] hello"

    def test_human_colored(self) -> None:
        assert "\033[33m" in HumanFormatter(use_colors=True).format(_record())

    def test_verbose_has_timestamp(self) -> None:
        output = VerboseFormatter(use_colors=False).format(_record())

        assert output.startswith("[WARNING][")
        assert output.endswith("] hello")

    def test_json(self) -> None:
        data = json.loads(JSONFormatter().format(_record("broken", file_path="a.yml")))

        assert data["level"] == "WARNING"
        assert data["msg"] == "broken"
        assert data["file"] == "a.yml"

    def test_json_without_file(self) -> None:
        data = json.loads(JSONFormatter().format(_record()))

        assert "file" not in data


class TestSetup:
    def test_setup_writes_to_stream(self) -> None:
        stream = io.StringIO()
        setup_logging(LogMode.HUMAN, logging.INFO, stream=stream)

        logging.getLogger("wfdocs.scanner").info("scanning")

        assert stream.getvalue() == "[INFO] scanning\n"

    def test_setup_replaces_handlers(self) -> None:
        setup_logging(stream=io.StringIO())
        setup_logging(stream=io.StringIO())

        assert len(logging.getLogger(ROOT_LOGGER).handlers) == 1

    @pytest.mark.parametrize(
        ("flags", "level", "formatter"),
        [
            ({}, logging.INFO, HumanFormatter),
            ({"verbose": True}, logging.DEBUG, VerboseFormatter),
            ({"quiet": True}, logging.WARNING, HumanFormatter),
            ({"ci": True}, logging.INFO, JSONFormatter),
        ],
    )
    def test_configure_from_cli(self, flags: dict[str, bool], level: int, formatter: type) -> None:
        configure_from_cli(**flags)

        logger = logging.getLogger(ROOT_LOGGER)
        assert logger.level == level
        assert type(logger.handlers[0].formatter) is formatter
