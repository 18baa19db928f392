from __future__ import annotations

import logging

import pytest

from voltweb.common.logging_config import (
    TRACE,
    NiceGuiLogHandler,
    attach_ui_log,
    detach_ui_log,
    resolve_cli_level,
)


class FakeLogWidget:
    def __init__(self) -> None:
        self.lines: list[str] = []

    def push(self, line: str) -> None:
        self.lines.append(line)


@pytest.mark.unit
@pytest.mark.parametrize(
    "log_level,verbose,quiet,expected",
    [
        ("debug", 0, True, logging.DEBUG),
        ("TRACE", 0, False, TRACE),
        (None, 3, False, TRACE),
        (None, 2, False, logging.DEBUG),
        (None, 1, True, logging.INFO),
        (None, 0, True, logging.WARNING),
        (None, 0, False, logging.ERROR),
    ],
)
def test_resolve_cli_level_priority(log_level, verbose, quiet, expected):
    assert resolve_cli_level(log_level, verbose, quiet, logging.ERROR) == expected


@pytest.mark.unit
def test_ui_handler_mirrors_into_attached_widgets():
    handler = NiceGuiLogHandler()
    widget = FakeLogWidget()
    record = logging.LogRecord("voltweb", logging.INFO, __file__, 1, "Server status: %d/%d online", (1, 2), None)

    attach_ui_log(widget, replay=False)
    try:
        handler.emit(record)
    finally:
        detach_ui_log(widget)
    handler.emit(record)

    assert len(widget.lines) == 1
    assert "Server status: 1/2 online" in widget.lines[0]


@pytest.mark.unit
def test_attach_replays_recent_lines():
    handler = NiceGuiLogHandler()
    handler.emit(logging.LogRecord("voltweb", logging.WARNING, __file__, 1, "replay me", (), None))
    widget = FakeLogWidget()

    attach_ui_log(widget)
    detach_ui_log(widget)

    assert any("replay me" in line for line in widget.lines)
