from __future__ import annotations

import logging
import os
import sys
import threading
import weakref
from collections import deque

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

if not hasattr(logging.Logger, "trace"):

    def _trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = _trace  # type: ignore[attr-defined]

TRACE_ENABLED = os.getenv("VOLT_TRACE", "0").strip().lower() in {"1", "true", "yes", "on"}

# httpx logs every request at INFO
for _chatty in ("httpx", "httpcore"):
    logging.getLogger(_chatty).setLevel(TRACE if TRACE_ENABLED else logging.WARNING)

_ANSI = {
    "TRACE": "\033[90m",
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[1;31m",
}
_ANSI_DIM = "\033[2m"
_ANSI_OFF = "\033[0m"

_CLI_LEVELS = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class AnsiColorFormatter(logging.Formatter):
    """Console format `HH:MM:SS LEVEL logger: message`, colored when stderr is a tty."""

    def __init__(self, colored: bool = True) -> None:
        super().__init__("%(levelname)s %(name)s: %(message)s")
        self.colored = colored and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        stamp = self.formatTime(record, "%H:%M:%S")
        line = super().format(record)
        if not self.colored:
            return f"{stamp} {line}"
        color = _ANSI.get(record.levelname, "")
        if color:
            line = line.replace(record.levelname, f"{color}{record.levelname}{_ANSI_OFF}", 1)
        return f"{_ANSI_DIM}{stamp}{_ANSI_OFF} {line}"


class UiLogSink:
    """
    Fan-out of formatted log lines into NiceGUI ui.log widgets.

    Widgets are held weakly; one that raises on push (its client went away)
    is dropped. The last `backlog` lines are kept so a log panel opened later
    starts with recent poll activity.
    """

    def __init__(self, backlog: int = 200) -> None:
        self._widgets: set[weakref.ref] = set()
        self._lines: deque[str] = deque(maxlen=backlog)
        self._lock = threading.Lock()

    def attach(self, widget, replay: bool = True) -> None:
        with self._lock:
            if replay:
                for line in self._lines:
                    widget.push(line)
            self._widgets.add(weakref.ref(widget))

    def detach(self, widget) -> None:
        with self._lock:
            self._widgets.discard(weakref.ref(widget))

    def push(self, line: str) -> None:
        with self._lock:
            self._lines.append(line)
            dead = set()
            for ref in self._widgets:
                widget = ref()
                try:
                    if widget is None:
                        raise ReferenceError
                    widget.push(line)
                except Exception:
                    dead.add(ref)
            self._widgets -= dead


ui_log_sink = UiLogSink()


class NiceGuiLogHandler(logging.Handler):
    """Logging handler writing into `ui_log_sink`."""

    def __init__(self, level: int = logging.INFO, sink: UiLogSink = ui_log_sink) -> None:
        super().__init__(level=level)
        self.sink = sink
        self.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", "%H:%M:%S")
        )

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.sink.push(self.format(record))
        except Exception:
            self.handleError(record)


def attach_ui_log(log_widget, replay: bool = True) -> None:
    ui_log_sink.attach(log_widget, replay=replay)


def detach_ui_log(log_widget) -> None:
    ui_log_sink.detach(log_widget)


def resolve_cli_level(
    log_level: str | None, verbose: int, quiet: bool, default: int
) -> int:
    """Priority: explicit --log-level > -v/-q > environment default."""
    if log_level:
        return _CLI_LEVELS.get(log_level.upper(), default)
    if verbose:
        return (logging.INFO, logging.DEBUG, TRACE)[min(verbose, 3) - 1]
    if quiet:
        return logging.WARNING
    return default


def configure_logging(
    level: int = logging.INFO, use_color: bool = True, add_ui_handler: bool = True
) -> logging.Logger:
    """
    Set up the root logger once: a stderr console handler at `level` and,
    optionally, the status page log handler. The UI handler records at
    INFO or finer even when the console is quieter. Safe to call repeatedly.
    """
    root = logging.getLogger()
    handler_types = {type(h) for h in root.handlers}

    if logging.StreamHandler not in handler_types:
        console = logging.StreamHandler(stream=sys.stderr)
        console.setFormatter(AnsiColorFormatter(colored=use_color))
        root.addHandler(console)
    for h in root.handlers:
        if type(h) is logging.StreamHandler:
            h.setLevel(level)

    ui_level = min(level, logging.INFO)
    if add_ui_handler and NiceGuiLogHandler not in handler_types:
        root.addHandler(NiceGuiLogHandler(level=ui_level))

    root.setLevel(ui_level if add_ui_handler else level)
    return root
