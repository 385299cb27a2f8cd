"""Terminal Output

stdout carries only the commit message and config listings so the tool can be
piped. Everything else (errors, warnings, verbose diagnostics, the spinner)
goes to stderr, coloured when that stream is a terminal.
"""

import os
import sys
import threading

_RESET = '\033[0m'
_BOLD = '\033[1m'
_DIM = '\033[2m'
_RED = '\033[31m'
_GREEN = '\033[32m'
_YELLOW = '\033[33m'


def _color_enabled(stream) -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    return hasattr(stream, 'isatty') and stream.isatty() and sys.platform != 'win32'


def _paint(text: str, code: str, stream) -> str:
    return f"{code}{text}{_RESET}" if _color_enabled(stream) else text


def dim(text: str) -> str:
    return _paint(text, _DIM, sys.stdout)


def bold(text: str) -> str:
    return _paint(text, _BOLD, sys.stdout)


def print_success(message: str) -> None:
    """Confirmation for a completed action (config saved, commit made)."""
    print(f"{_paint('done:', _GREEN, sys.stdout)} {message}")


def print_error(message: str, detail: str | None = None) -> None:
    """Headline in red, then the raw context (status, response body, cause) uncoloured.

    The detail is printed as-is so it can be copied into a bug report.
    """
    print(f"{_paint('error:', _BOLD + _RED, sys.stderr)} {message}", file=sys.stderr)
    if detail:
        print(detail, file=sys.stderr)


def print_warning(message: str) -> None:
    print(f"{_paint('warning:', _YELLOW, sys.stderr)} {message}", file=sys.stderr)


def print_diagnostic(label: str, value) -> None:
    """One `--verbose` line, e.g. ``  endpoint: https://...``."""
    print(_paint(f"  {label}: {value}", _DIM, sys.stderr), file=sys.stderr)


class Spinner:
    """Shows that the blocking API call is still in flight.

    Only drawn when stderr is a terminal; the line is cleared on exit.
    """
    FRAMES = '|/-\\'

    def __init__(self, label: str):
        self.label = label
        self._thread = None
        self._stop = threading.Event()

    def _spin(self):
        idx = 0
        while not self._stop.is_set():
            sys.stderr.write(f"\r\033[K{self.FRAMES[idx % len(self.FRAMES)]} {self.label}")
            sys.stderr.flush()
            idx += 1
            self._stop.wait(0.1)

    def __enter__(self):
        if sys.stderr.isatty():
            self._stop.clear()
            self._thread = threading.Thread(target=self._spin, daemon=True)
            self._thread.start()
        return self

    def __exit__(self, *args):
        if self._thread:
            self._stop.set()
            self._thread.join()
            self._thread = None
            sys.stderr.write('\r\033[K')
            sys.stderr.flush()
