"""Diagnostic output for hubapi, written to stderr only.

Responses are returned to the caller, never printed. This module only
prints diagnostics (pipeline traces, retry notices, HTTP status lines), and
debug lines only appear when verbose mode is switched on::

    from hubapi.output import OutputManager, set_output

    set_output(OutputManager(verbose=True))

Colour is turned off when ``NO_COLOR`` is set or ``TERM=dumb``. In that
case lines are written with plain ``print`` so that pytest's ``capsys``
and shell redirection see exactly the text.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape

# level -> (plain prefix, rich markup template)
_LEVELS = {
    "info": ("", "{message}"),
    "warning": ("Warning: ", "[yellow]Warning:[/yellow] {message}"),
    "error": ("Error: ", "[bold red]Error:[/bold red] {message}"),
    "debug": ("[debug] ", "[dim]\\[debug] {message}[/dim]"),
}


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is present (any value) or ``TERM`` is ``dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


class OutputManager:
    """Writes hubapi diagnostics to stderr through a Rich console.

    Args:
        no_color: Print plain text without Rich markup.
        quiet: Drop ``info`` messages. Warnings and errors still print.
        verbose: Print ``debug`` messages.
    """

    def __init__(self, no_color: bool = False, quiet: bool = False, verbose: bool = False) -> None:
        self._plain = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._console = Console(file=sys.stderr, stderr=True, no_color=self._plain)

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    def info(self, message: str) -> None:
        if not self._quiet:
            self._emit("info", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def debug(self, message: str) -> None:
        if self._verbose:
            self._emit("debug", message)

    def _emit(self, level: str, message: str) -> None:
        prefix, markup = _LEVELS[level]
        if self._plain:
            print(f"{prefix}{message}", file=sys.stderr, flush=True)
        else:
            self._console.print(markup.format(message=escape(message)))


_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the process-wide manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (used between tests)."""
    global _output
    _output = None


def info(message: str) -> None:
    get_output().info(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
