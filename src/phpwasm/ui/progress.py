"""output sinks for install progress and diagnostics."""

import sys
from contextlib import contextmanager
from typing import List, Optional, Protocol, Tuple

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn


class ProgressSink(Protocol):
    """where informational and error lines go. hosts supply their own."""

    def write(self, message: str) -> None:
        ...

    def write_error(self, message: str) -> None:
        ...


class ConsoleSink:
    """sink backed by rich consoles; errors go to stderr."""

    def __init__(self, console: Optional[Console] = None, error_console: Optional[Console] = None):
        """
        initialize console sink.

        args:
            console: optional rich console for informational lines.
            error_console: optional rich console for error lines. defaults to stderr.
        """
        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)
        self._enabled = self._should_show_progress()

    def _should_show_progress(self) -> bool:
        """
        check if we should animate spinners.

        returns false in non-interactive environments (ci/cd, piped output).
        """
        return sys.stdout.isatty() and not sys.stdout.closed

    def write(self, message: str) -> None:
        self.console.print(escape(message), soft_wrap=True)

    def write_error(self, message: str) -> None:
        self.error_console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)

    @contextmanager
    def spinner(self, description: str, transient: bool = True):
        """
        show an indeterminate spinner while a download is in flight.

        args:
            description: text to display next to spinner
            transient: if true, spinner disappears when done

        yields:
            task id for the spinner, or None in non-interactive mode
        """
        if not self._enabled:
            yield None
            return

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=transient,
        ) as progress:
            task_id = progress.add_task(description, total=None)
            yield task_id


class BufferedSink:
    """sink that records lines in memory for hosts that capture output."""

    def __init__(self):
        self.lines: List[Tuple[str, str]] = []

    def write(self, message: str) -> None:
        self.lines.append(("info", message))

    def write_error(self, message: str) -> None:
        self.lines.append(("error", message))

    @property
    def messages(self) -> List[str]:
        return [message for level, message in self.lines if level == "info"]

    @property
    def errors(self) -> List[str]:
        return [message for level, message in self.lines if level == "error"]
