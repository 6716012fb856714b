import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..config import load_install_config
from ..domain.errors import PhpWasmError
from ..manifest import load_manifest
from ..plugin import InstallEvent, Plugin, POST_INSTALL_CMD, POST_UPDATE_CMD
from ..resolution.resolver import VersionResolver
from ..ui.progress import ConsoleSink

app = typer.Typer(help="Download php-wasm release artifacts matching the installed version.")
console = Console()
error_console = Console(stderr=True)


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


def get_plugin(target_dir: Optional[Path] = None, timeout: Optional[float] = None) -> Plugin:
    return Plugin(target_dir=target_dir, http_timeout=timeout)


def _run_event(event_name: str, project_dir: Path, target_dir: Optional[Path], timeout: Optional[float]):
    sink = ConsoleSink(console, error_console)
    try:
        manifest = load_manifest(project_dir)
        event = InstallEvent(
            name=event_name,
            packages=manifest.locked,
            io=sink,
            root_package=manifest.root_package,
            extra=manifest.extra,
            project_dir=str(manifest.root_dir),
        )
        plugin = get_plugin(target_dir, timeout)
        plugin.activate(sink)
        plugin.dispatch(event)
    except PhpWasmError as e:
        # the sink has already shown errors raised during the install itself
        if not e.reported:
            error_console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(code=1)


PROJECT_DIR_OPTION = typer.Option(Path("."), "--project-dir", "-d", help="Directory holding composer.json")
TARGET_DIR_OPTION = typer.Option(None, "--target-dir", "-t", help="Override extra.php-wasm.target-dir")
TIMEOUT_OPTION = typer.Option(None, "--timeout", help="HTTP timeout in seconds")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Show debug logging")


@app.command()
def install(
    project_dir: Path = PROJECT_DIR_OPTION,
    target_dir: Optional[Path] = TARGET_DIR_OPTION,
    timeout: Optional[float] = TIMEOUT_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """download artifacts after dependencies were installed."""
    configure_logging(verbose)
    _run_event(POST_INSTALL_CMD, project_dir, target_dir, timeout)


@app.command()
def update(
    project_dir: Path = PROJECT_DIR_OPTION,
    target_dir: Optional[Path] = TARGET_DIR_OPTION,
    timeout: Optional[float] = TIMEOUT_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """download artifacts after dependencies were updated."""
    configure_logging(verbose)
    _run_event(POST_UPDATE_CMD, project_dir, target_dir, timeout)


@app.command()
def resolve(
    project_dir: Path = PROJECT_DIR_OPTION,
    package: Optional[str] = typer.Option(None, "--package", "-p", help="Package to look up"),
    verbose: bool = VERBOSE_OPTION,
):
    """print the normalized installed version without downloading anything."""
    configure_logging(verbose)
    try:
        manifest = load_manifest(project_dir)
        config = load_install_config(manifest.extra)
        version = VersionResolver().resolve(manifest.snapshot(), package or config.package)
    except PhpWasmError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(code=1)
    console.print(version)


if __name__ == "__main__":
    app()
