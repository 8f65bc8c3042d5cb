"""Typer application and CLI entry point for gw2api.

Wires the root callback (output and configuration flags) to the built-in
sub-commands: ``key``, ``config``, ``get``, ``account`` and ``call``.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.  Unhandled exceptions are written to a crash log under
the data directory.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from gw2api import __version__
from gw2api.commands.config import config_app
from gw2api.commands.fetch import account_command, call_command, get_command
from gw2api.commands.key import key_app
from gw2api.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="gw2api",
    help="Query the Guild Wars 2 API with response caching.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(key_app, name="key", help="API key management.")
app.add_typer(config_app, name="config", help="Settings management.")
app.command("get")(get_command)
app.command("account")(account_command)
app.command("call")(call_command)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gw2api {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    lang: Optional[str] = typer.Option(
        None, "--lang", "-l", help="Language code for localized text."
    ),
    no_cache: bool = typer.Option(
        False, "--no-cache", help="Neither read nor write cached responses."
    ),
    auth_header: bool = typer.Option(
        False, "--auth-header", help="Send the API key as a bearer header."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show cache hits and requests."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~gw2api.output.OutputManager` and resolves
    the effective :class:`~gw2api.models.ClientConfig` into ``ctx.obj``.
    Settings-file problems are reported here, before any command runs.
    """
    from gw2api.config import resolve_config
    from gw2api.exceptions import ConfigError
    from gw2api.output import OutputFormat, OutputManager, error, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    ctx.ensure_object(dict)
    if ctx.resilient_parsing:
        return
    try:
        ctx.obj["config"] = resolve_config(
            cli_lang=lang, cli_no_cache=no_cache, cli_auth_header=auth_header
        )
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write the current traceback to the data directory and return its path."""
    from gw2api.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(f"{type(exc).__name__}: {exc}\n\n{traceback.format_exc()}")
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``gw2api`` console script.

    :class:`~gw2api.exceptions.Gw2ApiError` instances that escape a command
    exit with their ``exit_code``; any other exception produces a crash log
    and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from gw2api.exceptions import Gw2ApiError
        from gw2api.output import error

        if isinstance(exc, Gw2ApiError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
