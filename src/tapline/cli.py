from __future__ import annotations

from pathlib import Path
import sys

import typer

app = typer.Typer(name="tapline", help="Run Python test scripts that produce TAP")

EXIT_DIED = 255


def _load(config: str | None):
    from pydantic import ValidationError

    from tapline.config import TapConfig, load_config

    if config is None:
        return TapConfig()

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(2)
    try:
        return load_config(config_path)
    except (ValidationError, ValueError) as e:
        typer.echo(f"Error: invalid config {config}: {e}", err=True)
        raise typer.Exit(2)


def _exit_status(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    # sys.exit("message") prints the message and exits with 1
    typer.echo(str(code), err=True)
    return 1


@app.command()
def run(
    script: str = typer.Argument(help="Path to the Python test script"),
    script_args: list[str] | None = typer.Argument(
        None, help="Arguments passed on to the script"
    ),
    config: str | None = typer.Option(None, help="Path to tapline YAML config"),
    debug_log: str | None = typer.Option(
        None, "--debug-log", help="Also write tapline's debug log to this file"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to stderr"
    ),
):
    """Run SCRIPT against a fresh default session and report its outcome.

    Exits 0 when every planned test passed, 1 when some failed and 255 when
    the script died or bailed out.
    """
    import runpy

    from tapline.facade import set_session
    from tapline.session import Session
    from tapline.verbose import setup_logger

    script_path = Path(script)
    if not script_path.is_file():
        typer.echo(f"Error: test script not found: {script}", err=True)
        raise typer.Exit(2)

    tap_config = _load(config)
    logger = setup_logger(
        Path(debug_log) if debug_log else None,
        verbose=verbose,
        logger_name="tapline",
        level="DEBUG" if verbose else tap_config.log_level,
    )
    logger.debug(f"Running test script {script_path}")

    session = Session(config=tap_config, logger=logger)
    previous = set_session(session)

    saved_argv = sys.argv[:]
    script_dir = str(script_path.resolve().parent)
    sys.argv = [str(script_path), *(script_args or [])]
    sys.path.insert(0, script_dir)

    died = False
    script_status = 0
    try:
        runpy.run_path(str(script_path), run_name="__main__")
    except SystemExit as e:
        script_status = _exit_status(e.code)
    except Exception as e:
        died = True
        logger.error(f"Test script {script_path} raised {e!r}")
        session.diag(f"Looks like your test died: {e!r}")
    finally:
        sys.argv = saved_argv
        if script_dir in sys.path:
            sys.path.remove(script_dir)
        session.close()
        set_session(previous)

    if died or session.bailed:
        raise typer.Exit(EXIT_DIED)
    if script_status != 0:
        raise typer.Exit(script_status)
    if not session.overall_success():
        raise typer.Exit(1)


@app.command("config")
def show_config(
    config: str | None = typer.Option(None, help="Path to tapline YAML config"),
):
    """Print the effective configuration as YAML."""
    import yaml

    tap_config = _load(config)
    typer.echo(yaml.safe_dump(tap_config.model_dump(), sort_keys=False), nl=False)


if __name__ == "__main__":
    app()
