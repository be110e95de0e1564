"""Typer CLI entrypoint for keyfreq."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Any

import typer

from apps.cli.format_human import render_report
from apps.cli.io import dump_report_json, read_frequency_file
from core.config.options import (
    default_input_path,
    parse_output_format,
    parse_output_mode,
    resolve_log_level,
)
from core.report.aggregator import build_report
from core.utils.errors import ConfigurationError, InputFileError, PositionedError

app = typer.Typer(
    help="Report Emacs keyfreq usage by mode and by function.",
    rich_markup_mode=None,
    add_completion=False,
)
logger = logging.getLogger("keyfreq.cli")

EXIT_CONFIG_ERROR = 1
EXIT_INPUT_ERROR = 1
EXIT_PARSE_ERROR = 3

_LOG_HANDLER_NAME = "keyfreq.stderr"


@app.command()
def report_command(
    input_path: Annotated[
        Path | None,
        typer.Option(
            "-i",
            "--input",
            help="Input filename. Defaults to $HOME/.emacs.keyfreq.",
        ),
    ] = None,
    mode: Annotated[
        str,
        typer.Option(
            "-mode",
            "--mode",
            help="Specify what to output. Choose between all, modes and functions.",
        ),
    ] = "all",
    output_format: Annotated[
        str,
        typer.Option("--format", help="Report format: csv or json."),
    ] = "csv",
) -> None:
    """Parse one keyfreq file and print ranked usage frequencies."""

    try:
        _configure_logging(resolve_log_level())
        mode_typed = parse_output_mode(mode)
        format_typed = parse_output_format(output_format)
    except ConfigurationError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc

    path = input_path if input_path is not None else default_input_path()
    _log_event(logging.INFO, "start", input=str(path), mode=mode_typed, format=format_typed)

    try:
        tables = read_frequency_file(path)
    except InputFileError as exc:
        _log_event(logging.ERROR, "input_error", input=str(path), error_message=str(exc))
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_INPUT_ERROR) from exc
    except PositionedError as exc:
        _log_event(
            logging.ERROR,
            "parse_error",
            input=str(path),
            error_type=type(exc).__name__,
            error_message=exc.message,
            row=exc.position.row,
            column=exc.position.column,
            byte_offset=exc.position.byte_offset,
        )
        typer.echo(f"ERROR: {path}{exc}", err=True)
        raise typer.Exit(code=EXIT_PARSE_ERROR) from exc

    _log_event(
        logging.INFO,
        "parsed",
        records=tables.records,
        modes=len(tables.modes),
        functions=len(tables.functions),
    )

    report = build_report(tables, mode_typed)
    if format_typed == "json":
        typer.echo(dump_report_json(report))
    else:
        typer.echo(render_report(report))

    _log_event(logging.INFO, "done", input=str(path))


def _configure_logging(level: int) -> None:
    package_logger = logging.getLogger("keyfreq")
    for handler in list(package_logger.handlers):
        if handler.get_name() == _LOG_HANDLER_NAME:
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_LOG_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def _log_event(level: int, event: str, **fields: Any) -> None:
    payload = {"event": event, **fields}
    logger.log(level, _dump_json(payload))


def _dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def main() -> None:
    """Console script entrypoint."""

    app()


if __name__ == "__main__":
    main()
