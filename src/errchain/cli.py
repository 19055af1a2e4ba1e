from __future__ import annotations

import typer
from loguru import logger
from pydantic import ValidationError

from errchain.config import Settings
from errchain.errors import Error, cause, join, new, wrap
from errchain.http_errors import SENTINELS, as_http_error, new_http_error
from errchain.log import configure_logging, log_error

FORMATS = ("s", "q", "v", "+v")

app = typer.Typer(
    name="errchain",
    help="Inspect how errchain errors are built, matched and rendered",
)


def validate_format(value: str) -> str:
    if value not in FORMATS:
        typer.echo(f"Unsupported format {value!r}, expected one of {FORMATS}", err=True)
        raise typer.Exit(2)
    return value


def sample_error() -> Error:
    chain = wrap(wrap(new("root"), "mid"), "top")
    missing = new_http_error(404, "Resource not found", new("no paste with that slug"))
    return join(chain, missing)


@app.command("demo", help="Render a sample error chain")
def demo(
    fmt: str = typer.Option(
        "+v", "--format", "-f", callback=validate_format, help="s, q, v or +v"
    ),
    log: bool = typer.Option(False, "--log", help="Also log the error to stderr"),
) -> None:
    err = sample_error()
    typer.echo(format(err, fmt))
    if log:
        settings = Settings()
        log_error(err, "cli.demo", "sample error", stack=settings.log_stack)


@app.command("status", help="Show the predefined HTTP error for CODE")
def status(code: int) -> None:
    err = SENTINELS.get(code)
    if err is None:
        typer.echo(f"No predefined error for status {code}", err=True)
        raise typer.Exit(1)
    typer.echo(f"{err.code} {err.message}")


@app.command("inspect", help="Build new(TEXT), wrap it with each --wrap message and explain it")
def inspect_chain(
    text: str,
    wraps: list[str] | None = typer.Option(
        None, "--wrap", "-w", help="Wrap message, innermost first"
    ),
) -> None:
    err = new(text)
    for message in wraps or []:
        err = wrap(err, message)

    http_err = as_http_error(err)
    typer.echo(f"message: {err}")
    typer.echo(f"cause: {cause(err)}")
    typer.echo(f"http: {http_err.code} {http_err.message}")
    typer.echo(format(err, "+v"))


@app.callback()
def root() -> None:
    """Root command for errchain."""
    try:
        settings = Settings()
    except ValidationError as exc:
        typer.echo(f"Invalid settings: {exc}", err=True)
        raise typer.Exit(2) from exc
    configure_logging(settings)
    logger.debug("errchain cli started")


def main() -> None:  # pragma: no cover - CLI entry point
    """Entrypoint for the CLI."""
    app()


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
