"""Primary Typer application wiring the company_dedup CLI."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Type

import typer
from rich.table import Table

from company_dedup.utils.logging import configure_logging

from . import dedup
from .common import CLIError, configure_state, console, parse_override


class DedupTyper(typer.Typer):
    """Typer application that turns registered errors into clean exits."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._error_handlers: Dict[Type[Exception], Callable[[Exception], typer.Exit]] = {}

    def error_handler(
        self, exception_type: Type[Exception]
    ) -> Callable[[Callable[[Exception], typer.Exit]], Callable[[Exception], typer.Exit]]:
        def register(handler: Callable[[Exception], typer.Exit]) -> Callable[[Exception], typer.Exit]:
            self._error_handlers[exception_type] = handler
            return handler

        return register

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        try:
            return super().__call__(*args, **kwargs)
        except Exception as exc:
            for exception_type, handler in self._error_handlers.items():
                if isinstance(exc, exception_type):
                    raise SystemExit(handler(exc).exit_code) from exc
            raise


app = DedupTyper(
    add_completion=False,
    help="""
    Group near-duplicate company names from a text file using normalized
    token overlap.
    """.strip(),
    no_args_is_help=True,
)


@app.error_handler(CLIError)
def handle_cli_error(exception: CLIError) -> typer.Exit:
    """Render ``CLIError`` messages without stack traces."""

    console.print(f"[bold red]Error:[/bold red] {exception}", highlight=False)
    return typer.Exit(code=2)


@app.callback()
def main(
    ctx: typer.Context,
    environment: Optional[str] = typer.Option(
        None,
        "--environment",
        "-e",
        help="Active configuration environment (development, testing, production).",
        show_default=False,
    ),
    override: List[str] = typer.Option(  # noqa: B008 - Typer callback signature
        [],
        "--override",
        "-o",
        metavar="KEY=VALUE",
        help="Configuration override in dotted.key=value notation (repeatable).",
    ),
    run_id: Optional[str] = typer.Option(
        None,
        "--run-id",
        help="Explicit run identifier; defaults to a generated value.",
        show_default=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Emit verbose diagnostic output and debug logs.",
    ),
) -> None:
    """Configure shared CLI state prior to executing subcommands."""

    overrides = [parse_override(item) for item in override]
    state = configure_state(
        ctx,
        environment=environment,
        overrides=overrides,
        run_id=run_id,
        verbose=verbose,
    )
    configure_logging(
        state.settings,
        level="DEBUG" if verbose else None,
        run_id=state.run_id,
    )

    if verbose:
        table = Table(title="CLI Context", show_header=False, box=None)
        table.add_row("Environment", state.environment)
        table.add_row("Run ID", state.run_id)
        table.add_row("Threshold", f"{state.settings.policies.grouping.threshold:.2f}")
        console.print(table)


app.command("group")(dedup.group_command)
app.command("normalize")(dedup.normalize_command)
