"""Command-line interface for the top-up pipeline."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from topup.config.settings import PipelineConfig

app = typer.Typer(
    name="topup",
    help="Credit company token top-ups to users and report the results.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file.",
        exists=True,
        dir_okay=False,
    ),
]
CompaniesOption = Annotated[
    Path | None,
    typer.Option("--companies", help="Companies JSON file (overrides config)."),
]
UsersOption = Annotated[
    Path | None,
    typer.Option("--users", help="Users JSON file (overrides config)."),
]


def _build_config(
    config: Path | None,
    companies: Path | None,
    users: Path | None,
    output: Path | None = None,
    strict: bool | None = None,
    log_level: str | None = None,
    json_logs: bool | None = None,
) -> "PipelineConfig":
    """Load the config file (or defaults) and apply command-line overrides."""
    from topup.config.loader import load_config
    from topup.config.settings import (
        DataPathsConfig,
        LoggingConfig,
        PipelineConfig,
    )

    pipeline_config = load_config(config) if config is not None else PipelineConfig()

    updates: dict[str, object] = {}
    if companies is not None or users is not None:
        # Command-line paths are used as given, not joined to data.root
        updates["data_paths"] = DataPathsConfig(
            data_root=Path("."),
            companies=companies or pipeline_config.companies_path,
            users=users or pipeline_config.users_path,
        )
    if output is not None:
        updates["output"] = pipeline_config.output.model_copy(
            update={"report_path": output}
        )
    if strict is not None:
        updates["strict_mode"] = strict

    logging_updates: dict[str, object] = {}
    if log_level is not None:
        logging_updates["level"] = log_level
    if json_logs is not None:
        logging_updates["json_output"] = json_logs
    if logging_updates:
        updates["logging"] = LoggingConfig(
            **{**pipeline_config.logging.model_dump(), **logging_updates}
        )

    return pipeline_config.model_copy(update=updates) if updates else pipeline_config


@app.command()
def run(
    config: ConfigOption = None,
    companies: CompaniesOption = None,
    users: UsersOption = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Report destination (overrides config)."),
    ] = None,
    strict: Annotated[
        bool | None,
        typer.Option(
            "--strict/--lenient",
            help="Validate inputs and drop inactive users (default: from config, strict).",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR)."),
    ] = None,
    json_logs: Annotated[
        bool | None,
        typer.Option("--json-logs/--console-logs", help="Log format."),
    ] = None,
) -> None:
    """Run the pipeline and write the top-up report."""
    from topup.pipeline import run_topup
    from topup.utils.logging import configure_from_settings

    try:
        pipeline_config = _build_config(
            config, companies, users, output, strict, log_level, json_logs
        )
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    configure_from_settings(pipeline_config.logging)

    mode = "strict" if pipeline_config.strict_mode else "lenient"
    console.print(f"[blue]Running top-up pipeline ({mode} mode)[/blue]")
    console.print(f"[dim]Companies: {pipeline_config.companies_path}[/dim]")
    console.print(f"[dim]Users: {pipeline_config.users_path}[/dim]")

    result = run_topup(pipeline_config)

    if not result.succeeded:
        console.print(f"[red]{escape(result.error or 'Pipeline failed')}[/red]")
        raise typer.Exit(code=1)

    console.print()
    table = Table(title=f"Top-up Results ({mode} mode)")
    table.add_column("Company Id", style="cyan", justify="right")
    table.add_column("Company Name", style="cyan")
    table.add_column("Emailed", justify="right")
    table.add_column("Not Emailed", justify="right")
    table.add_column("Total Top-ups", style="green", justify="right")

    for aggregate in result.aggregates:
        table.add_row(
            str(aggregate.company_id),
            escape(aggregate.company_name),
            str(len(aggregate.users_emailed)),
            str(len(aggregate.users_not_emailed)),
            str(aggregate.total_top_ups),
        )

    console.print(table)
    console.print(
        f"[dim]Users joined: {result.n_users_joined}/{result.n_users_loaded}[/dim]"
    )
    console.print(f"\n[green]Saved to: {result.report_path}[/green]")


@app.command()
def validate(
    config: ConfigOption = None,
    companies: CompaniesOption = None,
    users: UsersOption = None,
) -> None:
    """Validate the input files against the record schemas."""
    from topup.utils.logging import configure_from_settings
    from topup.validation import ConsoleReporter, ValidationRunner

    console.print("[blue]Running schema validation...[/blue]")

    try:
        pipeline_config = _build_config(config, companies, users)
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    configure_from_settings(pipeline_config.logging)

    runner = ValidationRunner(pipeline_config)
    results = runner.run()

    reporter = ConsoleReporter(console)
    reporter.print_results(results)

    has_failures = any(r.schema_valid is not True for r in results)
    if has_failures:
        raise typer.Exit(code=1)


@app.command()
def version() -> None:
    """Show version information."""
    from topup import __version__

    console.print(f"topup version {__version__}")


if __name__ == "__main__":
    app()
