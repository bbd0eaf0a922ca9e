"""panelkit CLI - Main entry point."""

from typing import Annotated

import typer

import panelkit
from panelkit.cli.context import CLIContext

# Create main Typer app
app = typer.Typer(
    name="panelkit",
    help="panelkit CLI - admin panel backend for an existing database",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    database: Annotated[
        str | None,
        typer.Option(
            "--database",
            "-d",
            envvar="PANELKIT_DATABASE_URL",
            help="Database holding panelkit's own tables",
        ),
    ] = None,
    data_source: Annotated[
        str | None,
        typer.Option(
            "--data-source",
            "-s",
            envvar="PANELKIT_DATA_SOURCE_URL",
            help="Database to introspect",
        ),
    ] = None,
    echo: Annotated[
        bool,
        typer.Option(
            "--echo",
            "-e",
            help="Echo SQL statements to console",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON (machine-readable)",
        ),
    ] = False,
) -> None:
    """Initialize CLI context with global options."""
    ctx.obj = CLIContext(
        database_url=database,
        data_source_url=data_source,
        echo=echo,
        json_output=json_output,
    )


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"panelkit v{panelkit.__version__}")


# Register command groups
from panelkit.cli.commands import account, config, schema, serve  # noqa: E402

app.add_typer(schema.app, name="schema")
app.add_typer(config.app, name="config")
app.add_typer(account.app, name="account")

# Register serve as a standalone command (not a group)
app.command(name="serve")(serve.serve_command)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
