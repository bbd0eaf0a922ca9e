"""Configuration commands."""

from typing import Annotated

import typer

from panelkit.cli.context import CLIContext
from panelkit.cli.output import OutputFormatter
from panelkit.cli.parsing import parse_value, read_json_file
from panelkit.configuration.keys import CONFIGURATION_KEYS, list_configuration_keys

app = typer.Typer(help="Read and write configuration")

EntityOption = Annotated[
    str | None,
    typer.Option("--entity", "-e", help="Entity the key is scoped to"),
]


@app.command("keys")
def config_keys(ctx: typer.Context) -> None:
    """List configuration keys."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)
    formatter.print_table(
        "Configuration keys",
        [
            {
                "Key": name,
                "Scope": "entity" if CONFIGURATION_KEYS[name].require_entity else "app",
                "Description": CONFIGURATION_KEYS[name].description,
            }
            for name in list_configuration_keys()
        ],
        ["Key", "Scope", "Description"],
    )


@app.command("get")
def config_get(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Configuration key")],
    entity: EntityOption = None,
) -> None:
    """Show a configuration value."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        panel = cli_ctx.get_panel()
        formatter.print_data(panel.configuration.show(key, entity))
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


@app.command("set")
def config_set(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Configuration key")],
    value: Annotated[
        str | None, typer.Argument(help="Value as JSON, or a plain string")
    ] = None,
    entity: EntityOption = None,
    from_file: Annotated[
        str | None,
        typer.Option("--from-file", help="Load the value from a JSON file"),
    ] = None,
) -> None:
    """Store a configuration value.

    Examples:

        panelkit config set entity_relations_labels '{"orders": "Purchases"}' -e customers

        panelkit config set disabled_entities --from-file disabled.json
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        if from_file:
            parsed = read_json_file(from_file)
        elif value is not None:
            parsed = parse_value(value)
        else:
            raise typer.BadParameter("Provide a value or --from-file")

        panel = cli_ctx.get_panel()
        panel.configuration.upsert(key, parsed, entity)
        formatter.print_success(f"Saved '{key}'", {"entity": entity} if entity else None)
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()
