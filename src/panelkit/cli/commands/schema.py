"""Schema commands."""

from typing import Annotated

import typer

from panelkit.cli.context import CLIContext
from panelkit.cli.output import OutputFormatter

# Create schema subcommand group
app = typer.Typer(help="Inspect the data source schema")


@app.command("list")
def schema_list(ctx: typer.Context) -> None:
    """List all entities of the data source."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        panel = cli_ctx.get_panel()
        schema = panel.schemas.get_db_schema()
        disabled = set(panel.configuration.show("disabled_entities"))

        if cli_ctx.json_output:
            formatter.print_data([entity.name for entity in schema])
        else:
            table_data = [
                {
                    "Name": entity.name,
                    "Fields": len(entity.fields),
                    "Relations": len(entity.relations),
                    "Enabled": "" if entity.name in disabled else "✓",
                }
                for entity in schema
            ]
            formatter.print_table(
                f"Entities ({len(schema)} total)",
                table_data,
                ["Name", "Fields", "Relations", "Enabled"],
            )
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


@app.command("describe")
def schema_describe(
    ctx: typer.Context,
    entity_name: Annotated[str, typer.Argument(help="Entity name")],
) -> None:
    """Show fields, relations and unique groups of an entity."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        panel = cli_ctx.get_panel()
        formatter.print_schema(panel.schemas.get_entity_schema(entity_name))
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


@app.command("introspect")
def schema_introspect(ctx: typer.Context) -> None:
    """Re-read the data source and replace the stored schema."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        panel = cli_ctx.get_panel()
        schema = panel.schemas.introspect()
        formatter.print_success(
            f"Introspected {len(schema)} entities",
            {"entities": [entity.name for entity in schema]},
        )
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()
