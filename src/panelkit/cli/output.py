"""Output formatting for CLI commands."""

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from panelkit.core.types import DBSchema
from panelkit.exceptions import PanelKitError

console = Console()


class OutputFormatter:
    """Formats output for terminal or JSON mode."""

    def __init__(self, json_mode: bool = False) -> None:
        self.json_mode = json_mode

    def print_table(
        self,
        title: str,
        data: list[dict[str, Any]],
        columns: list[str],
    ) -> None:
        """Print data as Rich table or JSON array."""
        if self.json_mode:
            print(json.dumps(data, default=str, indent=2))
        else:
            table = Table(title=title, show_header=True, header_style="bold magenta")
            for col in columns:
                table.add_column(col)
            for row in data:
                table.add_row(*[str(row.get(col, "")) for col in columns])
            console.print(table)

    def print_schema(self, entity: DBSchema) -> None:
        """Print one entity with its fields, relations and unique groups."""
        if self.json_mode:
            print(json.dumps(entity.model_dump(by_alias=True), default=str, indent=2))
            return

        console.print(f"\n[bold]Entity:[/bold] {entity.name}")

        if entity.fields:
            console.print(f"\n[bold]Fields ({len(entity.fields)}):[/bold]")
            fields_table = Table(show_header=True, header_style="bold cyan")
            fields_table.add_column("Name")
            fields_table.add_column("Type")
            fields_table.add_column("Id")
            fields_table.add_column("Required")
            fields_table.add_column("Reference")

            for field in entity.fields:
                fields_table.add_row(
                    field.name,
                    str(field.type),
                    "✓" if field.is_id else "",
                    "✓" if field.is_required else "",
                    "✓" if field.is_reference else "",
                )
            console.print(fields_table)

        if entity.relations:
            console.print(f"\n[bold]Relations ({len(entity.relations)}):[/bold]")
            rel_table = Table(show_header=True, header_style="bold cyan")
            rel_table.add_column("Table")
            rel_table.add_column("Type")
            rel_table.add_column("Join Columns")

            for relation in entity.relations:
                joins = ", ".join(
                    f"{option.name} → {option.referenced_column_name}"
                    for option in relation.join_column_options or []
                )
                rel_table.add_row(relation.table, str(relation.relation_type), joins)
            console.print(rel_table)

        if entity.unique_fields:
            groups = "; ".join(", ".join(group) for group in entity.unique_fields)
            console.print(f"\n[bold]Unique:[/bold] {groups}")

    def print_success(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Print success message with optional details."""
        if self.json_mode:
            output = {"success": True, "message": message}
            if details:
                output.update(details)
            print(json.dumps(output, default=str, indent=2))
        else:
            console.print(f"✓ {message}", style="green")
            if details:
                for key, value in details.items():
                    console.print(f"  {key}: {value}", style="dim")

    def print_error(self, error: Exception) -> None:
        """Print error message."""
        if self.json_mode:
            if isinstance(error, PanelKitError):
                print(json.dumps(error.to_dict(), default=str, indent=2))
            else:
                print(json.dumps({"error": str(error)}, indent=2))
        else:
            error_text = str(error)
            # For PanelKitError, include context if available
            if isinstance(error, PanelKitError) and error.context:
                context_str = "\n".join(f"{k}: {v}" for k, v in error.context.items())
                error_text = f"{error_text}\n\n{context_str}"

            panel = Panel(
                error_text,
                title="[red]Error[/red]",
                border_style="red",
            )
            console.print(panel)

    def print_data(self, data: Any) -> None:
        """Print generic data (dict, list, etc.)."""
        if self.json_mode:
            print(json.dumps(data, default=str, indent=2))
        else:
            console.print_json(json.dumps(data, default=str))
