"""Account commands."""

from typing import Annotated

import typer

from panelkit.accounts.types import AccountCreate
from panelkit.cli.context import CLIContext
from panelkit.cli.output import OutputFormatter

app = typer.Typer(help="Manage panel accounts")


@app.command("create")
def account_create(
    ctx: typer.Context,
    username: Annotated[str, typer.Argument(help="Username")],
    name: Annotated[str, typer.Option("--name", "-n", help="Display name")],
    password: Annotated[
        str,
        typer.Option(prompt=True, confirmation_prompt=True, hide_input=True, help="Password"),
    ],
    role: Annotated[str, typer.Option("--role", "-r", help="creator or viewer")] = "creator",
) -> None:
    """Create an account. The first account is usually a creator."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        panel = cli_ctx.get_panel()
        account = panel.accounts.create(
            AccountCreate(username=username, password=password, name=name, role=role)
        )
        formatter.print_success(f"Account '{account.username}' created", {"role": account.role})
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


@app.command("list")
def account_list(ctx: typer.Context) -> None:
    """List accounts."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        panel = cli_ctx.get_panel()
        accounts = [account.model_dump(by_alias=True) for account in panel.accounts.list_accounts()]
        formatter.print_table(
            f"Accounts ({len(accounts)} total)", accounts, ["username", "name", "role"]
        )
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


@app.command("delete")
def account_delete(
    ctx: typer.Context,
    username: Annotated[str, typer.Argument(help="Username")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
) -> None:
    """Delete an account."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    if not force and not cli_ctx.json_output:
        typer.confirm(f"Delete account '{username}'?", abort=True)

    try:
        panel = cli_ctx.get_panel()
        panel.accounts.delete(username)
        formatter.print_success(f"Account '{username}' deleted")
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()
