"""
giftcard CLI: the `giftcard` command.

Commands:
  giftcard balance <program-id>                 Wallet balance
  giftcard rewards <program-id> [filters]       Reward catalog
  giftcard order create <program-id> ...        Place an order
  giftcard order status <program-id> <order-id> Order status
  giftcard tools                                List agent tools and schemas
  giftcard serve                                Run the MCP server on stdio
"""

import asyncio
import json
import logging

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install giftcard-tools[cli]")

from giftcard_tools import __version__
from giftcard_tools.client import AsyncGiftCard
from giftcard_tools.config import Settings
from giftcard_tools.errors import GiftCardError
from giftcard_tools.formatters import format_balance

console = Console()
err_console = Console(stderr=True)


def _get_client() -> AsyncGiftCard:
    return AsyncGiftCard(Settings())


def _run(coro):
    return asyncio.run(coro)


def _fail(error: GiftCardError) -> None:
    err_console.print(f"[red]Error: {error}[/red]")
    raise SystemExit(1)


@click.group()
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Log requests and responses")
def main(verbose: bool):
    """Rewards marketplace: balances, catalog and orders."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


@main.command("balance")
@click.argument("program_id")
def balance_cmd(program_id: str):
    """Show the wallet balance of a program."""

    async def _balance():
        async with _get_client() as client:
            with console.status("Fetching balance..."):
                return await client.balance.get(program_id)

    result = _run(_balance())
    if not result.is_ok:
        _fail(result.error)
    console.print(f"[green]{format_balance(program_id, result.value)}[/green]")


@main.command("tools")
@click.option("--json-output", "--json", is_flag=True)
def tools_cmd(json_output: bool):
    """List the agent tools and their input schemas."""
    from giftcard_tools.tools import registry

    if json_output:
        click.echo(json.dumps(
            [{"name": t.name, "description": t.description, "inputSchema": t.input_schema}
             for t in registry.list_tools()],
            indent=2,
        ))
        return
    for tool in registry.list_tools():
        params = ", ".join(tool.input_schema.get("properties", {}))
        console.print(f"[bold]{tool.name}[/bold]: {tool.description}")
        console.print(f"  [dim]{params}[/dim]")


@main.command("serve")
def serve_cmd():
    """Run the MCP server on stdio."""
    from giftcard_tools.server import serve

    _run(serve())


# Register subcommands from separate modules
from giftcard_tools.cli.rewards import rewards_cmd
from giftcard_tools.cli.orders import order

main.add_command(rewards_cmd)
main.add_command(order)


if __name__ == "__main__":
    main()
