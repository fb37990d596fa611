"""CLI: giftcard rewards"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from giftcard_tools.formatters import format_rewards_table, reward_price
from giftcard_tools.models.reward import RewardsRequestParams

console = Console()


def _get_client():
    from giftcard_tools.cli.main import _get_client
    return _get_client()


def _run(coro):
    from giftcard_tools.cli.main import _run
    return _run(coro)


def _fail(error):
    from giftcard_tools.cli.main import _fail
    _fail(error)


@click.command("rewards")
@click.argument("program_id")
@click.option("--page-id", default=None, help="ID of the last reward on the previous page")
@click.option("--count", default=None, type=int, help="Rewards per page")
@click.option("--brand", "brand_name", default=None)
@click.option("--category", default=None)
@click.option("--type", "reward_type", type=click.Choice(["gift_card", "membership", "offer"]), default=None)
@click.option("--featured/--all", default=None, help="Only featured rewards")
@click.option("--min-price", default=None)
@click.option("--max-price", default=None)
@click.option("--denomination", default=None, help="Denomination in paise")
@click.option("--expiry-by", default=None, type=int, help="Days until expiry")
@click.option("--sort-by", type=click.Choice(["gmv", "units_sold"]), default=None)
@click.option("--table", "plain_table", is_flag=True, help="Fixed-width text table")
@click.option("--json-output", "--json", is_flag=True)
def rewards_cmd(program_id: str, page_id: Optional[str], count: Optional[int], brand_name: Optional[str],
                category: Optional[str], reward_type: Optional[str], featured: Optional[bool],
                min_price: Optional[str], max_price: Optional[str], denomination: Optional[str],
                expiry_by: Optional[int], sort_by: Optional[str], plain_table: bool, json_output: bool):
    """List rewards in a program's catalog."""
    params = RewardsRequestParams(
        page_id=page_id, count=count, brand_name=brand_name, category=category, type=reward_type,
        featured=featured, min_price=min_price, max_price=max_price, denomination=denomination,
        expiry_by=expiry_by, sort_by=sort_by,
    )

    async def _list():
        async with _get_client() as client:
            with console.status("Fetching rewards..."):
                return await client.rewards.list(program_id, params)

    result = _run(_list())
    if not result.is_ok:
        _fail(result.error)
    listing = result.value
    if json_output:
        click.echo(json.dumps(listing.model_dump(mode="json"), indent=2, ensure_ascii=False))
        return
    if plain_table:
        click.echo(format_rewards_table(listing.items))
    else:
        table = Table(title=f"Rewards ({listing.count} total)")
        table.add_column("Name", style="bold")
        table.add_column("Type")
        table.add_column("Brand")
        table.add_column("Price")
        table.add_column("ID", style="dim")
        for reward in listing.items:
            name = reward.display_parameters.name
            if reward.featured:
                name = f"⭐ {name}"
            table.add_row(name, reward.type, reward.brand.name, reward_price(reward), reward.id)
        console.print(table)
    if listing.next_page_id:
        console.print(f"[dim]More rewards: --page-id {listing.next_page_id}[/dim]")
