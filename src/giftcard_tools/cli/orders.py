"""CLI: giftcard order create|status"""

import json
from typing import Optional

import click
from rich.console import Console

from giftcard_tools.formatters import format_order_receipt
from giftcard_tools.models.order import CreateOrderRequest, CustomerDetails, OrderReward

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


def parse_reward_arg(value: str) -> OrderReward:
    """ID:QTY[:DENOMINATION[:INTERVAL]] -> OrderReward."""
    parts = value.split(":")
    if len(parts) < 2 or len(parts) > 4:
        raise click.BadParameter(f"expected ID:QTY[:DENOMINATION[:INTERVAL]], got {value!r}")
    try:
        quantity = int(parts[1])
        denomination = int(parts[2]) if len(parts) > 2 and parts[2] else None
    except ValueError:
        raise click.BadParameter(f"quantity and denomination must be integers in {value!r}")
    interval = parts[3] if len(parts) > 3 and parts[3] else None
    return OrderReward(id=parts[0], quantity=quantity, denomination=denomination, interval=interval)


@click.group()
def order():
    """Place orders and check their status."""


@order.command("create")
@click.argument("program_id")
@click.option("--reference-no", required=True, help="Unique reference number for the order")
@click.option("--reward", "reward_args", multiple=True, required=True,
              help="ID:QTY[:DENOMINATION[:INTERVAL]], denomination in paise. Repeatable.")
@click.option("--customer-name", default=None)
@click.option("--customer-email", default=None)
@click.option("--customer-contact", default=None, type=int)
@click.option("--json-output", "--json", is_flag=True)
def order_create(program_id: str, reference_no: str, reward_args: tuple[str, ...],
                 customer_name: Optional[str], customer_email: Optional[str],
                 customer_contact: Optional[int], json_output: bool):
    """Place an order for one or more rewards."""
    customer = None
    if customer_name or customer_email or customer_contact:
        customer = CustomerDetails(name=customer_name, email=customer_email, contact=customer_contact)
    request = CreateOrderRequest(
        reference_no=reference_no,
        rewards=[parse_reward_arg(s) for s in reward_args],
        customer=customer,
    )

    async def _create():
        async with _get_client() as client:
            with console.status("Placing order..."):
                return await client.orders.create(program_id, request)

    result = _run(_create())
    if not result.is_ok:
        _fail(result.error)
    if json_output:
        click.echo(json.dumps(result.value.model_dump(mode="json"), indent=2, ensure_ascii=False))
        return
    console.print("[green]Order placed successfully![/green]\n")
    console.print(format_order_receipt(result.value), markup=False)


@order.command("status")
@click.argument("program_id")
@click.argument("order_id")
@click.option("--reference-no", default=None)
@click.option("--json-output", "--json", is_flag=True)
def order_status(program_id: str, order_id: str, reference_no: Optional[str], json_output: bool):
    """Show the status of an order."""

    async def _status():
        async with _get_client() as client:
            with console.status("Fetching order..."):
                return await client.orders.get(program_id, order_id, reference_no)

    result = _run(_status())
    if not result.is_ok:
        _fail(result.error)
    if json_output:
        click.echo(json.dumps(result.value.model_dump(mode="json"), indent=2, ensure_ascii=False))
        return
    console.print(format_order_receipt(result.value), markup=False)
