import json
import logging

import click

from bloodbank.infrastructure.bootstrap import blood_bank_service
from bloodbank.infrastructure.cli.common import ensure_ok
from bloodbank.infrastructure.cli.inventory_commands import (
    inventory_add,
    inventory_delete,
    inventory_show,
    inventory_update,
)
from bloodbank.infrastructure.cli.order_commands import (
    order_add,
    order_delete,
    order_list,
    order_submit,
    order_update,
)
from bloodbank.infrastructure.serialization import document_to_raw


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging.")
def cli(verbose: bool) -> None:
    """Blood bank inventory and patient orders"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def inventory() -> None:
    """Manage blood product inventory."""


@cli.group()
def order() -> None:
    """Manage patient orders."""


@cli.group()
def data() -> None:
    """Inspect the stored document."""


@data.command("dump")
def data_dump() -> None:
    """Print inventory and orders as JSON."""
    document = ensure_ok(blood_bank_service().get_all_data()).data
    click.echo(json.dumps(document_to_raw(document), indent=2, ensure_ascii=False))


# Register subcommands
inventory.add_command(inventory_add)
inventory.add_command(inventory_delete)
inventory.add_command(inventory_show)
inventory.add_command(inventory_update)
order.add_command(order_add)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_submit)
order.add_command(order_update)
