"""CLI commands for inventory management."""

from __future__ import annotations

import click

from bloodbank.application.dto import InventoryFilter, InventoryRecordSpec
from bloodbank.infrastructure.bootstrap import blood_bank_service
from bloodbank.infrastructure.cli.common import ensure_ok, ref_options, resolve_ref


def _record_options(func):
    for name, kwargs in reversed([
        ("--abo", dict(required=True, type=click.Choice(["A", "B", "AB", "O"]), help="ABO group.")),
        ("--rh", dict(required=True, type=click.Choice(["+", "-"]), help="Rh factor.")),
        ("--element", dict(required=True, help="Product type code, e.g. RBC.")),
        ("--name", dict(default="", help="Product display name.")),
        ("--volume", dict(required=True, type=int, help="Bag volume in ml.")),
        ("--quantity", dict(required=True, type=int, help="Units on hand.")),
    ]):
        func = click.option(name, **kwargs)(func)
    return func


@click.command("show")
@click.option("--abo", default=None, help="Filter by ABO group.")
@click.option("--rh", default=None, help="Filter by Rh factor.")
@click.option("--element", default=None, help="Filter by product type code.")
@click.option("--volume", default=0, type=int, help="Filter by bag volume (ml).")
def inventory_show(abo: str | None, rh: str | None, element: str | None, volume: int) -> None:
    """Show inventory, optionally filtered."""
    criteria = InventoryFilter(abo=abo, rh=rh, element_id=element, volume=volume)
    records = ensure_ok(blood_bank_service().get_inventory(criteria)).data

    if not records:
        click.echo("No inventory records found.")
        return

    click.echo(f"{'#':>3} {'ID':<32} {'Type':<4} {'Element':<10} {'Name':<24} {'Volume':>7} {'Qty':>6}")
    click.echo("-" * 92)
    for i, r in enumerate(records):
        click.echo(
            f"{i:>3} {r.id:<32} {r.abo + r.rh:<4} {r.element_id:<10} "
            f"{r.element_name:<24} {r.volume:>7} {r.quantity:>6}"
        )


@click.command("add")
@_record_options
def inventory_add(abo: str, rh: str, element: str, name: str, volume: int, quantity: int) -> None:
    """Add a new inventory record."""
    spec = InventoryRecordSpec(abo, rh, element, name, volume, quantity)
    record = ensure_ok(blood_bank_service().create_inventory_record(spec)).data
    click.echo(f"Inventory record {record.id} created: {record.label} x{record.quantity}")


@click.command("update")
@ref_options
@_record_options
def inventory_update(
    record_id: str | None, index: int | None,
    abo: str, rh: str, element: str, name: str, volume: int, quantity: int,
) -> None:
    """Replace an inventory record."""
    ref = resolve_ref(record_id, index)
    spec = InventoryRecordSpec(abo, rh, element, name, volume, quantity)
    record = ensure_ok(blood_bank_service().update_inventory_record(ref, spec)).data
    click.echo(f"Inventory record {record.id} updated: {record.label} x{record.quantity}")


@click.command("delete")
@ref_options
def inventory_delete(record_id: str | None, index: int | None) -> None:
    """Delete an inventory record."""
    ref = resolve_ref(record_id, index)
    record = ensure_ok(blood_bank_service().delete_inventory_record(ref)).data
    click.echo(f"Inventory record {record.id} deleted.")
