"""CLI commands for patient orders."""

from __future__ import annotations

from pathlib import Path

import click

from bloodbank.infrastructure.bootstrap import blood_bank_service
from bloodbank.infrastructure.cli.common import ensure_ok, read_order, ref_options, resolve_ref

_order_file = click.option(
    "--file", "order_file", required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Order request as JSON (PID, OrderID, ..., ListOrder).",
)


@click.command("submit")
@_order_file
def order_submit(order_file: Path) -> None:
    """Validate an order and deduct its blood products from stock."""
    order = read_order(order_file)
    ensure_ok(blood_bank_service().submit_order(order))
    click.echo(f"Order {order.order_id} accepted for patient {order.patient_name}.")
    for item in order.items:
        click.echo(f"  {item.element_id:<10} {order.blood_type_label:<4} {item.volume:>5}ml x{item.quantity}")


@click.command("list")
def order_list() -> None:
    """List recorded patient orders."""
    orders = ensure_ok(blood_bank_service().list_orders()).data

    if not orders:
        click.echo("No patient orders found.")
        return

    click.echo(f"{'#':>3} {'ID':<32} {'OrderID':<12} {'PID':<10} {'Patient':<24} {'Type':<4} {'Items':>5}")
    click.echo("-" * 96)
    for i, o in enumerate(orders):
        click.echo(
            f"{i:>3} {o.id:<32} {o.order_id or '':<12} {o.pid or '':<10} "
            f"{o.patient_name or '':<24} {o.blood_type_label:<4} {len(o.items):>5}"
        )


@click.command("add")
@_order_file
def order_add(order_file: Path) -> None:
    """Record an order without touching inventory."""
    order = ensure_ok(blood_bank_service().create_order(read_order(order_file))).data
    click.echo(f"Patient order {order.id} created.")


@click.command("update")
@ref_options
@_order_file
def order_update(record_id: str | None, index: int | None, order_file: Path) -> None:
    """Replace a recorded order."""
    ref = resolve_ref(record_id, index)
    order = ensure_ok(blood_bank_service().update_order(ref, read_order(order_file))).data
    click.echo(f"Patient order {order.id} updated.")


@click.command("delete")
@ref_options
def order_delete(record_id: str | None, index: int | None) -> None:
    """Delete a recorded order."""
    ref = resolve_ref(record_id, index)
    order = ensure_ok(blood_bank_service().delete_order(ref)).data
    click.echo(f"Patient order {order.id} deleted.")
