"""Helpers shared by the CLI command modules."""

from __future__ import annotations

import json
from pathlib import Path

import click

from bloodbank.application.dto import OperationResult
from bloodbank.domain.model.document import RecordRef
from bloodbank.domain.model.order import PatientOrder
from bloodbank.infrastructure.serialization import order_from_raw


def ref_options(func):
    """Add mutually exclusive ``--id`` / ``--index`` record selectors."""
    func = click.option("--index", type=int, default=None, help="Position in the current list.")(func)
    func = click.option("--id", "record_id", default=None, help="Stable record ID.")(func)
    return func


def resolve_ref(record_id: str | None, index: int | None) -> RecordRef:
    if (record_id is None) == (index is None):
        raise click.UsageError("Specify exactly one of --id or --index.")
    return record_id if record_id is not None else index


def read_order(path: Path) -> PatientOrder:
    """Parse an order request file (PID, OrderID, ..., ListOrder)."""
    try:
        return order_from_raw(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError, TypeError) as exc:
        raise click.ClickException(f"Cannot read order file '{path}': {exc}")


def ensure_ok(result: OperationResult) -> OperationResult:
    if not result.success:
        raise click.ClickException(result.error_message)
    return result
