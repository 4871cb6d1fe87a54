"""CLI commands for item discounts."""

from __future__ import annotations

from datetime import datetime

import click

from catalog.application.apply_discount import ApplyDiscountHandler
from catalog.application.clear_discount import ClearDiscountHandler
from catalog.application.dto import DiscountSpec
from catalog.infrastructure.cli.common import (
    TimestampType,
    display_item,
    domain_errors,
    repository,
)


@click.command("apply")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--type", "discount_type", required=True, help="PERCENT or AMOUNT.")
@click.option("--value", required=True, type=int, help="Percentage or amount off.")
@click.option("--label", default=None, help="Label shown with the discount.")
@click.option("--starts-at", default=None, type=TimestampType(), help="Window start (ISO-8601).")
@click.option("--ends-at", default=None, type=TimestampType(), help="Window end (ISO-8601).")
def discount_apply(
    item_id: str,
    discount_type: str,
    value: int,
    label: str | None,
    starts_at: datetime | None,
    ends_at: datetime | None,
) -> None:
    """Apply (or replace) the discount of an item."""
    spec = DiscountSpec(
        type=discount_type,
        value=value,
        label=label,
        starts_at=starts_at,
        ends_at=ends_at,
    )
    handler = ApplyDiscountHandler(item_repo=repository())

    with domain_errors():
        dto = handler.handle(item_id, spec)

    if dto.has_active_discount:
        click.echo(f"Discount applied to item {dto.id} — now {dto.current_price}.")
    else:
        click.echo(f"Discount scheduled for item {dto.id} (not active yet or already over).")
    display_item(dto)


@click.command("clear")
@click.option("--id", "item_id", required=True, help="Item ID.")
def discount_clear(item_id: str) -> None:
    """Remove the discount of an item."""
    handler = ClearDiscountHandler(item_repo=repository())

    with domain_errors():
        dto = handler.handle(item_id)

    click.echo(f"Discount cleared for item {dto.id} — price back to {dto.current_price}.")
