"""CLI commands for the Item aggregate."""

from __future__ import annotations

import click

from catalog.application.adjust_stock import AdjustStockHandler
from catalog.application.create_item import CreateItemHandler
from catalog.application.delete_item import DeleteItemHandler
from catalog.application.dto import ItemPatch, NewItemSpec, PriceSpec
from catalog.application.list_items import DEFAULT_PAGE_SIZE, ListItemsHandler
from catalog.application.rate_item import RateItemHandler
from catalog.application.show_item import ShowItemHandler
from catalog.application.update_item import UpdateItemHandler
from catalog.infrastructure.cli.common import (
    display_item,
    domain_errors,
    parse_attributes,
    repository,
)


@click.command("create")
@click.option("--title", required=True, help="Item title.")
@click.option("--description", required=True, help="Item description.")
@click.option("--price", required=True, help="Base price (e.g. 10000.00).")
@click.option("--currency", required=True, help="ISO 4217 currency code (e.g. ARS).")
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
@click.option("--seller", "seller_id", required=True, help="Seller ID.")
@click.option("--condition", default="NEW", show_default=True, help="NEW, USED or REFURBISHED.")
@click.option("--free-shipping", is_flag=True, default=False, help="Ships for free.")
@click.option("--category", "categories", multiple=True, help="Category (repeatable).")
@click.option("--attribute", "attributes", multiple=True, help="Attribute as 'key=value' (repeatable).")
def item_create(
    title: str,
    description: str,
    price: str,
    currency: str,
    stock: int,
    seller_id: str,
    condition: str,
    free_shipping: bool,
    categories: tuple[str, ...],
    attributes: tuple[str, ...],
) -> None:
    """List a new item."""
    spec = NewItemSpec(
        title=title,
        description=description,
        price=PriceSpec(currency=currency, amount=price),
        stock=stock,
        seller_id=seller_id,
        condition=condition,
        free_shipping=free_shipping,
        categories=list(categories),
        attributes=parse_attributes(attributes),
    )
    handler = CreateItemHandler(item_repo=repository())

    with domain_errors():
        dto = handler.handle(spec)

    click.echo(f"Item {dto.id} created.")
    display_item(dto)


@click.command("show")
@click.option("--id", "item_id", required=True, help="Item ID to display.")
def item_show(item_id: str) -> None:
    """Show details of an item."""
    handler = ShowItemHandler(item_repo=repository())

    with domain_errors():
        dto = handler.handle(item_id)

    display_item(dto)


@click.command("list")
@click.option("--page", default=0, show_default=True, type=click.IntRange(min=0), help="Page number.")
@click.option("--size", default=DEFAULT_PAGE_SIZE, show_default=True,
              type=click.IntRange(1, 200), help="Items per page.")
def item_list(page: int, size: int) -> None:
    """List items ordered by title."""
    handler = ListItemsHandler(item_repo=repository())
    items = handler.handle(page=page, size=size)

    if not items:
        click.echo("No items found.")
        return

    click.echo(f"{'ID':<36} {'Title':<30} {'Price':>16} {'Stock':>6}")
    click.echo("-" * 91)
    for dto in items:
        click.echo(
            f"{dto.id:<36} {dto.title[:30]:<30} {str(dto.current_price):>16} {dto.stock:>6}"
        )


@click.command("update")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--title", default=None, help="New title.")
@click.option("--description", default=None, help="New description.")
@click.option("--price", default=None, help="New base price.")
@click.option("--currency", default=None, help="Currency of the new price.")
@click.option("--stock", default=None, type=int, help="New stock level.")
@click.option("--free-shipping/--no-free-shipping", default=None, help="Free shipping flag.")
@click.option("--category", "categories", multiple=True, help="Replace categories (repeatable).")
@click.option("--clear-categories", is_flag=True, default=False, help="Remove every category.")
@click.option("--attribute", "attributes", multiple=True,
              help="Set 'key=value'; 'key=' removes it (repeatable).")
def item_update(
    item_id: str,
    title: str | None,
    description: str | None,
    price: str | None,
    currency: str | None,
    stock: int | None,
    free_shipping: bool | None,
    categories: tuple[str, ...],
    clear_categories: bool,
    attributes: tuple[str, ...],
) -> None:
    """Update only the given fields of an item."""
    if (price is None) != (currency is None):
        raise click.UsageError("--price and --currency must be given together")
    if clear_categories and categories:
        raise click.UsageError("--clear-categories cannot be combined with --category")

    new_categories: list[str] | None = None
    if clear_categories:
        new_categories = []
    elif categories:
        new_categories = list(categories)

    patch = ItemPatch(
        title=title,
        description=description,
        price=PriceSpec(currency=currency, amount=price) if price is not None else None,
        stock=stock,
        free_shipping=free_shipping,
        categories=new_categories,
        attributes=parse_attributes(attributes) if attributes else None,
    )
    handler = UpdateItemHandler(item_repo=repository())

    with domain_errors():
        dto = handler.handle(item_id, patch)

    click.echo(f"Item {dto.id} updated.")
    display_item(dto)


@click.command("delete")
@click.option("--id", "item_id", required=True, help="Item ID to delete.")
def item_delete(item_id: str) -> None:
    """Delete an item."""
    handler = DeleteItemHandler(item_repo=repository())

    with domain_errors():
        handler.handle(item_id)

    click.echo(f"Item {item_id} deleted.")


@click.command("rate")
@click.option("--id", "item_id", required=True, help="Item ID to rate.")
@click.option("--stars", required=True, type=int, help="Vote from 1 to 5.")
def item_rate(item_id: str, stars: int) -> None:
    """Add a star vote to an item."""
    handler = RateItemHandler(item_repo=repository())

    with domain_errors():
        dto = handler.handle(item_id, stars)

    click.echo(
        f"Item {dto.id} rated — average {dto.rating.average:.1f} "
        f"over {dto.rating.count} votes."
    )


@click.command("stock")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--delta", required=True, type=int, help="Units to add (negative to remove).")
def item_stock(item_id: str, delta: int) -> None:
    """Add or remove units of stock."""
    handler = AdjustStockHandler(item_repo=repository())

    with domain_errors():
        dto = handler.handle(item_id, delta)

    click.echo(f"Item {dto.id} stock is now {dto.stock}.")
