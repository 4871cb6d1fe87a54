"""Helpers shared by the CLI command modules."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

import click

from catalog.application.dto import ItemDTO
from catalog.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InvariantViolationError,
    PersistenceError,
    ValidationError,
)
from catalog.domain.repository.item_repository import ItemRepository
from catalog.infrastructure.bootstrap import item_repository
from catalog.infrastructure.logger import get_logger

logger = get_logger(__name__)

EXIT_INTERNAL = 1
EXIT_VALIDATION = 3
EXIT_CONFLICT = 4
EXIT_NOT_FOUND = 5
EXIT_PERSISTENCE = 6


class CatalogCliError(click.ClickException):
    """ClickException carrying an exit code per error kind."""

    def __init__(self, message: str, exit_code: int) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def _exit_code_for(exc: DomainException) -> int:
    if isinstance(exc, ValidationError):
        return EXIT_VALIDATION
    if isinstance(exc, InvariantViolationError):
        return EXIT_CONFLICT
    if isinstance(exc, EntityNotFoundError):
        return EXIT_NOT_FOUND
    return EXIT_INTERNAL


@contextmanager
def domain_errors() -> Iterator[None]:
    """Turn domain and storage failures into CLI errors."""
    try:
        yield
    except DomainException as exc:
        raise CatalogCliError(f"{exc.code}: {exc}", _exit_code_for(exc)) from exc
    except PersistenceError as exc:
        logger.error("Storage failure: %s", exc, exc_info=exc.__cause__)
        raise CatalogCliError(
            f"{exc.code}: the catalog could not be written to disk", EXIT_PERSISTENCE
        ) from exc


def repository() -> ItemRepository:
    """Repository for the data directory chosen on the root command."""
    ctx = click.get_current_context()
    data_dir = (ctx.find_root().obj or {}).get("data_dir")
    with domain_errors():
        return item_repository(data_dir)


class TimestampType(click.ParamType):
    """ISO-8601 timestamp; naive values are taken as UTC."""

    name = "timestamp"

    def convert(self, value, param, ctx):
        if isinstance(value, datetime):
            return value
        text = value.strip()
        if text[-1:] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            self.fail(f"{value!r} is not an ISO-8601 timestamp", param, ctx)
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment


def parse_attributes(pairs: tuple[str, ...]) -> dict[str, str]:
    """Parse ('color=red', 'size=') into {'color': 'red', 'size': ''}."""
    result: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid attribute '{pair}'. Expected 'key=value'."
            )
        key, value = pair.split("=", 1)
        result[key.strip()] = value.strip()
    return result


def display_item(dto: ItemDTO) -> None:
    """Shared formatting for displaying an item."""
    click.echo(f"Item {dto.id}")
    click.echo(f"  Title:       {dto.title}")
    click.echo(f"  Seller:      {dto.seller_id}")
    click.echo(f"  Condition:   {dto.condition}")
    click.echo(f"  Description: {dto.description}")
    if dto.has_active_discount and dto.discount is not None:
        unit = "%" if dto.discount.type == "PERCENT" else f" {dto.base_price.currency}"
        label = f" ({dto.discount.label})" if dto.discount.label else ""
        click.echo(f"  Price:       {dto.current_price}  (was {dto.base_price}, "
                   f"-{dto.discount.value}{unit}{label})")
    else:
        click.echo(f"  Price:       {dto.current_price}")
    click.echo(f"  Stock:       {dto.stock}")
    click.echo(f"  Shipping:    {'free' if dto.free_shipping else 'paid'}")
    click.echo(f"  Rating:      {dto.rating.average:.1f} ({dto.rating.count} votes)")
    if dto.categories:
        click.echo(f"  Categories:  {', '.join(dto.categories)}")
    for key, value in dto.attributes.items():
        click.echo(f"  {key}: {value}")
    for picture in dto.pictures:
        marker = "*" if picture.main else "-"
        click.echo(f"  {marker} {picture.url}")
