from pathlib import Path

import click

from catalog.infrastructure.cli.common import EXIT_INTERNAL, CatalogCliError
from catalog.infrastructure.cli.discount_commands import discount_apply, discount_clear
from catalog.infrastructure.cli.item_commands import (
    item_create,
    item_delete,
    item_list,
    item_rate,
    item_show,
    item_stock,
    item_update,
)
from catalog.infrastructure.cli.picture_commands import (
    picture_add,
    picture_main,
    picture_remove,
)
from catalog.infrastructure.logger import get_logger, setup_logging

logger = get_logger(__name__)


class CatalogGroup(click.Group):
    """Root group: anything unexpected is logged, never shown raw."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except (click.ClickException, click.Abort, click.exceptions.Exit):
            raise
        except Exception:
            logger.exception("Unexpected error in '%s'", ctx.invoked_subcommand)
            raise CatalogCliError("INTERNAL_ERROR: an unexpected error occurred", EXIT_INTERNAL) from None


@click.group(cls=CatalogGroup)
@click.option(
    "--data-dir",
    envvar="CATALOG_DATA_DIR",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding items.json (env: CATALOG_DATA_DIR).",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None) -> None:
    """Catalog — seller item listings"""
    setup_logging()
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir


@cli.group()
def item() -> None:
    """Manage items."""


@cli.group()
def discount() -> None:
    """Manage item discounts."""


@cli.group()
def picture() -> None:
    """Manage item pictures."""


# Register subcommands
item.add_command(item_create)
item.add_command(item_delete)
item.add_command(item_list)
item.add_command(item_rate)
item.add_command(item_show)
item.add_command(item_stock)
item.add_command(item_update)
discount.add_command(discount_apply)
discount.add_command(discount_clear)
picture.add_command(picture_add)
picture.add_command(picture_main)
picture.add_command(picture_remove)
