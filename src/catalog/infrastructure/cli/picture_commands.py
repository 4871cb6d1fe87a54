"""CLI commands for item pictures."""

from __future__ import annotations

import click

from catalog.application.dto import PictureSpec
from catalog.application.manage_pictures import ManagePicturesHandler
from catalog.infrastructure.cli.common import display_item, domain_errors, repository


@click.command("add")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--url", required=True, help="Picture URL.")
@click.option("--main", is_flag=True, default=False, help="Make it the main picture.")
@click.option("--alt", default=None, help="Alternative text.")
def picture_add(item_id: str, url: str, main: bool, alt: str | None) -> None:
    """Add a picture to an item."""
    handler = ManagePicturesHandler(item_repo=repository())

    with domain_errors():
        dto = handler.add(item_id, PictureSpec(url=url, main=main, alt=alt))

    display_item(dto)


@click.command("remove")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--url", required=True, help="Picture URL.")
def picture_remove(item_id: str, url: str) -> None:
    """Remove a picture from an item."""
    handler = ManagePicturesHandler(item_repo=repository())

    with domain_errors():
        dto = handler.remove(item_id, url)

    display_item(dto)


@click.command("main")
@click.option("--id", "item_id", required=True, help="Item ID.")
@click.option("--url", required=True, help="URL of the picture to promote.")
def picture_main(item_id: str, url: str) -> None:
    """Make an existing picture the main one."""
    handler = ManagePicturesHandler(item_repo=repository())

    with domain_errors():
        dto = handler.set_main(item_id, url)

    display_item(dto)
