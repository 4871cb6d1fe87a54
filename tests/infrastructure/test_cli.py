"""End-to-end tests for the command-line interface."""

import pytest
from click.testing import CliRunner

from catalog.infrastructure.cli.common import (
    EXIT_CONFLICT,
    EXIT_NOT_FOUND,
    EXIT_VALIDATION,
)
from catalog.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(cli, ["--data-dir", str(tmp_path), *args])

    return _run


def _create(run, title: str = "Mate Imperial", *extra: str) -> str:
    result = run(
        "item", "create",
        "--title", title,
        "--description", "Calabaza",
        "--price", "10000",
        "--currency", "ARS",
        "--stock", "3",
        "--seller", "seller-1",
        *extra,
    )
    assert result.exit_code == 0, result.output
    return result.output.splitlines()[0].split()[1]


class TestItemCommands:

    def test_create_and_show(self, run, tmp_path):
        item_id = _create(run, "Mate Imperial", "--category", "mates", "--attribute", "color=negro")
        result = run("item", "show", "--id", item_id)
        assert result.exit_code == 0
        assert "Mate Imperial" in result.output
        assert "ARS 10000.00" in result.output
        assert "mates" in result.output
        assert "color: negro" in result.output
        assert (tmp_path / "items.json").exists()

    def test_duplicate_create_is_conflict(self, run):
        _create(run)
        result = run(
            "item", "create", "--title", "mate imperial", "--description", "x",
            "--price", "1", "--currency", "ARS", "--seller", "seller-1",
        )
        assert result.exit_code == EXIT_CONFLICT
        assert "CONFLICT" in result.output

    def test_invalid_condition_is_validation_error(self, run):
        result = run(
            "item", "create", "--title", "Mate", "--description", "x",
            "--price", "1", "--currency", "ARS", "--seller", "s", "--condition", "broken",
        )
        assert result.exit_code == EXIT_VALIDATION
        assert "NEW, USED, REFURBISHED" in result.output

    def test_show_unknown_is_not_found(self, run):
        result = run("item", "show", "--id", "nope")
        assert result.exit_code == EXIT_NOT_FOUND
        assert "NOT_FOUND" in result.output

    def test_list(self, run):
        _create(run, "Termo")
        _create(run, "Bombilla")
        result = run("item", "list")
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert "Bombilla" in lines[2]
        assert "Termo" in lines[3]

    def test_list_empty(self, run):
        assert "No items found." in run("item", "list").output

    def test_update_delete(self, run):
        item_id = _create(run)
        result = run("item", "update", "--id", item_id, "--stock", "9", "--free-shipping")
        assert result.exit_code == 0, result.output
        assert "Stock:       9" in result.output
        assert "free" in result.output

        assert run("item", "delete", "--id", item_id).exit_code == 0
        assert run("item", "delete", "--id", item_id).exit_code == EXIT_NOT_FOUND

    def test_update_price_requires_currency(self, run):
        item_id = _create(run)
        result = run("item", "update", "--id", item_id, "--price", "5")
        assert result.exit_code != 0
        assert "--currency" in result.output

    def test_rate_and_stock(self, run):
        item_id = _create(run)
        run("item", "rate", "--id", item_id, "--stars", "5")
        result = run("item", "rate", "--id", item_id, "--stars", "3")
        assert "average 4.0 over 2 votes" in result.output

        assert "stock is now 1" in run("item", "stock", "--id", item_id, "--delta", "-2").output
        result = run("item", "stock", "--id", item_id, "--delta", "-2")
        assert result.exit_code == EXIT_CONFLICT


class TestDiscountCommands:

    def test_apply_and_clear(self, run):
        item_id = _create(run)
        result = run("discount", "apply", "--id", item_id, "--type", "percent", "--value", "25")
        assert result.exit_code == 0, result.output
        assert "now ARS 7500.00" in result.output

        result = run("discount", "clear", "--id", item_id)
        assert "back to ARS 10000.00" in result.output

    def test_future_discount_is_scheduled(self, run):
        item_id = _create(run)
        result = run(
            "discount", "apply", "--id", item_id, "--type", "AMOUNT", "--value", "100",
            "--starts-at", "2999-01-01T00:00:00",
        )
        assert result.exit_code == 0, result.output
        assert "scheduled" in result.output

    def test_bad_type(self, run):
        item_id = _create(run)
        result = run("discount", "apply", "--id", item_id, "--type", "bogus", "--value", "5")
        assert result.exit_code == EXIT_VALIDATION
        assert "PERCENT, AMOUNT" in result.output

    def test_zulu_timestamp_accepted(self, run):
        item_id = _create(run)
        result = run(
            "discount", "apply", "--id", item_id, "--type", "percent", "--value", "5",
            "--starts-at", "2000-01-01T00:00:00Z", "--ends-at", "2999-01-01T00:00:00Z",
        )
        assert result.exit_code == 0, result.output
        assert "now ARS 9500.00" in result.output

    def test_bad_timestamp(self, run):
        item_id = _create(run)
        result = run(
            "discount", "apply", "--id", item_id, "--type", "percent", "--value", "5",
            "--ends-at", "tomorrow",
        )
        assert result.exit_code == 2
        assert "ISO-8601" in result.output


class TestPictureCommands:

    def test_add_main_remove(self, run):
        item_id = _create(run)
        run("picture", "add", "--id", item_id, "--url", "https://img/1.jpg", "--main")
        result = run("picture", "add", "--id", item_id, "--url", "https://img/2.jpg")
        assert "* https://img/1.jpg" in result.output
        assert "- https://img/2.jpg" in result.output

        result = run("picture", "main", "--id", item_id, "--url", "https://img/2.jpg")
        assert "* https://img/2.jpg" in result.output

        result = run("picture", "remove", "--id", item_id, "--url", "https://img/404.jpg")
        assert result.exit_code == EXIT_NOT_FOUND
