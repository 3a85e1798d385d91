"""End-to-end tests for the click command line, backed by JSON files."""

import json

import pytest
from click.testing import CliRunner

from stockdash.infrastructure.bootstrap import set_data_dir
from stockdash.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(cli, ["--data-dir", str(tmp_path), *args])

    yield _run
    set_data_dir(None)


def _add(run, name: str, price: str, stock: int, threshold: int = 5) -> str:
    result = run("product", "add", "--name", name, "--price", price,
                 "--stock", str(stock), "--threshold", str(threshold))
    assert result.exit_code == 0, result.output
    listed = json.loads(run("product", "list", "--json").output)
    return next(p["id"] for p in listed if p["name"] == name)


class TestProductCommands:

    def test_add_and_list(self, run):
        _add(run, "Widget", "15.00", 20)
        result = run("product", "list")
        assert result.exit_code == 0
        assert "Widget" in result.output
        assert "$15.00" in result.output

    def test_list_json_uses_numbers(self, run):
        _add(run, "Widget", "15.5", 20)
        [product] = json.loads(run("product", "list", "--json").output)
        assert product["price"] == 15.5
        assert product["stock"] == 20
        assert product["status"] == "IN_STOCK"

    def test_empty_catalog(self, run):
        assert "No products found." in run("product", "list").output

    def test_invalid_price(self, run):
        result = run("product", "add", "--name", "Widget", "--price", "abc", "--stock", "1")
        assert result.exit_code == 1
        assert "Invalid money amount" in result.output

    def test_update_and_show(self, run):
        pid = _add(run, "Widget", "15.00", 20)
        assert run("product", "update", "--id", pid, "--price", "12.25").exit_code == 0
        shown = json.loads(run("product", "show", "--id", pid, "--json").output)
        assert shown["price"] == 12.25

    def test_delete(self, run):
        pid = _add(run, "Widget", "15.00", 20)
        assert run("product", "delete", "--id", pid).exit_code == 0
        result = run("product", "show", "--id", pid)
        assert result.exit_code == 1
        assert "not found" in result.output


class TestOrderCommands:

    def test_create_order_decrements_stock(self, run):
        widget = _add(run, "Widget", "15.00", 20)
        gadget = _add(run, "Gadget", "2.50", 4)

        result = run("order", "create", "--items", f"{widget}:3,{gadget}:4")

        assert result.exit_code == 0, result.output
        assert "$55.00" in result.output
        stock = {p["name"]: p["stock"] for p in json.loads(run("product", "list", "--json").output)}
        assert stock == {"Widget": 17, "Gadget": 0}

    def test_insufficient_stock_reported(self, run):
        widget = _add(run, "Widget", "15.00", 2)
        result = run("order", "create", "--items", f"{widget}:3")
        assert result.exit_code == 1
        assert "Insufficient stock for Widget" in result.output
        assert json.loads(run("order", "list", "--json").output) == []

    def test_bad_items_format(self, run):
        result = run("order", "create", "--items", "no-quantity")
        assert result.exit_code == 2
        assert "Expected 'ProductID:Quantity'" in result.output

    def test_list_and_show(self, run):
        widget = _add(run, "Widget", "15.00", 20)
        run("order", "create", "--items", f"{widget}:1")

        [order] = json.loads(run("order", "list", "--json").output)
        assert order["total_price"] == 15.0
        assert order["items"][0]["product_name"] == "Widget"

        shown = run("order", "show", "--id", order["id"])
        assert shown.exit_code == 0
        assert "Widget" in shown.output


class TestStockAndDashboard:

    def test_stock_set_and_low(self, run):
        widget = _add(run, "Widget", "15.00", 20, threshold=5)
        _add(run, "Gadget", "1.00", 0)

        assert run("stock", "set", "--id", widget, "--quantity", "2").exit_code == 0
        report = json.loads(run("stock", "low", "--json").output)

        assert [p["name"] for p in report["products"]] == ["Gadget", "Widget"]
        assert (report["critical_count"], report["high_count"]) == (1, 1)
        assert report["total_count"] == 2

    def test_negative_stock_rejected(self, run):
        widget = _add(run, "Widget", "15.00", 20)
        result = run("stock", "set", "--id", widget, "--quantity", "-1")
        assert result.exit_code == 1
        assert "cannot be negative" in result.output

    def test_dashboard(self, run):
        widget = _add(run, "Widget", "15.00", 20, threshold=5)
        _add(run, "Gadget", "1.00", 0)
        run("order", "create", "--items", f"{widget}:1")

        stats = json.loads(run("dashboard", "--json").output)
        assert stats["total_products"] == 2
        assert stats["total_orders"] == 1
        assert stats["low_stock_count"] == 1
        assert stats["low_stock_products"][0]["name"] == "Gadget"

        text = run("dashboard").output
        assert "Low stock:  1" in text
