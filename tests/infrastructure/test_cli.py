"""CLI smoke tests over a JSON store in a temp directory."""

import logging
import re

import pytest
from click.testing import CliRunner

from storefront.infrastructure.cli import context
from storefront.infrastructure.cli.main import SEED_PRODUCTS, cli
from storefront.infrastructure.http.auth import decode_token
from storefront.infrastructure.settings import get_settings

IMAGE = "https://images.example.com/product.jpg"


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("STORE_BACKEND", "json")
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    get_settings.cache_clear()
    context.container.cache_clear()
    # the cli group reconfigures the root logger
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield CliRunner()
    root.handlers[:] = handlers
    root.setLevel(level)
    get_settings.cache_clear()
    context.container.cache_clear()


def _product_id(runner, name: str) -> str:
    result = runner.invoke(cli, ["product", "list"])
    line = next(line for line in result.output.splitlines() if name in line)
    return line.split()[0]


def test_seed_then_list(runner):
    result = runner.invoke(cli, ["seed"])
    assert result.exit_code == 0, result.output
    assert f"Seeded {len(SEED_PRODUCTS)} products." in result.output

    listing = runner.invoke(cli, ["product", "list"]).output
    assert "Heritage Print Collection" in listing
    assert "161.49" in listing


def test_seed_refuses_non_empty_catalog(runner):
    runner.invoke(cli, ["seed"])
    result = runner.invoke(cli, ["seed"])
    assert result.exit_code != 0
    assert "not empty" in result.output


def test_checkout_and_refund(runner):
    runner.invoke(cli, ["product", "add", "--name", "Royal Elegance Dress", "--price", "249.99", "--image", IMAGE, "--stock", "2"])
    pid = _product_id(runner, "Royal Elegance Dress")

    created = runner.invoke(cli, [
        "order", "create", "--customer", "Amara Okafor", "--email", "amara@example.com",
        "--items", f"{pid}:1", "--user-id", "u1",
    ])
    assert created.exit_code == 0, created.output
    assert "249.99" in created.output
    order_id = re.search(r"ID:\s+(\S+)", created.output).group(1)

    refund = runner.invoke(cli, [
        "order", "refund", "--id", order_id, "--email", "amara@example.com",
        "--user-id", "u1", "--reason", "Wrong size",
    ])
    assert refund.exit_code == 0, refund.output

    listing = runner.invoke(cli, ["order", "list", "--email", "amara@example.com"]).output
    assert "Requested" in listing


def test_checkout_out_of_stock_reports_error(runner):
    runner.invoke(cli, ["product", "add", "--name", "Silk Kaftan Gown", "--price", "279.99", "--image", IMAGE, "--stock", "1"])
    pid = _product_id(runner, "Silk Kaftan Gown")

    result = runner.invoke(cli, [
        "order", "create", "--customer", "Amara Okafor", "--email", "amara@example.com",
        "--items", f"{pid}:3",
    ])
    assert result.exit_code != 0
    assert "Out of stock" in result.output


def test_bad_item_format(runner):
    result = runner.invoke(cli, [
        "order", "create", "--customer", "Amara Okafor", "--email", "amara@example.com",
        "--items", "no-quantity",
    ])
    assert result.exit_code != 0
    assert "ProductId:Quantity" in result.output


def test_token_issue(runner):
    result = runner.invoke(cli, ["token", "issue", "--user-id", "a1", "--email", "admin@example.com", "--role", "admin"])
    principal = decode_token(result.output.strip())
    assert principal.is_admin


def test_product_add_requires_image(runner):
    result = runner.invoke(cli, ["product", "add", "--name", "Ankara Maxi Dress", "--price", "299.99"])
    assert result.exit_code != 0
    assert "--image" in result.output


def test_product_list_query(runner):
    runner.invoke(cli, ["seed"])
    listing = runner.invoke(cli, ["product", "list", "--query", "DRESS"]).output
    assert "Ankara Maxi Dress" in listing
    assert "Silk Kaftan Gown" not in listing
