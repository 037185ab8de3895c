from __future__ import annotations

from decimal import Decimal

import pytest

from order_import.models.raw_row import RawRow
from order_import.services.catalog_index import CatalogIndex
from order_import.services.decoder import (
    ARITY_ERROR,
    decode_row,
    explode,
    parse_price,
    parse_quantity,
)
from tests.conftest import WAREHOUSE, make_entry


@pytest.fixture()
def catalog() -> CatalogIndex:
    return CatalogIndex(
        [
            make_entry("PROD001", 5, id="product-1"),
            make_entry("PROD002", 0, id="product-2"),
            make_entry("PROD003", 10, id="product-3", expeditions=0),
        ]
    )


def _row(**overrides: str) -> RawRow:
    base = dict(
        order_id="ORD001",
        product_ids="PROD001",
        date="2024-01-15",
        product_names="Product 1",
        product_links="",
        customer_name="John Doe",
        phone_number="+1234567890",
        address="123 Main St",
        prices="29.99",
        quantities="2",
        store_name="My Store",
    )
    base.update(overrides)
    return RawRow(**base)


def test_valid_single_product(catalog):
    order = decode_row(_row(), 2, catalog, WAREHOUSE)
    assert order.errors == ()
    assert order.warnings == ()
    assert order.row_index == 2
    assert order.is_valid
    assert len(order.products) == 1
    p = order.products[0]
    assert (p.id, p.name, p.quantity, p.price) == ("PROD001", "Product 1", 2, Decimal("29.99"))
    assert order.customer.name == "John Doe"
    assert order.date == "2024-01-15"


def test_product_matched_by_internal_id(catalog):
    order = decode_row(_row(product_ids="product-1"), 2, catalog, WAREHOUSE)
    assert order.errors == ()


def test_required_fields_reported_in_column_order(catalog):
    order = decode_row(_row(order_id="", customer_name=" ", store_name=""), 2, catalog, WAREHOUSE)
    assert order.errors == (
        "Order ID is required",
        "Customer Name is required",
        "Store Name is required",
    )


def test_product_link_is_optional(catalog):
    order = decode_row(_row(product_links=""), 2, catalog, WAREHOUSE)
    assert order.is_valid


def test_missing_quantity_skips_product_decoding(catalog):
    order = decode_row(_row(quantities=""), 2, catalog, WAREHOUSE)
    assert order.errors == ("Quantity is required",)
    assert order.products == ()


def test_arity_mismatch(catalog):
    order = decode_row(
        _row(product_ids="PROD001|PROD002", product_names="A|B", prices="10|20", quantities="1"),
        3,
        catalog,
        WAREHOUSE,
    )
    assert order.errors == (ARITY_ERROR,)
    assert order.products == ()


def test_empty_product_id_at_position(catalog):
    order = decode_row(
        _row(product_ids="PROD001| ", product_names="A|B", prices="10|20", quantities="1|1"),
        2,
        catalog,
        WAREHOUSE,
    )
    assert order.errors == ("Product ID cannot be empty at position 2",)
    assert len(order.products) == 1


@pytest.mark.parametrize("price", ["abc", "0", "-5", "NaN", "Infinity", "12abc"])
def test_invalid_price(catalog, price):
    order = decode_row(_row(prices=price), 2, catalog, WAREHOUSE)
    assert order.errors == (f'Invalid price "{price}" for product PROD001',)
    assert order.products == ()


@pytest.mark.parametrize("qty", ["0", "-1", "1.5", "two"])
def test_invalid_quantity(catalog, qty):
    order = decode_row(_row(quantities=qty), 2, catalog, WAREHOUSE)
    assert order.errors == (f'Invalid quantity "{qty}" for product PROD001',)


def test_unknown_product(catalog):
    order = decode_row(_row(product_ids="NOPE"), 2, catalog, WAREHOUSE)
    assert order.errors == ('Product "NOPE" does not exist in selected warehouse',)
    # 試行した商品もプレビュー用に残る
    assert [p.id for p in order.products] == ["NOPE"]


def test_lookup_is_case_sensitive(catalog):
    order = decode_row(_row(product_ids="prod001"), 2, catalog, WAREHOUSE)
    assert order.errors == ('Product "prod001" does not exist in selected warehouse',)


def test_no_approved_expeditions_is_error(catalog):
    order = decode_row(_row(product_ids="PROD003"), 2, catalog, WAREHOUSE)
    assert order.errors == ('Product "PROD003" has no approved expeditions in selected warehouse',)


def test_insufficient_stock_is_warning_only(catalog):
    order = decode_row(_row(quantities="6"), 2, catalog, WAREHOUSE)
    assert order.errors == ()
    assert order.warnings == ('Product "PROD001" has insufficient stock (available: 5, requested: 6)',)
    assert order.is_valid


def test_stock_equal_to_quantity_has_no_warning(catalog):
    order = decode_row(_row(quantities="5"), 2, catalog, WAREHOUSE)
    assert order.warnings == ()


def test_multi_product_keeps_position_order(catalog):
    order = decode_row(
        _row(
            product_ids="PROD001 | PROD002",
            product_names="Product 1|Product 2",
            prices="29.99|45.00",
            quantities="2|1",
        ),
        2,
        catalog,
        WAREHOUSE,
    )
    assert [p.id for p in order.products] == ["PROD001", "PROD002"]
    assert order.errors == ()
    assert order.warnings == ('Product "PROD002" has insufficient stock (available: 0, requested: 1)',)


def test_explode_trims_items():
    assert explode(" a | b|c ") == ["a", "b", "c"]
    assert explode("") == [""]


def test_parse_helpers():
    assert parse_price("10.50") == Decimal("10.50")
    assert parse_price("") is None
    assert parse_quantity(" 3 ") == 3
    assert parse_quantity("3.0") is None
