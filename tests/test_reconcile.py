"""Tests for physical count updates and search filtering."""

import random

import pytest

from barcode.models import Product
from barcode.reconcile import (
    UnknownProductError,
    decrement_count,
    filter_products,
    find_product,
    increment_count,
    parse_count,
    set_physical_count,
    summarize,
)


@pytest.fixture
def products():
    return [
        Product(id="1", cod_art="AB12XYZ", descripcion="Galletas", stock_uds=10, pvp_precio=2.5),
        Product(id="2", cod_art="CD34", descripcion="Contiene ab12", stock_uds=4, pvp_precio=1.2),
        Product(id="3", cod_art="EF56", descripcion="Agua", stock_uds=0, pvp_precio=0.4),
    ]


def test_set_count_recomputes_differences(products):
    updated = set_physical_count(products, "1", 12)
    p = updated[0]
    assert p.stock_real == 12
    assert p.diff_units == 2
    assert p.diff_euros == pytest.approx(5.0)
    assert f"{p.diff_euros:.2f}" == "5.00"


def test_set_count_leaves_other_products_untouched(products):
    updated = set_physical_count(products, "2", 1)
    assert updated[0] is products[0]
    assert updated[2] is products[2]
    assert [p.id for p in updated] == ["1", "2", "3"]
    # Input list is not modified
    assert products[1].stock_real == 0


def test_negative_count_is_clamped(products):
    p = set_physical_count(products, "1", -5)[0]
    assert p.stock_real == 0
    assert p.diff_units == -10
    assert p.diff_euros == pytest.approx(-25.0)


def test_count_equal_to_stock_has_no_difference(products):
    for product in products:
        p = find_product(set_physical_count(products, product.id, product.stock_uds), product.id)
        assert p.diff_units == 0
        assert p.diff_euros == 0


def test_unknown_id_changes_nothing(products):
    assert set_physical_count(products, "99", 3) == products


def test_missing_price_gives_zero_money_difference():
    products = [Product(id="1", cod_art="A1", stock_uds=3)]
    p = set_physical_count(products, "1", 50)[0]
    assert p.diff_units == 47
    assert p.diff_euros == 0


def test_increment_and_decrement(products):
    products = increment_count(products, "3")
    products = increment_count(products, "3")
    assert find_product(products, "3").stock_real == 2
    products = decrement_count(products, "3")
    assert find_product(products, "3").stock_real == 1


def test_decrement_stops_at_zero(products):
    products = decrement_count(products, "1")
    p = find_product(products, "1")
    assert p.stock_real == 0
    assert p.diff_units == -10


def test_increment_unknown_product(products):
    with pytest.raises(UnknownProductError):
        increment_count(products, "99")


def test_random_operations_keep_invariants(products):
    rng = random.Random(7)
    touched = set()
    for _ in range(300):
        pid = rng.choice(["1", "2", "3"])
        touched.add(pid)
        op = rng.choice(["inc", "dec", "set"])
        if op == "inc":
            products = increment_count(products, pid)
        elif op == "dec":
            products = decrement_count(products, pid)
        else:
            products = set_physical_count(products, pid, rng.randint(-5, 20))
        for p in products:
            assert p.stock_real >= 0
            if p.id in touched:
                assert p.diff_units == p.stock_real - p.stock_uds
                assert p.diff_euros == pytest.approx(p.diff_units * p.pvp_precio)


@pytest.mark.parametrize("raw, expected", [("12", 12), ("", 0), ("abc", 0), ("-2", -2), ("3.7", 3)])
def test_parse_count(raw, expected):
    assert parse_count(raw) == expected


class TestFilter:
    def test_matches_code_case_insensitively(self, products):
        result = filter_products(products, "ab12")
        assert [p.id for p in result] == ["1"]

    def test_does_not_match_description(self, products):
        assert filter_products(products, "galletas") == []

    def test_empty_term_returns_all(self, products):
        assert filter_products(products, "") == products

    def test_filter_does_not_mutate(self, products):
        before = list(products)
        filter_products(products, "cd")
        assert products == before


def test_summarize(products):
    products = set_physical_count(products, "1", 12)
    products = set_physical_count(products, "2", 4)
    s = summarize(products)
    assert s.products == 3
    assert s.counted == 2
    assert s.with_difference == 1
    assert s.diff_units == 2
    assert s.diff_euros == pytest.approx(5.0)


def test_summarize_empty():
    s = summarize([])
    assert s.products == 0
    assert s.diff_euros == 0


@pytest.mark.parametrize("raw", ["１２", "٣"])
def test_parse_count_ignores_non_ascii_digits(raw):
    assert parse_count(raw) == 0
