"""Physical count updates and discrepancy calculation."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .importer import to_int
from .models import Product


class UnknownProductError(ValueError):
    """Raised when a product id is not in the current count."""


@dataclass
class ReconciliationSummary:
    products: int = 0
    counted: int = 0
    with_difference: int = 0
    diff_units: int = 0
    diff_euros: float = 0.0


def recount(product: Product, value: int) -> Product:
    """Return a copy of ``product`` with a new physical count.

    The count is clamped at 0 and both differences are recomputed from
    the clamped value.
    """
    stock_real = max(0, value)
    diff_units = stock_real - product.stock_uds
    return replace(
        product,
        stock_real=stock_real,
        diff_units=diff_units,
        diff_euros=diff_units * product.pvp_precio,
    )


def set_physical_count(
    products: list[Product], product_id: str, value: int
) -> list[Product]:
    """Set the physical count of one product.

    Returns a new list in the same order; products other than the
    matching one are carried over as-is.
    """
    return [recount(p, value) if p.id == product_id else p for p in products]


def find_product(products: list[Product], product_id: str) -> Product:
    for p in products:
        if p.id == product_id:
            return p
    raise UnknownProductError(f"No existe el producto con id {product_id!r}")


def increment_count(products: list[Product], product_id: str) -> list[Product]:
    current = find_product(products, product_id)
    return set_physical_count(products, product_id, current.stock_real + 1)


def decrement_count(products: list[Product], product_id: str) -> list[Product]:
    current = find_product(products, product_id)
    return set_physical_count(products, product_id, max(0, current.stock_real - 1))


def parse_count(text: str) -> int:
    """Parse a typed-in count; anything that isn't a number gives 0."""
    return to_int(text)


def filter_products(products: list[Product], term: str) -> list[Product]:
    """Case-insensitive substring match of ``term`` on the article code."""
    needle = term.lower()
    return [p for p in products if needle in p.cod_art.lower()]


def summarize(products: list[Product]) -> ReconciliationSummary:
    summary = ReconciliationSummary(products=len(products))
    for p in products:
        if p.stock_real > 0:
            summary.counted += 1
        if p.diff_units != 0:
            summary.with_difference += 1
        summary.diff_units += p.diff_units
        summary.diff_euros += p.diff_euros
    return summary
