"""CSV stock export parsing."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from .models import Product

logger = logging.getLogger(__name__)

HEADER_COD_ART = "Cód. Art."
HEADER_DESCRIPCION = "Descripción"
HEADER_PUB = "Pub."
HEADER_ESTAK = "Estak #8"
HEADER_STOCK_UDS = "Stock (Uds)"
HEADER_UXC_TAMANO = "UxC Tamaño"
HEADER_STOCK_CAJAS = "Stock (Cajas)"
HEADER_PVP_PRECIO = "PVP Precio"
HEADER_STOCK_VALOR = "Stock Valor (€)"

EXPECTED_HEADERS = (
    HEADER_COD_ART,
    HEADER_DESCRIPCION,
    HEADER_PUB,
    HEADER_ESTAK,
    HEADER_STOCK_UDS,
    HEADER_UXC_TAMANO,
    HEADER_STOCK_CAJAS,
    HEADER_PVP_PRECIO,
    HEADER_STOCK_VALOR,
)

_INT_PREFIX = re.compile(r"[+-]?\d+", re.ASCII)
_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def to_int(value: str) -> int:
    """Parse the leading integer of a string, 0 if there is none."""
    m = _INT_PREFIX.match(value.strip())
    return int(m.group()) if m else 0


def to_float(value: str) -> float:
    """Parse the leading decimal number of a string, 0.0 if there is none."""
    m = _FLOAT_PREFIX.match(value.strip())
    return float(m.group()) if m else 0.0


def parse_csv(text: str) -> list[Product]:
    """Convert comma-separated stock text into products.

    The first line holds the headers; columns are located by header
    name, so their order does not matter. Absent columns give ``""`` or
    ``0``. Quoted fields are not supported: a comma inside a value
    shifts the remaining columns.

    Every line after the header produces a product, including a
    trailing blank one. Product ids are the 1-based line positions.
    """
    lines = text.split("\n")
    headers = [h.strip() for h in lines[0].split(",")]

    missing = [h for h in EXPECTED_HEADERS if h not in headers]
    if missing:
        logger.warning("Columnas no encontradas en el CSV: %s", ", ".join(missing))

    index = {name: headers.index(name) for name in EXPECTED_HEADERS if name in headers}

    products: list[Product] = []
    for position, line in enumerate(lines[1:], 1):
        values = [v.strip() for v in line.split(",")]

        def field(name: str) -> str:
            i = index.get(name)
            if i is None or i >= len(values):
                return ""
            return values[i]

        products.append(
            Product(
                id=str(position),
                cod_art=field(HEADER_COD_ART),
                descripcion=field(HEADER_DESCRIPCION),
                pub=field(HEADER_PUB),
                estak=field(HEADER_ESTAK),
                stock_uds=to_int(field(HEADER_STOCK_UDS)),
                uxc_tamano=field(HEADER_UXC_TAMANO),
                stock_cajas=to_int(field(HEADER_STOCK_CAJAS)),
                pvp_precio=to_float(field(HEADER_PVP_PRECIO)),
                stock_valor=to_float(field(HEADER_STOCK_VALOR)),
            )
        )

    logger.debug("CSV parseado: %d productos", len(products))
    return products


def read_csv_file(path: str | Path, encoding: str = "utf-8") -> list[Product]:
    """Read a CSV file from disk and parse it.

    Raises:
        FileNotFoundError: If the file doesn't exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No se encuentra el archivo: {path}")

    text = path.read_text(encoding=encoding)
    if text.startswith("\ufeff"):
        text = text[1:]
    return parse_csv(text)
