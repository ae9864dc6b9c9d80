"""Tests for PDF export."""

from unittest.mock import patch

import pytest

from barcode.models import Product
from barcode.pdf import TABLE_COLUMNS, export_rows
from barcode.reconcile import set_physical_count


def _products():
    products = [
        Product(id="1", cod_art="A1", descripcion="Widget", stock_uds=10, pvp_precio=2.5),
        Product(id="2", cod_art="B2", descripcion="Jamón & <queso>", stock_uds=3, pvp_precio=1.1),
        Product(id="3", cod_art="C3", descripcion="Sin contar", stock_uds=1),
    ]
    products = set_physical_count(products, "1", 12)
    return set_physical_count(products, "2", 2)


def _require_reportlab():
    try:
        from reportlab.lib.pagesizes import A4  # noqa: F401
    except ImportError:
        pytest.skip("reportlab not installed")


def test_table_columns():
    assert TABLE_COLUMNS == [
        "Cód. Art.",
        "Descripción",
        "Stock (Uds)",
        "Stock Real",
        "Diferencia (Uds)",
        "Diferencia (€)",
    ]


def test_export_rows_format():
    rows = export_rows(_products())
    assert rows[0] == ["A1", "Widget", "10", "12", "2", "5.00"]
    assert rows[1] == ["B2", "Jamón & <queso>", "3", "2", "-1", "-1.10"]
    assert rows[2] == ["C3", "Sin contar", "1", "0", "0", "0.00"]


def test_export_rows_keep_stored_order():
    products = list(reversed(_products()))
    assert [r[0] for r in export_rows(products)] == ["C3", "B2", "A1"]


class TestGeneratePdf:
    def test_creates_file(self, tmp_path):
        _require_reportlab()
        from barcode.pdf import generate_pdf

        output = tmp_path / "barcode_results.pdf"
        result = generate_pdf(_products(), output)
        assert result == output
        assert output.stat().st_size > 0
        with open(output, "rb") as f:
            assert f.read(4) == b"%PDF"

    def test_creates_parent_dirs(self, tmp_path):
        _require_reportlab()
        from barcode.pdf import generate_pdf

        output = tmp_path / "a" / "b" / "out.pdf"
        generate_pdf(_products(), output, title="Recuento")
        assert output.exists()

    def test_empty_product_list(self, tmp_path):
        _require_reportlab()
        from barcode.pdf import generate_pdf

        output = tmp_path / "empty.pdf"
        generate_pdf([], output)
        assert output.exists()

    def test_missing_font_file(self, tmp_path):
        _require_reportlab()
        from barcode.pdf import generate_pdf

        with pytest.raises(FileNotFoundError, match="fuente"):
            generate_pdf(_products(), tmp_path / "x.pdf", font_path=tmp_path / "no.ttf")

    def test_missing_reportlab(self, tmp_path):
        from barcode.pdf import generate_pdf

        with patch.dict("sys.modules", {"reportlab.platypus": None}):
            with pytest.raises(ImportError, match="reportlab"):
                generate_pdf(_products(), tmp_path / "x.pdf")
