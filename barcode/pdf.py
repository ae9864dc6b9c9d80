"""PDF export of count results using ReportLab."""

from __future__ import annotations

import logging
from pathlib import Path
from xml.sax.saxutils import escape

from .config import DEFAULT_PDF_TITLE
from .models import Product
from .reconcile import summarize

logger = logging.getLogger(__name__)

TABLE_COLUMNS = [
    "Cód. Art.",
    "Descripción",
    "Stock (Uds)",
    "Stock Real",
    "Diferencia (Uds)",
    "Diferencia (€)",
]

_DEFAULT_FONT = "Helvetica"


def _register_font(font_path: str | Path) -> str:
    """Register a TrueType font with ReportLab and return the font name."""
    from reportlab.pdfbase import pdfmetrics
    from reportlab.pdfbase.ttfonts import TTFont

    font_path = Path(font_path).expanduser()
    if not font_path.exists():
        raise FileNotFoundError(f"No se encuentra la fuente: {font_path}")
    font_name = "BarcodeFont"
    pdfmetrics.registerFont(TTFont(font_name, str(font_path)))
    return font_name


def export_rows(products: list[Product]) -> list[list[str]]:
    """Build the table body, one row per product in stored order."""
    return [
        [
            p.cod_art,
            p.descripcion,
            str(p.stock_uds),
            str(p.stock_real),
            str(p.diff_units),
            f"{p.diff_euros:.2f}",
        ]
        for p in products
    ]


def generate_pdf(
    products: list[Product],
    output_path: str | Path,
    *,
    title: str = DEFAULT_PDF_TITLE,
    font_path: str | Path | None = None,
) -> Path:
    """Generate a PDF file with the count results.

    The full product list is exported; no search filter applies here.

    Args:
        products: Products to list, in the order they are stored.
        output_path: Where to save the PDF file.
        title: Heading printed above the table.
        font_path: Optional TrueType font; Helvetica is used otherwise.

    Returns:
        Path to the generated PDF file.

    Raises:
        ImportError: If reportlab is not installed.
        FileNotFoundError: If ``font_path`` is given but doesn't exist.
    """
    try:
        from reportlab.lib import colors
        from reportlab.lib.pagesizes import A4
        from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
        from reportlab.lib.units import mm
        from reportlab.platypus import (
            Paragraph,
            SimpleDocTemplate,
            Spacer,
            Table,
            TableStyle,
        )
    except ImportError:
        raise ImportError("reportlab es necesario: pip install reportlab")

    font_name = _register_font(font_path) if font_path else _DEFAULT_FONT
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=A4,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=title,
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "Title_ES",
        parent=styles["Title"],
        fontName=font_name,
        fontSize=18,
        leading=24,
    )
    cell_style = ParagraphStyle(
        "Cell_ES",
        parent=styles["Normal"],
        fontName=font_name,
        fontSize=8,
        leading=10,
    )
    body_style = ParagraphStyle(
        "Body_ES",
        parent=styles["Normal"],
        fontName=font_name,
        fontSize=9,
        leading=13,
    )

    elements: list = []
    elements.append(Paragraph(escape(title), title_style))
    elements.append(Spacer(1, 4 * mm))

    table_data: list[list] = [TABLE_COLUMNS]
    for row in export_rows(products):
        # Wrap long descriptions inside their cell
        row[1] = Paragraph(escape(row[1]), cell_style)
        table_data.append(row)

    table_style = TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2563EB")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, -1), font_name),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("ALIGN", (0, 0), (1, -1), "LEFT"),
        ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#F5F5F5")]),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ("LEFTPADDING", (0, 0), (-1, -1), 4),
        ("RIGHTPADDING", (0, 0), (-1, -1), 4),
    ])
    col_widths = [28 * mm, 62 * mm, 20 * mm, 20 * mm, 25 * mm, 25 * mm]
    t = Table(table_data, colWidths=col_widths, repeatRows=1)
    t.setStyle(table_style)
    elements.append(t)

    summary = summarize(products)
    elements.append(Spacer(1, 4 * mm))
    elements.append(
        Paragraph(
            f"Productos: {summary.products} | contados: {summary.counted} | "
            f"con diferencia: {summary.with_difference}<br/>"
            f"Diferencia total: {summary.diff_units} uds / "
            f"{summary.diff_euros:.2f} €",
            body_style,
        )
    )

    doc.build(elements)
    logger.info("PDF generado: %s (%d productos)", output_path, len(products))
    return output_path
