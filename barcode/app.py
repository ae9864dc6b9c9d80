"""Count workflow: upload, start over, finish with export."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from .config import BarcodeConfig
from .importer import read_csv_file
from .pdf import generate_pdf
from .store import StateStore

logger = logging.getLogger(__name__)

CONFIRM_NEW = (
    "¿Estás seguro de que quieres iniciar una nueva barcode? "
    "Esto borrará los datos actuales."
)
CONFIRM_FINISH = (
    "¿Estás seguro de que quieres finalizar la barcode actual? "
    "Esto generará un PDF con los resultados."
)


class BarcodeApp:
    """Ties the state store to file import, PDF export and confirmations.

    ``confirm`` is asked a yes/no question before any destructive action
    and must return True to proceed.
    """

    def __init__(
        self,
        store: StateStore,
        config: BarcodeConfig | None = None,
        confirm: Callable[[str], bool] = lambda message: False,
    ) -> None:
        self.store = store
        self.config = config or BarcodeConfig()
        self._confirm = confirm

    def upload(self, path: str | Path) -> int:
        """Import a CSV file, replacing the current products.

        Returns:
            Number of imported products.
        """
        products = read_csv_file(path, encoding=self.config.importer.encoding)
        self.store.load_products(products)
        return len(products)

    def export(self, output_path: str | Path | None = None) -> Path:
        """Write the full product list to a PDF without clearing it."""
        exp = self.config.export
        return generate_pdf(
            self.store.state.products,
            output_path or exp.output_path,
            title=exp.title,
            font_path=exp.font_path or None,
        )

    def new_count(self) -> bool:
        """Discard the current products after confirmation."""
        if not self._confirm(CONFIRM_NEW):
            return False
        self.store.clear_products()
        return True

    def finish_count(self, output_path: str | Path | None = None) -> Path | None:
        """Export the results and then clear the products.

        If the export fails the products are kept and the error is
        raised to the caller.

        Returns:
            Path of the PDF, or None if the user declined.
        """
        if not self._confirm(CONFIRM_FINISH):
            return None
        pdf_path = self.export(output_path)
        self.store.clear_products()
        logger.info("Barcode finalizada: %s", pdf_path)
        return pdf_path
