"""TOML configuration loader."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

DEFAULT_DB_PATH = "~/.config/barcode/state.db"
DEFAULT_PDF_FILENAME = "barcode_results.pdf"
DEFAULT_PDF_TITLE = "Resultados de Barcode"


@dataclass
class StorageConfig:
    db_path: str = DEFAULT_DB_PATH


@dataclass
class ImporterConfig:
    encoding: str = "utf-8"


@dataclass
class ExportConfig:
    output_dir: str = "."
    filename: str = DEFAULT_PDF_FILENAME
    title: str = DEFAULT_PDF_TITLE
    font_path: str = ""

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir).expanduser() / self.filename


@dataclass
class BarcodeConfig:
    storage: StorageConfig = field(default_factory=StorageConfig)
    importer: ImporterConfig = field(default_factory=ImporterConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


def load_config(path: str | Path | None = None) -> BarcodeConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    The database path can be overridden via BARCODE_DB_PATH.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    sto = raw.get("storage", {})
    imp = raw.get("importer", {})
    exp = raw.get("export", {})

    # Resolve database path: environment variable → config file → default
    db_path = os.environ.get("BARCODE_DB_PATH", "") or sto.get(
        "db_path", DEFAULT_DB_PATH
    )

    return BarcodeConfig(
        storage=StorageConfig(db_path=db_path),
        importer=ImporterConfig(
            encoding=imp.get("encoding", "utf-8"),
        ),
        export=ExportConfig(
            output_dir=exp.get("output_dir", "."),
            filename=exp.get("filename", DEFAULT_PDF_FILENAME),
            title=exp.get("title", DEFAULT_PDF_TITLE),
            font_path=exp.get("font_path", ""),
        ),
    )
