"""Stock count reconciliation and UM section lists."""

from .app import BarcodeApp
from .config import (
    BarcodeConfig,
    ExportConfig,
    ImporterConfig,
    StorageConfig,
    load_config,
)
from .importer import parse_csv, read_csv_file
from .models import SECTION_NAMES, AppState, Product, UMItem
from .reconcile import (
    ReconciliationSummary,
    decrement_count,
    filter_products,
    increment_count,
    set_physical_count,
    summarize,
)
from .store import MemoryStorage, StateStorage, StateStore

__all__ = [
    "BarcodeApp",
    "AppState",
    "Product",
    "UMItem",
    "SECTION_NAMES",
    "parse_csv",
    "read_csv_file",
    "set_physical_count",
    "increment_count",
    "decrement_count",
    "filter_products",
    "summarize",
    "ReconciliationSummary",
    "StateStore",
    "StateStorage",
    "MemoryStorage",
    "BarcodeConfig",
    "StorageConfig",
    "ImporterConfig",
    "ExportConfig",
    "load_config",
]
