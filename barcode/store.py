"""Application state store with pluggable persistence."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import replace

from . import reconcile, sections
from .models import TABS, AppState, Product

logger = logging.getLogger(__name__)

STATE_KEY = "appState"


class StateStorage(ABC):
    """Abstract base for where the state blob lives."""

    @abstractmethod
    def load(self) -> AppState | None:
        """Return the saved state, or None if there is none."""
        ...

    @abstractmethod
    def save(self, state: AppState) -> None:
        """Overwrite the saved state with ``state``."""
        ...


class MemoryStorage(StateStorage):
    """Keeps the serialized state in memory."""

    def __init__(self, initial: str | None = None) -> None:
        self.data = initial
        self.saves = 0

    def load(self) -> AppState | None:
        if self.data is None:
            return None
        return AppState.from_dict(json.loads(self.data))

    def save(self, state: AppState) -> None:
        self.data = json.dumps(state.to_dict(), ensure_ascii=False)
        self.saves += 1


class StateStore:
    """Holds the current AppState and persists it on every commit.

    The state is read from storage once, on construction. Each operation
    below builds a new state and commits it, which writes the whole
    state back.
    """

    def __init__(self, storage: StateStorage) -> None:
        self._storage = storage
        loaded = storage.load()
        self._state = loaded if loaded is not None else AppState.default()

    @property
    def state(self) -> AppState:
        return self._state

    def commit(self, state: AppState) -> None:
        self._state = state
        self._storage.save(state)

    def _update(self, **changes) -> None:
        self.commit(replace(self._state, **changes))

    # ── Products ──

    def load_products(self, products: list[Product]) -> None:
        """Replace the product list in a single commit."""
        self._update(products=list(products))
        logger.info("Cargados %d productos", len(products))

    def clear_products(self) -> None:
        self._update(products=[])
        logger.info("Recuento borrado")

    def set_physical_count(self, product_id: str, value: int) -> Product:
        reconcile.find_product(self._state.products, product_id)
        products = reconcile.set_physical_count(self._state.products, product_id, value)
        self._update(products=products)
        return reconcile.find_product(products, product_id)

    def increment(self, product_id: str) -> Product:
        products = reconcile.increment_count(self._state.products, product_id)
        self._update(products=products)
        return reconcile.find_product(products, product_id)

    def decrement(self, product_id: str) -> Product:
        products = reconcile.decrement_count(self._state.products, product_id)
        self._update(products=products)
        return reconcile.find_product(products, product_id)

    def set_search(self, term: str) -> None:
        self._update(search_term=term)

    def visible_products(self) -> list[Product]:
        """Products matching the current search term, for display only."""
        return reconcile.filter_products(self._state.products, self._state.search_term)

    def set_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"Pestaña desconocida: {tab!r}  ({' / '.join(TABS)})")
        self._update(active_tab=tab)

    # ── UM sections ──

    def toggle_section(self, name: str) -> None:
        self._update(um_sections=sections.toggle_section(self._state.um_sections, name))

    def add_item(self, name: str) -> str:
        """Append a blank item and return its id."""
        updated = sections.add_item(self._state.um_sections, name)
        self._update(um_sections=updated)
        return updated[name][-1].id

    def update_item(self, name: str, item_id: str, field: str, value: str) -> None:
        self._update(
            um_sections=sections.update_item(
                self._state.um_sections, name, item_id, field, value
            )
        )

    def remove_item(self, name: str, item_id: str) -> None:
        self._update(
            um_sections=sections.remove_item(self._state.um_sections, name, item_id)
        )
