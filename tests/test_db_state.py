"""Tests for SQLite schema and state storage."""

import sqlite3

import pytest

from barcode.db import SQLiteStorage, ensure_schema
from barcode.db.schema import _SCHEMA_VERSION
from barcode.models import Product
from barcode.store import StateStore


@pytest.fixture
def storage(tmp_path):
    s = SQLiteStorage(db_path=tmp_path / "state.db")
    yield s
    s.close()


def test_ensure_schema_creates_tables(tmp_path):
    conn = ensure_schema(tmp_path / "nested" / "dir" / "state.db")
    tables = {
        r["name"]
        for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
    }
    assert {"app_state", "schema_version"} <= tables
    version = conn.execute("SELECT version FROM schema_version").fetchone()
    assert version["version"] == _SCHEMA_VERSION
    conn.close()


def test_ensure_schema_is_idempotent(tmp_path):
    path = tmp_path / "state.db"
    ensure_schema(path).close()
    conn = ensure_schema(path)
    rows = conn.execute("SELECT COUNT(*) AS n FROM schema_version").fetchone()
    assert rows["n"] == 1
    conn.close()


def test_load_empty_returns_none(storage):
    assert storage.load() is None


def test_save_overwrites_single_row(storage, tmp_path):
    store = StateStore(storage)
    store.load_products([Product(id="1", cod_art="Ñ1", descripcion="Jamón")])
    store.set_physical_count("1", 4)
    store.set_search("ñ")

    conn = sqlite3.connect(tmp_path / "state.db")
    count = conn.execute("SELECT COUNT(*) FROM app_state").fetchone()[0]
    conn.close()
    assert count == 1


def test_state_survives_reopen(tmp_path):
    path = tmp_path / "state.db"
    first = SQLiteStorage(path)
    store = StateStore(first)
    store.load_products([Product(id="1", cod_art="Ñ1", descripcion="Jamón", stock_uds=2)])
    store.set_physical_count("1", 5)
    store.toggle_section("Congelado")
    first.close()

    second = SQLiteStorage(path)
    reopened = StateStore(second)
    p = reopened.state.products[0]
    assert p.descripcion == "Jamón"
    assert p.stock_real == 5
    assert p.diff_units == 3
    assert len(reopened.state.um_sections["Congelado"]) == 1
    second.close()


def test_corrupt_value_raises(storage, tmp_path):
    storage.load()  # creates the schema
    conn = sqlite3.connect(tmp_path / "state.db")
    conn.execute("INSERT INTO app_state (key, value) VALUES ('appState', '{roto')")
    conn.commit()
    conn.close()

    with pytest.raises(ValueError):
        storage.load()


def test_ensure_schema_upgrades_old_version(tmp_path):
    """A database at an older schema version gets the tables and new version."""
    path = tmp_path / "state.db"
    conn = sqlite3.connect(path)
    conn.execute("CREATE TABLE schema_version (version INTEGER NOT NULL)")
    conn.execute("INSERT INTO schema_version (version) VALUES (0)")
    conn.commit()
    conn.close()

    conn = ensure_schema(path)
    row = conn.execute("SELECT version FROM schema_version").fetchone()
    assert row["version"] == _SCHEMA_VERSION
    assert conn.execute("SELECT COUNT(*) AS n FROM app_state").fetchone()["n"] == 0
    conn.close()
