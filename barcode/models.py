"""Data models for stock counts and UM section lists."""

from __future__ import annotations

from dataclasses import dataclass, field

TAB_BARCODE = "barcode"
TAB_UM_MANAGEMENT = "umManagement"
TABS = (TAB_BARCODE, TAB_UM_MANAGEMENT)

SECTION_NAMES = (
    "Pasillo 1",
    "Pasillo 2",
    "Pasillo 3",
    "Pasillo 4",
    "Pasillo 5",
    "Nevera",
    "Congelado",
)


def _text(data: dict, key: str) -> str:
    value = data.get(key, "")
    if not isinstance(value, str):
        raise ValueError(f"{key!r} debe ser texto, no {type(value).__name__}")
    return value


@dataclass
class Product:
    """A stock record from the imported CSV plus the physical count."""

    id: str                 # 1-based row position in the imported file
    cod_art: str = ""
    descripcion: str = ""
    pub: str = ""
    estak: str = ""
    stock_uds: int = 0      # Recorded stock in units
    uxc_tamano: str = ""
    stock_cajas: int = 0    # Recorded stock in boxes
    pvp_precio: float = 0.0
    stock_valor: float = 0.0
    stock_real: int = 0     # Physical count entered by the user
    diff_units: int = 0
    diff_euros: float = 0.0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "codArt": self.cod_art,
            "descripcion": self.descripcion,
            "pub": self.pub,
            "estak": self.estak,
            "stockUds": self.stock_uds,
            "uxcTamano": self.uxc_tamano,
            "stockCajas": self.stock_cajas,
            "pvpPrecio": self.pvp_precio,
            "stockValor": self.stock_valor,
            "stockReal": self.stock_real,
            "diffUnits": self.diff_units,
            "diffEuros": self.diff_euros,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Product:
        try:
            return cls(
                id=str(data["id"]),
                cod_art=_text(data, "codArt"),
                descripcion=_text(data, "descripcion"),
                pub=_text(data, "pub"),
                estak=_text(data, "estak"),
                stock_uds=int(data.get("stockUds", 0)),
                uxc_tamano=_text(data, "uxcTamano"),
                stock_cajas=int(data.get("stockCajas", 0)),
                pvp_precio=float(data.get("pvpPrecio", 0)),
                stock_valor=float(data.get("stockValor", 0)),
                stock_real=int(data.get("stockReal", 0)),
                diff_units=int(data.get("diffUnits", 0)),
                diff_euros=float(data.get("diffEuros", 0)),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ValueError(f"Producto inválido en el estado guardado: {e}") from e


@dataclass
class UMItem:
    """A pending addition/removal entry inside a section."""

    id: str
    code: str = ""
    description: str = ""

    def to_dict(self) -> dict:
        return {"id": self.id, "code": self.code, "description": self.description}

    @classmethod
    def from_dict(cls, data: dict) -> UMItem:
        try:
            return cls(
                id=str(data["id"]),
                code=_text(data, "code"),
                description=_text(data, "description"),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ValueError(f"Elemento UM inválido en el estado guardado: {e}") from e


def empty_sections() -> dict[str, list[UMItem]]:
    return {name: [] for name in SECTION_NAMES}


@dataclass
class AppState:
    """The whole application state, persisted as one blob."""

    products: list[Product] = field(default_factory=list)
    um_sections: dict[str, list[UMItem]] = field(default_factory=empty_sections)
    search_term: str = ""
    active_tab: str = TAB_BARCODE

    @classmethod
    def default(cls) -> AppState:
        return cls()

    def to_dict(self) -> dict:
        return {
            "products": [p.to_dict() for p in self.products],
            "searchTerm": self.search_term,
            "activeTab": self.active_tab,
            "umSections": {
                name: [item.to_dict() for item in items]
                for name, items in self.um_sections.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> AppState:
        """Rebuild a state from its serialized form.

        Sections missing from the blob are added empty so the fixed set
        is always present.

        Raises:
            ValueError: If the blob does not have the expected structure.
        """
        if not isinstance(data, dict):
            raise ValueError("El estado guardado no es un objeto")

        products = data.get("products", [])
        raw_sections = data.get("umSections", {})
        if not isinstance(products, list) or not isinstance(raw_sections, dict):
            raise ValueError("El estado guardado tiene un formato inesperado")

        sections = empty_sections()
        for name, items in raw_sections.items():
            if not isinstance(items, list):
                raise ValueError(f"La sección {name!r} no es una lista")
            sections[name] = [UMItem.from_dict(i) for i in items]

        active_tab = data.get("activeTab", TAB_BARCODE)
        if active_tab not in TABS:
            active_tab = TAB_BARCODE

        return cls(
            products=[Product.from_dict(p) for p in products],
            um_sections=sections,
            search_term=_text(data, "searchTerm"),
            active_tab=active_tab,
        )
