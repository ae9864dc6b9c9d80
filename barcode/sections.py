"""Editing of the per-section UM addition/removal lists.

Every function takes the current section mapping and returns a new one.
Sections that are not touched keep their original list objects.
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from dataclasses import replace

from .models import UMItem

Sections = dict[str, list[UMItem]]

EDITABLE_FIELDS = ("code", "description")


class UnknownSectionError(ValueError):
    """Raised for a section name outside the fixed set."""


def new_item_id(existing: Iterable[str] = ()) -> str:
    """Return a millisecond timestamp id not present in ``existing``.

    Two items created within the same millisecond would share an id, so
    the value is bumped until it is unique.
    """
    taken = set(existing)
    candidate = int(time.time() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


def _all_ids(sections: Sections) -> list[str]:
    return [item.id for items in sections.values() for item in items]


def _check(sections: Sections, name: str) -> None:
    if name not in sections:
        raise UnknownSectionError(
            f"Sección desconocida: {name!r}  "
            f"(disponibles: {', '.join(sections)})"
        )


def is_expanded(sections: Sections, name: str) -> bool:
    _check(sections, name)
    return bool(sections[name])


def toggle_section(sections: Sections, name: str) -> Sections:
    """Collapse an expanded section or expand a collapsed one.

    Collapsing empties the list, so its items are lost. Expanding seeds
    one blank item.
    """
    _check(sections, name)
    if sections[name]:
        items: list[UMItem] = []
    else:
        items = [UMItem(id=new_item_id(_all_ids(sections)))]
    return {**sections, name: items}


def add_item(sections: Sections, name: str) -> Sections:
    _check(sections, name)
    item = UMItem(id=new_item_id(_all_ids(sections)))
    return {**sections, name: [*sections[name], item]}


def update_item(
    sections: Sections, name: str, item_id: str, field: str, value: str
) -> Sections:
    """Replace ``code`` or ``description`` of one item."""
    _check(sections, name)
    if field not in EDITABLE_FIELDS:
        raise ValueError(
            f"Campo no editable: {field!r}  (code / description)"
        )
    items = [
        replace(item, **{field: value}) if item.id == item_id else item
        for item in sections[name]
    ]
    return {**sections, name: items}


def remove_item(sections: Sections, name: str, item_id: str) -> Sections:
    _check(sections, name)
    items = [item for item in sections[name] if item.id != item_id]
    return {**sections, name: items}
