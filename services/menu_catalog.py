"""
Menu catalog readers.
Read-only access to the menus offered for group bookings and their items,
backed either by the static catalog file or by the catalog database.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Protocol, Union

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from db.models_sqlalchemy import MenuItemRecord, MenuRecord, MenuSectionRecord
from domain.models import Menu, MenuItem


logger = logging.getLogger(__name__)


def load_catalog_data(catalog_file: Union[str, Path]) -> Dict[str, Any]:
    """
    Load the catalog payload from a JSON file.

    Raises:
        FileNotFoundError: the file does not exist
        ValueError: the file is not valid JSON
    """
    try:
        with open(catalog_file, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Catalog file not found: {catalog_file}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in catalog file: {e}")


class CatalogReader(Protocol):
    """Read-only catalog of menus and items."""

    def list_menus(self) -> List[Menu]:
        ...

    def list_items(self, menu_id: str) -> List[MenuItem]:
        ...


class InMemoryCatalog:
    """Catalog held in memory, built from a catalog payload at construction."""

    def __init__(self, catalog_data: Dict[str, Any]):
        self._menus: List[Menu] = []
        self._items: Dict[str, List[MenuItem]] = {}

        for menu_data in catalog_data.get('menus', []):
            menu = Menu(
                id=menu_data['id'],
                name=menu_data['name'],
                schedule=menu_data.get('schedule'),
                pricing=menu_data.get('pricing'),
            )
            self._menus.append(menu)
            self._items[menu.id] = [
                MenuItem(
                    id=str(item['id']),
                    name=item['name'],
                    description=item.get('description'),
                    price=item['price'],
                    section_key=item['section_key'],
                )
                for item in menu_data.get('items', [])
            ]

    def list_menus(self) -> List[Menu]:
        """Menus in catalog order."""
        return list(self._menus)

    def list_items(self, menu_id: str) -> List[MenuItem]:
        """Items of one menu in catalog order; unknown menus have no items."""
        return list(self._items.get(menu_id, []))


class SqlCatalog:
    """Catalog read from the ``menus``/``menu_sections``/``menu_items`` tables."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def list_menus(self) -> List[Menu]:
        """All menus ordered by name."""
        with self.session_factory() as session:
            records = session.scalars(select(MenuRecord).order_by(MenuRecord.name)).all()
            return [Menu.model_validate(record) for record in records]

    def list_items(self, menu_id: str) -> List[MenuItem]:
        """
        Items of one menu with their section name.

        Ordered by section key, then item name. Unknown menus have no items.
        """
        query = (
            select(MenuItemRecord, MenuSectionRecord.name)
            .join(
                MenuSectionRecord,
                (MenuItemRecord.menu_id == MenuSectionRecord.menu_id)
                & (MenuItemRecord.section_key == MenuSectionRecord.section_key),
            )
            .where(MenuItemRecord.menu_id == menu_id)
            .order_by(MenuSectionRecord.section_key, MenuItemRecord.name)
        )

        with self.session_factory() as session:
            rows = session.execute(query).all()
            return [
                MenuItem(
                    id=item.id,
                    name=item.name,
                    description=item.description,
                    price=_plain_number(item.price),
                    section_key=item.section_key,
                    section_name=section_name,
                )
                for item, section_name in rows
            ]


def _plain_number(value: float) -> Union[int, float]:
    # REAL columns hand back 25.0 for 25
    return int(value) if float(value).is_integer() else value
