"""Database engine and session management for the menu catalog."""

import logging
from typing import Any, Dict

from sqlalchemy import Engine, create_engine, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .base import Base
from .models_sqlalchemy import MenuItemRecord, MenuRecord, MenuSectionRecord


logger = logging.getLogger(__name__)


def create_catalog_engine(url: str, echo: bool = False) -> Engine:
    """
    Create the SQLAlchemy engine for the catalog database.

    SQLite connections are shared across FastAPI's worker threads; an
    in-memory SQLite database is pinned to a single connection so that every
    session sees the same tables.
    """
    if url.startswith("sqlite"):
        kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)

    return create_engine(url, echo=echo, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory handed to the catalog reader."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def seed_catalog(session: Session, catalog_data: Dict[str, Any]) -> int:
    """
    Insert menus, sections and items from a catalog payload.

    Args:
        session: Open session; the caller commits
        catalog_data: Parsed catalog JSON (``{"menus": [...]}``)

    Returns:
        Number of menu items inserted
    """
    item_count = 0
    for menu_data in catalog_data.get("menus", []):
        menu = MenuRecord(
            id=menu_data["id"],
            name=menu_data["name"],
            schedule=menu_data.get("schedule"),
            pricing=menu_data.get("pricing"),
        )
        session.add(menu)

        section_keys = set()
        for section in menu_data.get("sections", []):
            section_keys.add(section["key"])
            session.add(MenuSectionRecord(
                menu_id=menu.id,
                section_key=section["key"],
                name=section.get("name", section["key"]),
            ))

        # Items may reference a section the payload did not declare
        for item in menu_data.get("items", []):
            if item["section_key"] not in section_keys:
                section_keys.add(item["section_key"])
                session.add(MenuSectionRecord(
                    menu_id=menu.id,
                    section_key=item["section_key"],
                    name=item["section_key"].title(),
                ))

        # Sections must exist before the items referencing them
        session.flush()

        for item in menu_data.get("items", []):
            session.add(MenuItemRecord(
                id=str(item["id"]),
                menu_id=menu.id,
                section_key=item["section_key"],
                name=item["name"],
                description=item.get("description"),
                price=item["price"],
            ))
            item_count += 1

    session.flush()
    return item_count


def init_catalog_db(engine: Engine, session_factory: sessionmaker, catalog_data: Dict[str, Any]) -> None:
    """Create catalog tables and seed them if no menu exists yet."""
    Base.metadata.create_all(bind=engine)

    with session_factory() as session:
        existing = session.execute(select(MenuRecord.id).limit(1)).first()
        if existing is not None:
            logger.info("Catalog database already seeded")
            return
        count = seed_catalog(session, catalog_data)
        session.commit()
        logger.info(f"Catalog database seeded with {count} menu items")
