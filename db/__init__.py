"""Database layer for the menu catalog."""

from .base import Base
from .models_sqlalchemy import MenuRecord, MenuSectionRecord, MenuItemRecord
from .session import (
    create_catalog_engine,
    create_session_factory,
    seed_catalog,
    init_catalog_db,
)

__all__ = [
    # Base
    "Base",
    # Models
    "MenuRecord",
    "MenuSectionRecord",
    "MenuItemRecord",
    # Session
    "create_catalog_engine",
    "create_session_factory",
    "seed_catalog",
    "init_catalog_db",
]
