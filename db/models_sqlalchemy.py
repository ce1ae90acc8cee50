"""SQLAlchemy models for the menu catalog tables."""

from typing import List, Optional

from sqlalchemy import Float, ForeignKey, ForeignKeyConstraint, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class MenuRecord(Base):
    """Menu table model."""

    __tablename__ = "menus"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
    )

    schedule: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    pricing: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    sections: Mapped[List["MenuSectionRecord"]] = relationship(
        back_populates="menu",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<MenuRecord(id={self.id!r}, name={self.name!r})>"


class MenuSectionRecord(Base):
    """Section of a menu (mains, desserts, ...)."""

    __tablename__ = "menu_sections"

    menu_id: Mapped[str] = mapped_column(
        String(50),
        ForeignKey("menus.id", ondelete="CASCADE"),
        primary_key=True,
    )

    section_key: Mapped[str] = mapped_column(String(50), primary_key=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    menu: Mapped[MenuRecord] = relationship(back_populates="sections")

    def __repr__(self) -> str:
        return f"<MenuSectionRecord(menu_id={self.menu_id!r}, section_key={self.section_key!r})>"


class MenuItemRecord(Base):
    """Dish table model; every item belongs to one section of one menu."""

    __tablename__ = "menu_items"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)

    menu_id: Mapped[str] = mapped_column(String(50), nullable=False)

    section_key: Mapped[str] = mapped_column(String(50), nullable=False)

    name: Mapped[str] = mapped_column(String(200), nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    price: Mapped[float] = mapped_column(Float, nullable=False)

    __table_args__ = (
        ForeignKeyConstraint(
            ["menu_id", "section_key"],
            ["menu_sections.menu_id", "menu_sections.section_key"],
            ondelete="CASCADE",
        ),
        Index("ix_menu_items_menu_section", "menu_id", "section_key"),
    )

    def __repr__(self) -> str:
        return f"<MenuItemRecord(id={self.id!r}, menu_id={self.menu_id!r}, name={self.name!r})>"
