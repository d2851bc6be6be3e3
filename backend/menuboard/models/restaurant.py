"""
MenuBoard — Restaurant, Menu and MenuItem SQLAlchemy Models
=============================================================

What:  ORM models for the `restaurants`, `menus` and `menu_items` tables.
Why:   Maps the three record types to rows with explicit foreign keys.
How:   Inherits from the shared DeclarativeBase; create_all() and Alembic
       both read these definitions.
Who:   Used by RestaurantService for CRUD and by the seed step.

Ownership:
    Restaurant 1 ── * Menu 1 ── * MenuItem

    A Menu always references an existing Restaurant and a MenuItem always
    references an existing Menu (NOT NULL foreign keys). Deleting a
    Restaurant deletes its Menus, and deleting a Menu deletes its
    MenuItems, both in the ORM (delete-orphan cascade) and in the
    database (ON DELETE CASCADE).
"""

from typing import List

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from menuboard.database import Base

# Upper bound enforced by validation on POST/PUT /restaurants
NAME_MAX_LENGTH = 50


class Restaurant(Base):
    """
    A single eatery.

    Query Patterns:
        - List page:   SELECT ... FROM restaurants ORDER BY id
        - Detail page: restaurant by primary key, menus and items loaded
          eagerly with selectinload (no lazy loads under asyncio)
    """

    __tablename__ = "restaurants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Stored HTML-escaped when it arrives through a validated route, so the
    # column is sized above the 50-character rule for unvalidated PATCH bodies
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    image: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    menus: Mapped[List["Menu"]] = relationship(
        back_populates="restaurant",
        cascade="all, delete-orphan",
        order_by="Menu.id",
    )

    def __repr__(self) -> str:
        return f"<Restaurant(id={self.id}, name='{self.name}')>"


class Menu(Base):
    """A named menu (e.g. "Lunch") belonging to one restaurant."""

    __tablename__ = "menus"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)

    restaurant_id: Mapped[int] = mapped_column(
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    restaurant: Mapped[Restaurant] = relationship(back_populates="menus")

    items: Mapped[List["MenuItem"]] = relationship(
        back_populates="menu",
        cascade="all, delete-orphan",
        order_by="MenuItem.id",
    )

    def __repr__(self) -> str:
        return f"<Menu(id={self.id}, title='{self.title}', restaurant_id={self.restaurant_id})>"


class MenuItem(Base):
    """A single dish on a menu."""

    __tablename__ = "menu_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    vegetarian: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    menu_id: Mapped[int] = mapped_column(
        ForeignKey("menus.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    menu: Mapped[Menu] = relationship(back_populates="items")

    def __repr__(self) -> str:
        return f"<MenuItem(id={self.id}, name='{self.name}', price={self.price})>"
