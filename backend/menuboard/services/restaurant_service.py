"""
MenuBoard — Restaurant Service
================================

What:  Explicit query functions for restaurants and their menus.
Why:   Keeps SQL out of the route handlers; each handler calls one or two
       of these and then renders or responds.
How:   Stateless methods taking an AsyncSession. Reads return frozen view
       models; writes flush (the request dependency commits).
Who:   Called by route handlers and by the seed step (count).

Operations:
    count               SELECT COUNT(*) FROM restaurants
    find_all            every restaurant, id order, no children
    find_by_id          one restaurant row or None
    find_with_children  one restaurant with menus and items, or NotFoundError
    create              INSERT from name/image
    update_by_id        full replacement of name and image
    patch_by_id         replacement of only the fields the client sent
    delete_by_id        DELETE with cascade to menus and items; False if absent

Error Handling Strategy:
    SQLAlchemyError is wrapped in DatabaseError (internal details logged,
    never returned). NotFoundError propagates as-is.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from menuboard.exceptions import DatabaseError, NotFoundError
from menuboard.models.restaurant import Menu, Restaurant
from menuboard.schemas.restaurant import (
    RestaurantDetail,
    RestaurantPatch,
    RestaurantSummary,
)

logger = logging.getLogger(__name__)

# Columns a request body may write; anything else in the body is ignored
WRITABLE_FIELDS = ("name", "image")


class RestaurantService:
    """
    Business logic layer for restaurant operations.

    Missing ids:
        find_with_children, update_by_id and patch_by_id raise NotFoundError.
        delete_by_id returns False instead, so deleting twice is harmless.
    """

    async def count(self, db: AsyncSession) -> int:
        """Number of restaurants in the store."""
        try:
            result = await db.execute(select(func.count(Restaurant.id)))
            return result.scalar() or 0
        except SQLAlchemyError as e:
            logger.error("Database error counting restaurants: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__})

    async def find_all(self, db: AsyncSession) -> List[RestaurantSummary]:
        """
        Every restaurant, oldest first.

        Query plan:
            SELECT id, name, image FROM restaurants ORDER BY id
        """
        try:
            result = await db.execute(select(Restaurant).order_by(Restaurant.id))
            return [
                RestaurantSummary.model_validate(restaurant)
                for restaurant in result.scalars().all()
            ]
        except SQLAlchemyError as e:
            logger.error("Database error listing restaurants: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve restaurants. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def find_by_id(self, db: AsyncSession, restaurant_id: int) -> Optional[Restaurant]:
        """Fetch a single restaurant row, or None when the id is unknown."""
        try:
            result = await db.execute(
                select(Restaurant).where(Restaurant.id == restaurant_id)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching restaurant %s: %s", restaurant_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the restaurant. Please try again.",
                context={"restaurant_id": restaurant_id},
            )

    async def find_with_children(self, db: AsyncSession, restaurant_id: int) -> RestaurantDetail:
        """
        Fetch a restaurant with all of its menus and menu items.

        Query plan:
            SELECT ... FROM restaurants WHERE id = :id
            SELECT ... FROM menus WHERE restaurant_id IN (:id)
            SELECT ... FROM menu_items WHERE menu_id IN (...)

        Raises:
            NotFoundError: no restaurant has this id (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        try:
            result = await db.execute(
                select(Restaurant)
                .where(Restaurant.id == restaurant_id)
                .options(selectinload(Restaurant.menus).selectinload(Menu.items))
            )
            restaurant = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching restaurant %s: %s", restaurant_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the restaurant. Please try again.",
                context={"restaurant_id": restaurant_id},
            )

        if restaurant is None:
            raise NotFoundError(resource="restaurant", resource_id=str(restaurant_id))

        return RestaurantDetail.model_validate(restaurant)

    async def create(self, db: AsyncSession, values: Mapping[str, Any]) -> Restaurant:
        """
        Insert a restaurant from the writable fields of `values`.

        The caller decides whether `values` has been validated; this
        method only drops unknown keys.
        """
        restaurant = Restaurant(**_writable(values))
        try:
            db.add(restaurant)
            await db.flush()  # Assigns the id without committing
        except SQLAlchemyError as e:
            logger.error("Database error creating restaurant: %s", str(e))
            raise DatabaseError(
                message="Could not create the restaurant. Please try again.",
                context={"error_type": type(e).__name__},
            )
        logger.info("Restaurant created: %s", restaurant.id)
        return restaurant

    async def update_by_id(
        self,
        db: AsyncSession,
        restaurant_id: int,
        values: Mapping[str, Any],
    ) -> Restaurant:
        """Replace name and image of an existing restaurant."""
        restaurant = await self._get_or_raise(db, restaurant_id)
        restaurant.name = values.get("name")
        restaurant.image = values.get("image")
        await self._flush(db, restaurant_id)
        logger.info("Restaurant %s updated", restaurant_id)
        return restaurant

    async def patch_by_id(
        self,
        db: AsyncSession,
        restaurant_id: int,
        patch: RestaurantPatch,
    ) -> Restaurant:
        """Overwrite only the fields present in the PATCH body."""
        restaurant = await self._get_or_raise(db, restaurant_id)
        changes = patch.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(restaurant, field, value)
        await self._flush(db, restaurant_id)
        logger.info("Restaurant %s patched: %s", restaurant_id, sorted(changes))
        return restaurant

    async def delete_by_id(self, db: AsyncSession, restaurant_id: int) -> bool:
        """
        Delete a restaurant together with its menus and menu items.

        Returns:
            True if a row was deleted, False if the id did not exist.
        """
        try:
            result = await db.execute(
                select(Restaurant)
                .where(Restaurant.id == restaurant_id)
                .options(selectinload(Restaurant.menus).selectinload(Menu.items))
            )
            restaurant = result.scalar_one_or_none()
            if restaurant is None:
                logger.info("Delete requested for unknown restaurant %s", restaurant_id)
                return False
            await db.delete(restaurant)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting restaurant %s: %s", restaurant_id, str(e))
            raise DatabaseError(
                message="Could not delete the restaurant. Please try again.",
                context={"restaurant_id": restaurant_id},
            )
        logger.info("Restaurant %s deleted", restaurant_id)
        return True

    async def _get_or_raise(self, db: AsyncSession, restaurant_id: int) -> Restaurant:
        restaurant = await self.find_by_id(db, restaurant_id)
        if restaurant is None:
            raise NotFoundError(resource="restaurant", resource_id=str(restaurant_id))
        return restaurant

    async def _flush(self, db: AsyncSession, restaurant_id: int) -> None:
        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating restaurant %s: %s", restaurant_id, str(e))
            raise DatabaseError(
                message="Could not update the restaurant. Please try again.",
                context={"restaurant_id": restaurant_id},
            )


def _writable(values: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: values[key] for key in WRITABLE_FIELDS if key in values}


# ── Singleton Instance ────────────────────────────────────────────────────
restaurant_service = RestaurantService()
