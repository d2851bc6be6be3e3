"""
MenuBoard — Startup Data Seeding
==================================

What:  Inserts a small fixed set of restaurants, menus and menu items.
Why:   A fresh install is immediately browsable.
How:   seed_if_empty() checks SELECT COUNT(*) FROM restaurants and only
       inserts when the count is zero. It never reconciles existing rows.
Who:   Called by the startup lifespan in main.py; also runnable by hand:

           python -m menuboard.seed
"""

import asyncio
import logging
from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from menuboard.database import async_session_factory, create_schema, dispose_engine
from menuboard.models.restaurant import Menu, MenuItem, Restaurant
from menuboard.services.restaurant_service import restaurant_service

logger = logging.getLogger(__name__)

SEED_RESTAURANTS: List[Dict[str, Any]] = [
    {
        "name": "Bayroot",
        "image": "https://images.unsplash.com/photo-1532634896-26909d0d4b6a",
        "menus": [
            {
                "title": "Grill",
                "items": [
                    {"name": "Houmous Shawarma Lamb", "price": 6.50, "vegetarian": False},
                    {"name": "Mezze Platter", "price": 9.00, "vegetarian": True},
                    {"name": "Chicken Shish", "price": 8.25, "vegetarian": False},
                ],
            },
            {
                "title": "Desserts",
                "items": [
                    {"name": "Baklava", "price": 4.50, "vegetarian": True},
                ],
            },
        ],
    },
    {
        "name": "The Smiths",
        "image": "https://images.unsplash.com/photo-1555396273-367ea4eb4db5",
        "menus": [
            {
                "title": "Lunch",
                "items": [
                    {"name": "Fish and Chips", "price": 12.00, "vegetarian": False},
                    {"name": "Ploughman's Lunch", "price": 9.50, "vegetarian": True},
                ],
            },
            {
                "title": "Drinks",
                "items": [
                    {"name": "Lemonade", "price": 2.75, "vegetarian": True},
                    {"name": "Pale Ale", "price": 4.80, "vegetarian": True},
                ],
            },
        ],
    },
    {
        "name": "Pizza Express",
        "image": "https://images.unsplash.com/photo-1513104890138-7c749659a591",
        "menus": [
            {
                "title": "Pizzas",
                "items": [
                    {"name": "Margherita", "price": 10.95, "vegetarian": True},
                    {"name": "American Hot", "price": 13.45, "vegetarian": False},
                ],
            },
        ],
    },
]


def build_restaurant(data: Dict[str, Any]) -> Restaurant:
    """Turn one nested seed entry into a Restaurant with its menus and items."""
    return Restaurant(
        name=data["name"],
        image=data["image"],
        menus=[
            Menu(
                title=menu["title"],
                items=[MenuItem(**item) for item in menu["items"]],
            )
            for menu in data["menus"]
        ],
    )


async def seed_if_empty(db: AsyncSession) -> int:
    """
    Insert the seed dataset when no restaurant exists yet.

    Returns:
        Number of restaurants inserted (0 when the store already had data).
    """
    existing = await restaurant_service.count(db)
    if existing:
        logger.info("Seed skipped: %d restaurants already present", existing)
        return 0

    db.add_all([build_restaurant(data) for data in SEED_RESTAURANTS])
    await db.flush()
    logger.info("Seeded %d restaurants", len(SEED_RESTAURANTS))
    return len(SEED_RESTAURANTS)


async def run_seed() -> int:
    """Create missing tables, then seed in a single committed transaction."""
    await create_schema()
    async with async_session_factory() as session:
        async with session.begin():
            return await seed_if_empty(session)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    async def _main() -> None:
        try:
            await run_seed()
        finally:
            await dispose_engine()

    asyncio.run(_main())
