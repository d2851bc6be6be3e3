"""
MenuBoard — Seeding Tests
===========================

What:  Tests for the startup schema + seed step.
Why:   A fresh install must be browsable, and a restart must not duplicate data.
"""

import pytest

from menuboard.database import async_session_factory
from menuboard.main import initialize_store
from menuboard.seed import SEED_RESTAURANTS, seed_if_empty
from menuboard.services.restaurant_service import restaurant_service


class TestSeedIfEmpty:

    @pytest.mark.asyncio
    async def test_fresh_store_is_seeded(self, db_session):
        inserted = await seed_if_empty(db_session)

        assert inserted == len(SEED_RESTAURANTS)
        assert await restaurant_service.count(db_session) == len(SEED_RESTAURANTS)

    @pytest.mark.asyncio
    async def test_existing_data_is_left_alone(self, db_session):
        await restaurant_service.create(db_session, {"name": "Mine", "image": "https://e.com/m"})

        inserted = await seed_if_empty(db_session)

        assert inserted == 0
        assert await restaurant_service.count(db_session) == 1

    @pytest.mark.asyncio
    async def test_every_seed_restaurant_has_a_menu_item(self):
        for data in SEED_RESTAURANTS:
            assert data["menus"]
            assert any(menu["items"] for menu in data["menus"])


class TestStartupInitialization:

    @pytest.mark.asyncio
    async def test_startup_seeds_once(self, reset_schema):
        first = await initialize_store()
        second = await initialize_store()

        assert first == len(SEED_RESTAURANTS)
        assert second == 0

    @pytest.mark.asyncio
    async def test_seeded_store_is_browsable(self, test_client):
        await initialize_store()

        listing = await test_client.get("/restaurants")
        assert listing.status_code == 200
        assert SEED_RESTAURANTS[0]["name"] in listing.text

        async with async_session_factory() as session:
            first = (await restaurant_service.find_all(session))[0]
            detail = await restaurant_service.find_with_children(session, first.id)
        assert detail.menus
        assert detail.menus[0].items

        page = await test_client.get(f"/restaurants/{first.id}")
        assert detail.menus[0].items[0].name in page.text
