"""
MenuBoard — Restaurant Service Unit Tests
===========================================

What:  Tests for RestaurantService queries and writes.
How:   Failure paths use mock DB sessions; the CRUD and cascade paths run
       against the throwaway SQLite database from conftest.py.
"""

import pytest
from unittest.mock import MagicMock

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, OperationalError

from menuboard.exceptions import DatabaseError, NotFoundError
from menuboard.models.restaurant import Menu, MenuItem, Restaurant
from menuboard.schemas.restaurant import RestaurantPatch
from menuboard.seed import build_restaurant
from menuboard.services.restaurant_service import RestaurantService


def _missing_row_result():
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    return result


class TestRestaurantServiceWithMocks:
    """Not-found and database-failure handling."""

    def setup_method(self):
        self.service = RestaurantService()

    @pytest.mark.asyncio
    async def test_find_with_children_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _missing_row_result()

        with pytest.raises(NotFoundError):
            await self.service.find_with_children(mock_db_session, 404)

    @pytest.mark.asyncio
    async def test_update_unknown_id_raises_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _missing_row_result()

        with pytest.raises(NotFoundError):
            await self.service.update_by_id(
                mock_db_session, 7, {"name": "X", "image": "https://e.com/x"}
            )
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_patch_unknown_id_raises_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _missing_row_result()

        with pytest.raises(NotFoundError):
            await self.service.patch_by_id(mock_db_session, 7, RestaurantPatch(name="X"))

    @pytest.mark.asyncio
    async def test_delete_unknown_id_is_noop(self, mock_db_session):
        mock_db_session.execute.return_value = _missing_row_result()

        deleted = await self.service.delete_by_id(mock_db_session, 7)

        assert deleted is False
        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_query_failure_is_wrapped(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("db down"))

        with pytest.raises(DatabaseError):
            await self.service.find_all(mock_db_session)

    @pytest.mark.asyncio
    async def test_create_failure_is_wrapped(self, mock_db_session):
        mock_db_session.flush.side_effect = OperationalError("INSERT", {}, Exception("db down"))

        with pytest.raises(DatabaseError):
            await self.service.create(mock_db_session, {"name": "X"})


class TestRestaurantServiceCrud:
    """Round trips against a real SQLite database."""

    def setup_method(self):
        self.service = RestaurantService()

    @pytest.mark.asyncio
    async def test_create_and_find(self, db_session, valid_payload):
        created = await self.service.create(db_session, valid_payload)

        found = await self.service.find_by_id(db_session, created.id)
        assert found is not None
        assert found.name == "Pizza Place"
        assert found.image == "https://example.com/p.jpg"

    @pytest.mark.asyncio
    async def test_create_ignores_unknown_fields(self, db_session):
        created = await self.service.create(
            db_session, {"name": "Bayroot", "image": "https://e.com/b", "rating": 5}
        )
        assert created.id is not None

    @pytest.mark.asyncio
    async def test_find_all_returns_summaries_in_id_order(self, db_session):
        for name in ("A", "B", "C"):
            await self.service.create(db_session, {"name": name, "image": "https://e.com/x"})

        restaurants = await self.service.find_all(db_session)

        assert [r.name for r in restaurants] == ["A", "B", "C"]
        assert await self.service.count(db_session) == 3

    @pytest.mark.asyncio
    async def test_find_with_children_nests_menus_and_items(self, db_session):
        restaurant = build_restaurant({
            "name": "Bayroot",
            "image": "https://e.com/b",
            "menus": [
                {"title": "Grill", "items": [{"name": "Shish", "price": 8.25}]},
                {"title": "Empty", "items": []},
            ],
        })
        db_session.add(restaurant)
        await db_session.flush()

        detail = await self.service.find_with_children(db_session, restaurant.id)

        assert [m.title for m in detail.menus] == ["Grill", "Empty"]
        assert detail.menus[0].items[0].name == "Shish"
        assert detail.menus[0].items[0].price == 8.25
        assert detail.menus[0].items[0].vegetarian is False
        assert detail.menus[1].items == []

    @pytest.mark.asyncio
    async def test_update_replaces_all_fields(self, db_session, valid_payload):
        created = await self.service.create(db_session, valid_payload)

        await self.service.update_by_id(
            db_session, created.id, {"name": "Pasta Place", "image": "https://e.com/new.jpg"}
        )

        found = await self.service.find_by_id(db_session, created.id)
        assert (found.name, found.image) == ("Pasta Place", "https://e.com/new.jpg")

    @pytest.mark.asyncio
    async def test_patch_only_touches_sent_fields(self, db_session, valid_payload):
        created = await self.service.create(db_session, valid_payload)

        await self.service.patch_by_id(db_session, created.id, RestaurantPatch(name="Renamed"))

        found = await self.service.find_by_id(db_session, created.id)
        assert found.name == "Renamed"
        assert found.image == "https://example.com/p.jpg"

    @pytest.mark.asyncio
    async def test_delete_cascades_to_menus_and_items(self, db_session):
        restaurant = build_restaurant({
            "name": "Bayroot",
            "image": "https://e.com/b",
            "menus": [{"title": "Grill", "items": [{"name": "Shish", "price": 8.25}]}],
        })
        db_session.add(restaurant)
        await db_session.flush()

        deleted = await self.service.delete_by_id(db_session, restaurant.id)

        assert deleted is True
        assert await self.service.find_by_id(db_session, restaurant.id) is None
        menus = await db_session.execute(select(func.count(Menu.id)))
        items = await db_session.execute(select(func.count(MenuItem.id)))
        assert menus.scalar() == 0
        assert items.scalar() == 0

    @pytest.mark.asyncio
    async def test_menu_requires_existing_restaurant(self, db_session):
        db_session.add(Menu(title="Orphan", restaurant_id=9999))

        with pytest.raises(IntegrityError):
            await db_session.flush()

    @pytest.mark.asyncio
    async def test_count_empty_store(self, db_session):
        assert await self.service.count(db_session) == 0
        result = await db_session.execute(select(func.count(Restaurant.id)))
        assert result.scalar() == 0
