"""
MenuBoard — HTML Form Routes
==============================

What:  The "new restaurant" form page and its submit handler.
Who:   Browsers; the form posts urlencoded data to /new-restaurant.

The submit handler does not apply the restaurant rules. It writes the
body, re-reads the row by id to confirm the insert, and answers 201 with
a short text message.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from menuboard.database import get_db_session
from menuboard.exceptions import DatabaseError
from menuboard.routes.payload import read_payload
from menuboard.services.restaurant_service import restaurant_service
from menuboard.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Forms"])


@router.get("/new-restaurant-form", response_class=HTMLResponse, summary="New restaurant form")
async def new_restaurant_form(request: Request):
    return templates.TemplateResponse(request, "new_restaurant_form.html", {})


@router.post(
    "/new-restaurant",
    status_code=201,
    response_class=PlainTextResponse,
    summary="Create a restaurant from the HTML form",
)
async def submit_new_restaurant(
    payload: Dict[str, Any] = Depends(read_payload),
    db: AsyncSession = Depends(get_db_session),
) -> PlainTextResponse:
    restaurant = await restaurant_service.create(db, payload)

    found = await restaurant_service.find_by_id(db, restaurant.id)
    if found is None:
        logger.error("Restaurant %s not found after insert", restaurant.id)
        raise DatabaseError(
            message="The restaurant could not be created. Please try again.",
            context={"restaurant_id": restaurant.id},
        )

    return PlainTextResponse("New restaurant success", status_code=201)
