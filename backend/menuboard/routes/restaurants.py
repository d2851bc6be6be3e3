"""
MenuBoard — Restaurant Route Handlers
=======================================

What:  Listing, detail, create, update, patch and delete for restaurants,
       plus the menus overview page.
How:   Each handler performs one logical operation through RestaurantService
       and then renders a template or responds with a bare status.
Who:   Browsers (HTML pages, delete form buttons) and JSON API clients.

Validation:
    POST and PUT validate the body with validate_restaurant() and store the
    sanitized values. PATCH applies the sent fields without validation.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from menuboard.database import get_db_session
from menuboard.exceptions import ValidationError
from menuboard.routes.payload import read_payload
from menuboard.schemas.restaurant import ErrorResponse, FieldError, RestaurantPatch
from menuboard.services.restaurant_service import restaurant_service
from menuboard.services.validation import sanitize_restaurant, validate_restaurant
from menuboard.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Restaurants"])


@router.get("/restaurants", response_class=HTMLResponse, summary="Restaurant list page")
async def list_restaurants(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
):
    restaurants = await restaurant_service.find_all(db)
    return templates.TemplateResponse(
        request, "restaurants.html", {"restaurants": restaurants}
    )


@router.get(
    "/restaurants/{restaurant_id}",
    response_class=HTMLResponse,
    responses={404: {"description": "Restaurant not found", "model": ErrorResponse}},
    summary="Restaurant detail page with menus and items",
)
async def show_restaurant(
    restaurant_id: int,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
):
    restaurant = await restaurant_service.find_with_children(db, restaurant_id)
    return templates.TemplateResponse(
        request, "restaurant.html", {"restaurant": restaurant}
    )


@router.post(
    "/restaurants",
    status_code=201,
    responses={400: {"description": "Validation failed", "model": ErrorResponse}},
    summary="Create a restaurant",
)
async def create_restaurant(
    payload: Dict[str, Any] = Depends(read_payload),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    """
    Create a restaurant from {name, image}.

    Returns 201 with an empty body. Validation failures return 400 with
    the per-field errors and nothing is written.
    """
    errors = validate_restaurant(payload)
    if errors:
        raise ValidationError(errors=errors)

    await restaurant_service.create(db, sanitize_restaurant(payload))
    return Response(status_code=201)


@router.put(
    "/restaurants/{restaurant_id}",
    responses={
        400: {"description": "Validation failed", "model": ErrorResponse},
        404: {"description": "Restaurant not found", "model": ErrorResponse},
    },
    summary="Replace a restaurant",
)
async def replace_restaurant(
    restaurant_id: int,
    payload: Dict[str, Any] = Depends(read_payload),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    errors = validate_restaurant(payload)
    if errors:
        raise ValidationError(errors=errors)

    await restaurant_service.update_by_id(db, restaurant_id, sanitize_restaurant(payload))
    return Response(status_code=200)


@router.patch(
    "/restaurants/{restaurant_id}",
    responses={404: {"description": "Restaurant not found", "model": ErrorResponse}},
    summary="Partially update a restaurant",
)
async def patch_restaurant(
    restaurant_id: int,
    payload: Dict[str, Any] = Depends(read_payload),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    # No rule validation on PATCH: the sent fields are written as-is.
    # Only non-string values and a null name are refused, since the columns
    # are text and name is NOT NULL.
    try:
        patch = RestaurantPatch.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(errors=[
            FieldError(
                field=".".join(str(part) for part in error["loc"]),
                constraint="required" if error["type"] == "value_error" else "type",
                value=error.get("input"),
                message=error["msg"],
            )
            for error in e.errors()
        ])
    await restaurant_service.patch_by_id(db, restaurant_id, patch)
    return Response(status_code=200)


@router.post("/delete/{restaurant_id}", summary="Delete a restaurant and its menus")
async def delete_restaurant(
    restaurant_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> RedirectResponse:
    """Delete by id and go back to the list; unknown ids are a silent no-op."""
    await restaurant_service.delete_by_id(db, restaurant_id)
    return RedirectResponse(url="/restaurants", status_code=302)


@router.get("/menus", response_class=HTMLResponse, summary="Menus overview page")
async def list_menus(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
):
    # One entry per restaurant, each linking to its menus on the detail page
    menus = await restaurant_service.find_all(db)
    return templates.TemplateResponse(request, "menus.html", {"menus": menus})
