"""
MenuBoard — Pydantic View Models and Request/Response Schemas
===============================================================

What:  Pydantic models for what templates render, what PATCH accepts, and
       the JSON shape of errors.
Why:   Templates receive plain immutable structs instead of live ORM objects,
       so rendering can never trigger a lazy load or mutate a record.
How:   View models are frozen and built with model_validate(orm_obj) via
       from_attributes; nested menus and items are copied eagerly.
Who:   Built by RestaurantService; consumed by templates and route handlers.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# View Models — What the templates render
# ══════════════════════════════════════════════════════════════════════════

_VIEW_CONFIG = {"from_attributes": True, "frozen": True}


class MenuItemView(BaseModel):
    """A single dish as shown on the restaurant detail page."""
    id: int
    name: str
    price: float
    vegetarian: bool = False

    model_config = _VIEW_CONFIG


class MenuView(BaseModel):
    """A menu and its dishes."""
    id: int
    title: str
    items: List[MenuItemView] = Field(default_factory=list)

    model_config = _VIEW_CONFIG


class RestaurantSummary(BaseModel):
    """
    What:  Compact restaurant card for the list and menus pages.
    Why:   The list pages never touch menus, so they are not loaded.
    """
    id: int
    name: str
    image: Optional[str] = None

    model_config = _VIEW_CONFIG


class RestaurantDetail(RestaurantSummary):
    """
    What:  Restaurant with every menu and menu item.
    Who:   Rendered by GET /restaurants/{id}.
    """
    menus: List[MenuView] = Field(default_factory=list)


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends
# ══════════════════════════════════════════════════════════════════════════


class RestaurantPatch(BaseModel):
    """
    Partial update body for PATCH /restaurants/{id}.

    No rules beyond types are applied here; unknown keys are dropped and
    only the keys the client actually sent are written (exclude_unset).
    name may be omitted but not sent as null, since the column is NOT NULL.
    """
    name: Optional[str] = None
    image: Optional[str] = None

    model_config = {"extra": "ignore"}

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("name must not be null")
        return v


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class FieldError(BaseModel):
    """
    One failed validation rule.

    Example:
        {"field": "name", "constraint": "max_length",
         "value": "xxxxxxxx...", "message": "name must be at most 50 characters"}
    """
    field: str = Field(description="Name of the body field that failed")
    constraint: str = Field(description="Rule that failed: required, max_length, url")
    value: Any = Field(default=None, description="The rejected value as received")
    message: str = Field(description="Human-readable description")
    location: str = Field(default="body")

    model_config = {"frozen": True}


class ErrorResponse(BaseModel):
    """Standardized error response format for all JSON errors."""
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    errors: Optional[List[FieldError]] = Field(default=None, description="Per-field validation errors")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
