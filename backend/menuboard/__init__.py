"""
MenuBoard — Application Package Initializer
=============================================

What: Marks the `menuboard` directory as a Python package.
Who:  Used by uvicorn (menuboard.main:app), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │   Routes + Templates (HTTP / HTML)  │  ← status codes, rendering
    ├─────────────────────────────────────┤
    │  Services (queries, validation)     │  ← RestaurantService, rules
    ├─────────────────────────────────────┤
    │  Models & Schemas (Data)            │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │  Database (Persistence)             │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
