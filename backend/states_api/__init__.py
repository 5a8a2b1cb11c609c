"""
States API Backend — Application Package Initializer
=====================================================

What:  Marks the `states_api` directory as a Python package.
Who:   Imported by uvicorn (`uvicorn states_api.main:app`), Alembic and pytest.

Architecture Note:
    The backend keeps a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Catalog + Fact merge)   │  ← lookups, validation, mutations
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    The reference catalog is static and lives in memory; only the
    per-state fun facts touch the database.
"""

__version__ = "1.0.0"
