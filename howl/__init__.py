"""
Howl Backend — Application Package Initializer
===============================================

What: Marks the `howl` directory as a Python package.
Why:  Enables module imports like `from howl.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows the same layering for every resource:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Validation, Paging)     │  ← Record rules, storage calls
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Businesses own reviews and photos through a `businessid` column; the
    business detail endpoint merges both into its response.
"""

__version__ = "1.0.0"
