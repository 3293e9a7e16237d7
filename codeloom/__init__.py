"""
Codeloom Backend - Application Package Initializer
===================================================

What: Marks the `codeloom` directory as a Python package.
Who:  Imported by uvicorn (`codeloom.main:app`), Alembic and pytest.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │      Routes + Pages (HTTP Layer)    │  ← status codes, headers, HTML
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← practices, plans, configuration
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    The `ui` subpackage sits beside the routes: it renders presentational
    components (Label, Tabs, LandingPage) from plain arguments and owns the
    theme color tokens.
"""

__version__ = "0.1.0"
