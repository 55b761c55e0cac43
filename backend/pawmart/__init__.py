"""
PawMart Backend — Application Package Initializer
===================================================

What: Marks the `pawmart` directory as a Python package.
Why:  Enables module imports like `from pawmart.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend follows the same layered shape for every resource:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Authorization Gate (auth.py)    │  ← bearer token → Identity
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← ownership checks, filters
    ├─────────────────────────────────────┤
    │            Schemas (Data)           │  ← Pydantic request/response models
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async MongoDB handle
    └─────────────────────────────────────┘

    Routes never talk to MongoDB directly; they call a service, which goes
    through the document store so that every driver error becomes a StorageError.
"""

__version__ = "1.0.0"
