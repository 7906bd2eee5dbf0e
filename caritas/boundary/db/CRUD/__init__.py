"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from caritas.boundary.db.CRUD import history_crud

    row = await history_crud.create_entry(db, entry)
"""

from caritas.boundary.db.CRUD.base_crud import BaseCRUD
from caritas.boundary.db.CRUD.history_crud import HistoryCRUD, history_crud

__all__ = [
    "BaseCRUD",
    "HistoryCRUD",
    "history_crud",
]
