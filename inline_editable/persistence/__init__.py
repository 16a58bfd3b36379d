"""
Inline Editable - Persistence Module

Durable content store (L3): the abstract contract and the SQLAlchemy driver.

Usage:
    from inline_editable.persistence import create_persistence_layer

    store = create_persistence_layer()
    await store.initialize()
    await store.save_content("ui", "save", "en", "Save")
"""

from .database import ContentDatabase
from .dialects import Dialect
from .interface import PersistenceLayer
from .models import build_content_table
from .sql import SqlPersistenceLayer, create_persistence_layer

__all__ = [
    "ContentDatabase",
    "Dialect",
    "PersistenceLayer",
    "SqlPersistenceLayer",
    "build_content_table",
    "create_persistence_layer",
]
