"""SQLAlchemy adapter package for the catalog."""

from __future__ import annotations

from .mappings import mapper_registry, start_mappers
from .repositories import SqlAlchemyCatalogRepository
from .unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    configured_engine,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyCatalogRepository",
    "SqlAlchemyCatalogUnitOfWork",
    "StartupError",
    "configured_engine",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
