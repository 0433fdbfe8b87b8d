"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import (
    ExternalCatalogFetcher,
    RankingOrder,
    ToolTopicLookup,
    UnimplementedTopicLookup,
)
from .persistence import CatalogRepository
from .unit_of_work import (
    CatalogRepositories,
    CatalogUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CatalogRepositories",
    "CatalogRepository",
    "CatalogUnitOfWork",
    "ExternalCatalogFetcher",
    "RankingOrder",
    "RepositoryCollection",
    "ToolTopicLookup",
    "UnimplementedTopicLookup",
    "UnitOfWork",
]
