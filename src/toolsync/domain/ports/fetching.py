"""Ports for fetching external catalog data."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from toolsync.domain.model import ExternalProduct, Tool
    from toolsync.domain.time_windows import DateWindow


class RankingOrder(StrEnum):
    """Ordering accepted by the upstream ``posts`` listing."""

    VOTES = "VOTES"
    NEWEST = "NEWEST"
    RANKING = "RANKING"
    FEATURED_AT = "FEATURED_AT"


@runtime_checkable
class ExternalCatalogFetcher(Protocol):
    """Port for retrieving products from the external catalog."""

    def get_product_by_url(self, url: str) -> ExternalProduct | None: ...

    def get_trending_products(
        self,
        limit: int = 20,
        *,
        order: RankingOrder = RankingOrder.VOTES,
    ) -> list[ExternalProduct]: ...

    def get_products_by_date(
        self,
        window: DateWindow,
        limit: int = 20,
        *,
        order: RankingOrder = RankingOrder.VOTES,
    ) -> list[ExternalProduct]: ...


@runtime_checkable
class ToolTopicLookup(Protocol):
    """Optional capability: find external topics for an existing catalog tool.

    ``available`` is False when no lookup is wired up, so callers can tell
    "lookup not configured" apart from "no data found" (``None`` / empty).
    """

    @property
    def available(self) -> bool: ...

    def topics_for(self, tool: Tool) -> Sequence[str] | None: ...


class UnimplementedTopicLookup:
    """Placeholder lookup used when no external source is configured."""

    @property
    def available(self) -> bool:
        return False

    def topics_for(self, tool: Tool) -> Sequence[str] | None:
        del tool
        return None


__all__ = [
    "ExternalCatalogFetcher",
    "RankingOrder",
    "ToolTopicLookup",
    "UnimplementedTopicLookup",
]
