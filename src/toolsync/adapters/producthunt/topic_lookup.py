"""Topic lookup for catalog tools backed by Product Hunt post slugs."""

from __future__ import annotations

import re
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from toolsync.domain.model import Tool
    from toolsync.domain.ports.fetching import ExternalCatalogFetcher

log = getLogger(__name__)

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    return _NON_SLUG.sub("-", name.lower()).strip("-")


@dataclass(slots=True)
class ProductHuntTopicLookup:
    """Guess a tool's post slug from its name and return that post's topics."""

    fetcher: ExternalCatalogFetcher

    @property
    def available(self) -> bool:
        return True

    def topics_for(self, tool: Tool) -> list[str] | None:
        slug = slugify(tool.name)
        if not slug:
            return None
        product = self.fetcher.get_product_by_url(slug)
        if product is None:
            log.info("No Product Hunt post found for tool %s (slug %s)", tool.name, slug)
            return None
        return list(product.topics)

