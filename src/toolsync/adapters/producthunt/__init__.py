"""Public interface for the Product Hunt adapter."""

from __future__ import annotations

from .client import (
    PRODUCT_BY_SLUG_QUERY,
    ConnectionCheck,
    ProductHuntClient,
    build_posts_query,
    slug_from_url,
)
from .schema import PostPayload, PostPayloadInput, PostResponse, PostsResponse
from .topic_lookup import ProductHuntTopicLookup, slugify
from .translator import parse_product

__all__ = [
    "PRODUCT_BY_SLUG_QUERY",
    "ConnectionCheck",
    "PostPayload",
    "PostPayloadInput",
    "PostResponse",
    "PostsResponse",
    "ProductHuntClient",
    "ProductHuntTopicLookup",
    "build_posts_query",
    "parse_product",
    "slug_from_url",
    "slugify",
]
