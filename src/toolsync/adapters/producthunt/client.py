"""GraphQL client for the Product Hunt API."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from toolsync.adapters.http_resilience import ResilientClient
from toolsync.config.errors import MissingConfigurationError
from toolsync.config.producthunt import ProductHuntConfig, get_producthunt_config
from toolsync.domain.errors import InvalidInputError, UpstreamError
from toolsync.domain.ports.fetching import RankingOrder

from .schema import PostResponse, PostsResponse
from .translator import parse_product

if TYPE_CHECKING:
    from collections.abc import Callable

    from toolsync.config.http_resilience import ResilienceConfig
    from toolsync.domain.model import ExternalProduct
    from toolsync.domain.ports.fetching import ExternalCatalogFetcher
    from toolsync.domain.time_windows import DateWindow

log = getLogger(__name__)

POST_FIELDS = """
      id
      name
      tagline
      description
      website
      thumbnail { url }
      votesCount
      commentsCount
      createdAt
      makers { name }
      topics { edges { node { name } } }
"""

PRODUCT_BY_SLUG_QUERY = f"""
query GetProductBySlug($slug: String!) {{
  post(slug: $slug) {{{POST_FIELDS}  }}
}}
"""

CONNECTION_TEST_QUERY = """
query TestConnection {
  posts(first: 1) { edges { node { id name } } }
}
"""

_HOST_PREFIXES = (
    "https://www.producthunt.com/",
    "http://www.producthunt.com/",
    "https://producthunt.com/",
    "http://producthunt.com/",
    "www.producthunt.com/",
    "producthunt.com/",
)
_PATH_SEGMENTS = frozenset({"posts", "products"})


def slug_from_url(url: str) -> str:
    """Derive a post slug from a Product Hunt URL or accept a bare slug."""

    value = url.strip()
    for prefix in _HOST_PREFIXES:
        if value.lower().startswith(prefix):
            value = value[len(prefix) :]
            break
    value = value.split("?", 1)[0].split("#", 1)[0].strip("/")
    if "://" in value:
        raise InvalidInputError(f"Not a Product Hunt URL: {url}")
    segments = value.split("/")
    if segments[0] in _PATH_SEGMENTS:
        segments = segments[1:]
    slug = segments[0] if segments else ""
    if not slug:
        raise InvalidInputError(f"Invalid Product Hunt URL: {url!r}")
    return slug


def build_posts_query(
    *,
    order: RankingOrder = RankingOrder.VOTES,
    posted_after: str | None = None,
    posted_before: str | None = None,
) -> str:
    """Ranked listing query; date bounds are inlined as string literals."""

    arguments = ["first: $first", f"order: {order.value}"]
    if posted_after is not None:
        arguments.append(f'postedAfter: "{posted_after}"')
    if posted_before is not None:
        arguments.append(f'postedBefore: "{posted_before}"')
    return f"""
query GetPosts($first: Int!) {{
  posts({", ".join(arguments)}) {{
    edges {{ node {{{POST_FIELDS}    }} }}
  }}
}}
"""


@dataclass(frozen=True, slots=True)
class ConnectionCheck:
    ok: bool
    api_url: str
    status_code: int | None = None
    posts_count: int = 0
    first_post: str | None = None
    error: str | None = None


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class ProductHuntClient:
    config: ProductHuntConfig = field(default_factory=get_producthunt_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def get_product_by_url(self, url: str) -> ExternalProduct | None:
        self._require_token()
        slug = slug_from_url(url)
        return asyncio.run(self._fetch_product_async(slug))

    def get_trending_products(
        self,
        limit: int = 20,
        *,
        order: RankingOrder = RankingOrder.VOTES,
    ) -> list[ExternalProduct]:
        self._require_token()
        query = build_posts_query(order=order)
        return asyncio.run(self._fetch_posts_async(query, limit))

    def get_products_by_date(
        self,
        window: DateWindow,
        limit: int = 20,
        *,
        order: RankingOrder = RankingOrder.VOTES,
    ) -> list[ExternalProduct]:
        self._require_token()
        posted_after, posted_before = window.graphql_bounds()
        query = build_posts_query(
            order=order,
            posted_after=posted_after,
            posted_before=posted_before,
        )
        return asyncio.run(self._fetch_posts_async(query, limit))

    def check_connection(self) -> ConnectionCheck:
        """Run a one-post query, reporting failures instead of raising."""

        self._require_token()
        return asyncio.run(self._check_connection_async())

    def _require_token(self) -> None:
        if not self.config.token or not self.config.token.strip():
            raise MissingConfigurationError("Product Hunt developer token not configured")

    async def _fetch_product_async(self, slug: str) -> ExternalProduct | None:
        async with self.client_factory(self.config.resilience) as client:
            payload = await self._perform_request(
                client=client,
                query=PRODUCT_BY_SLUG_QUERY,
                variables={"slug": slug},
            )
        try:
            response = PostResponse.model_validate(payload)
        except ValidationError as exc:
            raise UpstreamError("Invalid Product Hunt API response structure") from exc
        if response.data.post is None:
            return None
        return parse_product(response.data.post)

    async def _fetch_posts_async(self, query: str, limit: int) -> list[ExternalProduct]:
        async with self.client_factory(self.config.resilience) as client:
            payload = await self._perform_request(
                client=client,
                query=query,
                variables={"first": limit},
            )
        try:
            response = PostsResponse.model_validate(payload)
        except ValidationError as exc:
            raise UpstreamError("Invalid Product Hunt API response structure") from exc
        products = [parse_product(edge.node) for edge in response.data.posts.edges]
        log.info("Fetched %s products from Product Hunt", len(products))
        return products

    async def _check_connection_async(self) -> ConnectionCheck:
        api_url = self.config.api_url
        try:
            async with self.client_factory(self.config.resilience) as client:
                payload = await self._perform_request(
                    client=client,
                    query=CONNECTION_TEST_QUERY,
                    variables={},
                )
            response = PostsResponse.model_validate(payload)
        except UpstreamError as exc:
            return ConnectionCheck(
                ok=False, api_url=api_url, status_code=exc.status_code, error=str(exc)
            )
        except (httpx.HTTPError, ValidationError) as exc:
            return ConnectionCheck(ok=False, api_url=api_url, error=str(exc))

        edges = response.data.posts.edges
        return ConnectionCheck(
            ok=True,
            api_url=api_url,
            status_code=200,
            posts_count=len(edges),
            first_post=edges[0].node.name if edges else None,
        )

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        query: str,
        variables: dict[str, object],
    ) -> object:
        response = await client.post(
            self.config.api_url,
            json={"query": query, "variables": variables},
            headers={"Authorization": f"Bearer {self.config.token}"},
        )

        if not response.is_success:
            body = response.text
            log.error("Product Hunt API error response %s: %s", response.status_code, body)
            raise UpstreamError(
                f"Product Hunt API error: {response.status_code} "
                f"{response.reason_phrase} - {body}",
                status_code=response.status_code,
                body=body,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(
                f"Invalid JSON response from Product Hunt API: {response.text[:500]}",
                status_code=response.status_code,
                body=response.text,
            ) from exc

        if isinstance(payload, dict) and payload.get("errors"):
            errors = json.dumps(payload["errors"])
            log.error("Product Hunt API errors: %s", errors)
            raise UpstreamError(
                f"Product Hunt API errors: {errors}",
                status_code=response.status_code,
                body=response.text,
            )

        return payload


if TYPE_CHECKING:
    _fetcher_check: ExternalCatalogFetcher = ProductHuntClient()
