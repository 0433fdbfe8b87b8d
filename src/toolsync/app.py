"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from logging import getLogger
from typing import TYPE_CHECKING

from toolsync.adapters.producthunt import ProductHuntClient, ProductHuntTopicLookup
from toolsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    is_started,
    startup,
)
from toolsync.config import SyncDisabledError, get_producthunt_config
from toolsync.domain.data_integration import (
    SyncRequest,
    SyncResult,
    collect_sync_statistics,
    run_sync,
    seed_categories,
)
from toolsync.domain.ports.unit_of_work import CatalogUnitOfWork

if TYPE_CHECKING:
    from toolsync.adapters.producthunt import ConnectionCheck
    from toolsync.config import ProductHuntConfig
    from toolsync.domain.model import SyncStatistics
    from toolsync.domain.ports.fetching import ExternalCatalogFetcher, ToolTopicLookup

UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]


log = getLogger(__name__)


def _default_unit_of_work_factory() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyCatalogUnitOfWork


def sync_product_hunt(
    request: SyncRequest | Mapping[str, object],
    *,
    submitted_by: str,
    fetcher: ExternalCatalogFetcher | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    topic_lookup: ToolTopicLookup | None = None,
    config: ProductHuntConfig | None = None,
) -> SyncResult:
    """Run one Product Hunt sync as requested by an admin."""

    sync_request = (
        request if isinstance(request, SyncRequest) else SyncRequest.from_payload(request)
    )
    sync_request.validate()

    effective_config = config or get_producthunt_config()
    if not effective_config.sync_enabled:
        raise SyncDisabledError(
            "Product Hunt sync is disabled. Set PRODUCT_HUNT_SYNC_ENABLED=true to enable it."
        )

    effective_fetcher = fetcher or ProductHuntClient(config=effective_config)
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    effective_lookup = topic_lookup or ProductHuntTopicLookup(effective_fetcher)

    result = run_sync(
        sync_request,
        fetcher=effective_fetcher,
        unit_of_work_factory=effective_uow,
        submitted_by=submitted_by,
        topic_lookup=effective_lookup,
    )

    log.info(
        f"Finished Product Hunt sync ({sync_request.mode.value}): created={result.created}, "
        f"skipped={result.skipped}, errors={result.errors}"
    )
    return result


def get_sync_statistics(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> SyncStatistics:
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    return collect_sync_statistics(unit_of_work_factory=effective_uow)


def check_product_hunt_connection(*, fetcher: ProductHuntClient | None = None) -> ConnectionCheck:
    effective_fetcher = fetcher or ProductHuntClient()
    check = effective_fetcher.check_connection()
    if check.ok:
        log.info("Product Hunt API reachable: %s posts returned", check.posts_count)
    else:
        log.warning("Product Hunt API check failed: %s", check.error)
    return check


def seed_default_categories(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[str]:
    """Insert the built-in category set, leaving existing slugs alone."""

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    inserted = seed_categories(unit_of_work_factory=effective_uow)
    log.info("Seeded %s categories", len(inserted))
    return inserted
