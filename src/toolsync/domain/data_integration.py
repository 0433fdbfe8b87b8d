"""Application services for syncing external products into the catalog."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from toolsync.config.sync import DEFAULT_SYNC_LIMIT, MAX_SYNC_LIMIT
from toolsync.domain.catalog import default_categories
from toolsync.domain.errors import InvalidInputError, ReconciliationError
from toolsync.domain.model import SyncStatistics, utcnow
from toolsync.domain.ports.fetching import RankingOrder, UnimplementedTopicLookup
from toolsync.domain.ports.unit_of_work import CatalogUnitOfWork
from toolsync.domain.reconciliation import Reconciler, ReconciliationPolicy
from toolsync.domain.taxonomy import TaxonomyMapper
from toolsync.domain.time_windows import DateWindow

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from toolsync.domain.model import Category, ExternalProduct
    from toolsync.domain.ports.fetching import ExternalCatalogFetcher, ToolTopicLookup

UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]

log = getLogger(__name__)

# upstream UI sends CREATED_AT for "newest first"
_ORDER_ALIASES = {"CREATED_AT": RankingOrder.NEWEST}


@dataclass(slots=True)
class SyncDetails:
    created: list[str] = field(default_factory=list[str])
    skipped: list[str] = field(default_factory=list[str])
    errors: list[str] = field(default_factory=list[str])


@dataclass(slots=True)
class SyncResult:
    """Outcome of one sync batch; counters always add up to the items processed."""

    created: int = 0
    skipped: int = 0
    errors: int = 0
    details: SyncDetails = field(default_factory=SyncDetails)

    @property
    def total(self) -> int:
        return self.created + self.skipped + self.errors

    def record_created(self, label: str) -> None:
        self.created += 1
        self.details.created.append(label)

    def record_skipped(self, label: str) -> None:
        self.skipped += 1
        self.details.skipped.append(label)

    def record_error(self, label: str) -> None:
        self.errors += 1
        self.details.errors.append(label)

    def to_dict(self) -> dict[str, object]:
        return {
            "created": self.created,
            "skipped": self.skipped,
            "errors": self.errors,
            "details": {
                "created": list(self.details.created),
                "skipped": list(self.details.skipped),
                "errors": list(self.details.errors),
            },
        }


class SyncMode(StrEnum):
    SINGLE_PRODUCT = "single_product"
    BY_DATE = "by_date"
    STALE_CATEGORIES = "stale_categories"
    TRENDING = "trending"


def _as_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _as_optional_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_limit(value: object) -> int:
    if value is None or value == "" or value == 0:
        return DEFAULT_SYNC_LIMIT
    if isinstance(value, bool):
        raise InvalidInputError(f"Invalid limit: {value!r}")
    if isinstance(value, float):
        # JSON clients may send 10.0 for 10
        if not value.is_integer():
            raise InvalidInputError(f"Invalid limit: {value!r}")
        return int(value)
    try:
        return int(str(value))
    except ValueError as exc:
        raise InvalidInputError(f"Invalid limit: {value!r}") from exc


def parse_order(value: object) -> RankingOrder:
    if value is None or value == "":
        return RankingOrder.VOTES
    key = str(value).strip().upper()
    if key in _ORDER_ALIASES:
        return _ORDER_ALIASES[key]
    try:
        return RankingOrder(key)
    except ValueError as exc:
        raise InvalidInputError(f"Unsupported order: {value!r}") from exc


@dataclass(frozen=True, slots=True)
class SyncRequest:
    """Inbound sync action as submitted by the admin panel."""

    limit: int = DEFAULT_SYNC_LIMIT
    force_sync: bool = False
    update_existing: bool = False
    sync_old_data: bool = False
    sync_by_date: bool = False
    sync_single_product: bool = False
    product_url: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    order: RankingOrder = RankingOrder.VOTES

    @classmethod
    def from_payload(cls, payload: Mapping[str, object]) -> SyncRequest:
        return cls(
            limit=_parse_limit(payload.get("limit")),
            force_sync=_as_bool(payload.get("forceSync", False)),
            update_existing=_as_bool(payload.get("updateExisting", False)),
            sync_old_data=_as_bool(payload.get("syncOldData", False)),
            sync_by_date=_as_bool(payload.get("syncByDate", False)),
            sync_single_product=_as_bool(payload.get("syncSingleProduct", False)),
            product_url=_as_optional_str(payload.get("productUrl")),
            start_date=_as_optional_str(payload.get("startDate")),
            end_date=_as_optional_str(payload.get("endDate")),
            order=parse_order(payload.get("orderBy")),
        )

    @property
    def mode(self) -> SyncMode:
        if self.sync_single_product and self.product_url:
            return SyncMode.SINGLE_PRODUCT
        if self.sync_by_date:
            return SyncMode.BY_DATE
        if self.sync_old_data:
            return SyncMode.STALE_CATEGORIES
        return SyncMode.TRENDING

    @property
    def policy(self) -> ReconciliationPolicy:
        if self.force_sync:
            return ReconciliationPolicy.FORCE_CREATE
        if self.update_existing:
            return ReconciliationPolicy.UPDATE_EXISTING
        return ReconciliationPolicy.SKIP_EXISTING

    def validate(self) -> None:
        if not 1 <= self.limit <= MAX_SYNC_LIMIT:
            raise InvalidInputError(f"Limit must be between 1 and {MAX_SYNC_LIMIT}")
        if self.mode is SyncMode.BY_DATE and not self.start_date:
            raise InvalidInputError("A start date is required for a date-ranged sync")


def sync_products(
    products: Iterable[ExternalProduct],
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    submitted_by: str,
    policy: ReconciliationPolicy = ReconciliationPolicy.SKIP_EXISTING,
    reconciler: Reconciler | None = None,
) -> SyncResult:
    """Reconcile products one at a time; a failing item never aborts the batch."""

    active = reconciler or Reconciler()
    result = SyncResult()

    for product in products:
        try:
            with unit_of_work_factory() as uow:
                mutated = active.reconcile(
                    product,
                    repository=uow.repositories.catalog,
                    submitted_by=submitted_by,
                    policy=policy,
                )
                uow.commit()
        except Exception as exc:  # noqa: BLE001
            error = ReconciliationError(product.name, exc)
            log.exception("Error syncing product %s", product.name)
            result.record_error(str(error))
            continue

        if mutated:
            result.record_created(product.name)
        else:
            result.record_skipped(product.name)

    log.info(
        "Sync batch finished (%s): created=%s, skipped=%s, errors=%s",
        policy.value,
        result.created,
        result.skipped,
        result.errors,
    )
    return result


def sync_single_product(
    url: str,
    *,
    fetcher: ExternalCatalogFetcher,
    unit_of_work_factory: UnitOfWorkFactory,
    submitted_by: str,
    policy: ReconciliationPolicy = ReconciliationPolicy.SKIP_EXISTING,
    reconciler: Reconciler | None = None,
) -> SyncResult:
    """Sync one product by URL or slug; an unknown product is a skip, not a failure."""

    product = fetcher.get_product_by_url(url)
    if product is None:
        log.info("Product %s not found upstream", url)
        result = SyncResult()
        result.record_skipped(f"{url}: product not found on Product Hunt")
        return result

    return sync_products(
        [product],
        unit_of_work_factory=unit_of_work_factory,
        submitted_by=submitted_by,
        policy=policy,
        reconciler=reconciler,
    )


def sync_stale_categories(
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    topic_lookup: ToolTopicLookup | None = None,
    mapper: TaxonomyMapper | None = None,
) -> SyncResult:
    """Best-effort category backfill for published tools that have none."""

    lookup = topic_lookup or UnimplementedTopicLookup()
    active_mapper = mapper or TaxonomyMapper()
    result = SyncResult()

    with unit_of_work_factory() as uow:
        tools = uow.repositories.catalog.list_tools_without_category()
        categories = uow.repositories.catalog.list_categories()

    log.info("Found %s tools without a category", len(tools))

    for tool in tools:
        if not lookup.available:
            result.record_skipped(f"{tool.name}: no external data (topic lookup not configured)")
            continue
        try:
            topics = lookup.topics_for(tool)
            if not topics:
                result.record_skipped(f"{tool.name}: no external data")
                continue
            category_id = active_mapper.map_topics(topics, categories)
            if category_id is None:
                result.record_skipped(f"{tool.name}: no matching category")
                continue
            tool.category_id = category_id
            tool.updated_at = utcnow()
            with unit_of_work_factory() as uow:
                uow.repositories.catalog.update_tool(tool)
                uow.commit()
        except Exception as exc:  # noqa: BLE001
            log.exception("Error backfilling category for %s", tool.name)
            result.record_error(str(ReconciliationError(tool.name, exc)))
            continue
        result.record_created(tool.name)

    return result


def run_sync(
    request: SyncRequest,
    *,
    fetcher: ExternalCatalogFetcher,
    unit_of_work_factory: UnitOfWorkFactory,
    submitted_by: str,
    reconciler: Reconciler | None = None,
    topic_lookup: ToolTopicLookup | None = None,
) -> SyncResult:
    """Dispatch a sync request to the mode it selects."""

    request.validate()
    active = reconciler or Reconciler()
    mode = request.mode
    log.info(
        "Starting catalog sync: mode=%s, policy=%s, limit=%s",
        mode.value,
        request.policy.value,
        request.limit,
    )

    if mode is SyncMode.SINGLE_PRODUCT:
        return sync_single_product(
            request.product_url or "",
            fetcher=fetcher,
            unit_of_work_factory=unit_of_work_factory,
            submitted_by=submitted_by,
            policy=request.policy,
            reconciler=active,
        )

    if mode is SyncMode.STALE_CATEGORIES:
        return sync_stale_categories(
            unit_of_work_factory=unit_of_work_factory,
            topic_lookup=topic_lookup,
            mapper=active.mapper,
        )

    if mode is SyncMode.BY_DATE:
        window = DateWindow.from_iso(request.start_date or "", request.end_date)
        products = fetcher.get_products_by_date(window, request.limit, order=request.order)
    else:
        products = fetcher.get_trending_products(request.limit, order=request.order)

    log.info("Fetched %s products from Product Hunt", len(products))
    return sync_products(
        products,
        unit_of_work_factory=unit_of_work_factory,
        submitted_by=submitted_by,
        policy=request.policy,
        reconciler=active,
    )


def collect_sync_statistics(*, unit_of_work_factory: UnitOfWorkFactory) -> SyncStatistics:
    with unit_of_work_factory() as uow:
        repository = uow.repositories.catalog
        return SyncStatistics(
            total_submissions=repository.count_submissions(),
            product_hunt_submissions=repository.count_synced_submissions(),
            last_sync_date=repository.latest_synced_submission_at(),
        )


def seed_categories(
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    categories: Sequence[Category] | None = None,
) -> list[str]:
    """Insert categories whose slug is not present yet; return the inserted slugs."""

    wanted = list(categories) if categories is not None else default_categories()
    inserted: list[str] = []
    with unit_of_work_factory() as uow:
        repository = uow.repositories.catalog
        existing = {category.slug for category in repository.list_categories()}
        for category in wanted:
            if category.slug in existing:
                continue
            repository.add_category(category)
            existing.add(category.slug)
            inserted.append(category.slug)
        uow.commit()
    return inserted
