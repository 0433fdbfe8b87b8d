"""Apply a reconciliation policy to a single external product."""

from __future__ import annotations

from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from toolsync.domain.deduplication import check_existing
from toolsync.domain.model import SubmissionStatus, ToolSubmission, utcnow
from toolsync.domain.taxonomy import TaxonomyMapper

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime
    from uuid import UUID

    from toolsync.domain.model import ExternalProduct, Tool
    from toolsync.domain.ports.persistence import CatalogRepository

log = getLogger(__name__)

PROVENANCE_ID_KEY = "productHuntId"


class ReconciliationPolicy(StrEnum):
    SKIP_EXISTING = "skip_existing"
    FORCE_CREATE = "force_create"
    UPDATE_EXISTING = "update_existing"


def build_provenance(
    product: ExternalProduct,
    *,
    policy: ReconciliationPolicy,
    synced_at: datetime,
) -> dict[str, object]:
    """Metadata blob stored with a synced submission.

    Keys are read back by the admin UI and by the sync statistics.
    """

    info: dict[str, object] = {
        PROVENANCE_ID_KEY: product.id,
        "productHuntVotes": product.votes_count,
        "productHuntComments": product.comments_count,
        "productHuntMakers": list(product.makers),
        "productHuntTopics": list(product.topics),
        "productHuntDescription": product.description,
        "syncedAt": synced_at.isoformat(),
        "syncMode": policy.value,
    }
    if policy is ReconciliationPolicy.FORCE_CREATE:
        info["forceSync"] = True
    return info


class Reconciler:
    """Turn one external product into at most one catalog mutation."""

    def __init__(
        self,
        mapper: TaxonomyMapper | None = None,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.mapper = mapper or TaxonomyMapper()
        self._clock = clock

    def reconcile(
        self,
        product: ExternalProduct,
        *,
        repository: CatalogRepository,
        submitted_by: str,
        policy: ReconciliationPolicy = ReconciliationPolicy.SKIP_EXISTING,
    ) -> bool:
        """Return whether the catalog was mutated.

        Repository errors propagate to the caller untouched.
        """

        if policy is ReconciliationPolicy.FORCE_CREATE:
            self._create_submission(product, repository, submitted_by, policy)
            return True

        if policy is ReconciliationPolicy.UPDATE_EXISTING:
            tool = repository.find_tool_by_name_or_website(product.name, product.website)
            if tool is not None:
                self._update_tool(tool, product, repository)
                return True
            log.debug("No tool to update for %s, falling back to create", product.name)

        if check_existing(product, repository).exists:
            log.debug("Skipping %s: already in catalog", product.name)
            return False

        self._create_submission(product, repository, submitted_by, policy)
        return True

    def _map_category(self, product: ExternalProduct, repository: CatalogRepository) -> UUID | None:
        if not product.topics:
            return None
        return self.mapper.map_topics(product.topics, repository.list_categories())

    def _create_submission(
        self,
        product: ExternalProduct,
        repository: CatalogRepository,
        submitted_by: str,
        policy: ReconciliationPolicy,
    ) -> None:
        now = self._clock()
        submission = ToolSubmission(
            name=product.name,
            description=product.tagline,
            long_description=product.description,
            website=product.website,
            logo_url=product.thumbnail_url,
            category_id=self._map_category(product, repository),
            submitted_by=submitted_by,
            status=SubmissionStatus.PENDING,
            additional_info=build_provenance(product, policy=policy, synced_at=now),
            created_at=now,
            updated_at=now,
        )
        repository.create_submission(submission)
        log.info("Created tool submission for %s", product.name)

    def _update_tool(
        self,
        tool: Tool,
        product: ExternalProduct,
        repository: CatalogRepository,
    ) -> None:
        tool.name = product.name
        tool.description = product.tagline
        tool.long_description = product.description
        tool.website = product.website
        tool.logo_url = product.thumbnail_url
        category_id = self._map_category(product, repository)
        if category_id is not None:
            tool.category_id = category_id
        tool.updated_at = self._clock()
        repository.update_tool(tool)
        log.info("Updated tool %s from external listing", product.name)
