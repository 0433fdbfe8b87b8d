"""Catalog domain model.

``ExternalProduct`` is the transient view of an upstream listing. ``Tool`` and
``ToolSubmission`` are the persisted catalog entries; they share one shape and
are mapped onto two tables by the persistence adapter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from uuid import UUID, uuid4


def new_id() -> UUID:
    return uuid4()


def utcnow() -> datetime:
    return datetime.now(UTC)


class SubmissionStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalProduct:
    """A listing fetched from the external catalog; immutable per fetch."""

    id: str
    name: str
    tagline: str = ""
    description: str | None = None
    website: str | None = None
    thumbnail_url: str | None = None
    votes_count: int = 0
    comments_count: int = 0
    created_at: datetime | None = None
    makers: tuple[str, ...] = ()
    topics: tuple[str, ...] = ()


@dataclass(eq=False, kw_only=True)
class Category:
    """Admin-curated category; never created by the sync."""

    name: str
    slug: str
    description: str | None = None
    id: UUID = field(default_factory=new_id)


@dataclass(eq=False, kw_only=True)
class CatalogEntry:
    """Fields shared by published tools and pending submissions."""

    name: str
    website: str | None = None
    description: str | None = None
    long_description: str | None = None
    logo_url: str | None = None
    category_id: UUID | None = None
    submitted_by: str | None = None
    additional_info: dict[str, object] = field(default_factory=dict[str, object])
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    id: UUID = field(default_factory=new_id)

    def matches(self, *, name: str, website: str | None) -> bool:
        """Loose duplicate check: exact name or exact website."""

        if self.name == name:
            return True
        return website is not None and self.website == website


@dataclass(eq=False, kw_only=True)
class Tool(CatalogEntry):
    upvotes: int = 0
    total_reviews: int = 0
    overall_score: float = 0.0


@dataclass(eq=False, kw_only=True)
class ToolSubmission(CatalogEntry):
    status: SubmissionStatus = SubmissionStatus.PENDING


@dataclass(frozen=True, slots=True)
class SyncStatistics:
    total_submissions: int
    product_hunt_submissions: int
    last_sync_date: datetime | None
