"""SQLAlchemy mapping metadata for the catalog domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Dialect,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers

from toolsync.domain.model import Category, SubmissionStatus, Tool, ToolSubmission

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

category_table = Table(
    "category",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("slug", String, nullable=False, unique=True),
    Column("description", Text, nullable=True),
)


def _catalog_entry_columns() -> list[Column[object]]:
    return [
        Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
        Column("name", String, nullable=False, index=True),
        Column("website", String, nullable=True, index=True),
        Column("description", Text, nullable=True),
        Column("long_description", Text, nullable=True),
        Column("logo_url", String, nullable=True),
        Column(
            "category_id",
            UUIDColumnType,
            ForeignKey("category.id", ondelete="SET NULL"),
            nullable=True,
        ),
        Column("submitted_by", String, nullable=True),
        Column("additional_info", JSON, nullable=False),
        Column("created_at", UTCDateTime(), nullable=False),
        Column("updated_at", UTCDateTime(), nullable=False),
    ]


tool_table = Table(
    "tool",
    mapper_registry.metadata,
    *_catalog_entry_columns(),
    Column("upvotes", Integer, nullable=False, default=0),
    Column("total_reviews", Integer, nullable=False, default=0),
    Column("overall_score", Float, nullable=False, default=0.0),
)

tool_submission_table = Table(
    "tool_submission",
    mapper_registry.metadata,
    *_catalog_entry_columns(),
    Column(
        "status",
        Enum(SubmissionStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=SubmissionStatus.PENDING,
    ),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Category, category_table)
    mapper_registry.map_imperatively(Tool, tool_table)
    mapper_registry.map_imperatively(ToolSubmission, tool_submission_table)

    configure_mappers()
    return mapper_registry
