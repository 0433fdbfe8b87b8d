"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, cast, func, or_, select

from toolsync.adapters.sqlalchemy.mappings import (
    category_table,
    tool_submission_table,
    tool_table,
)
from toolsync.domain.model import Category, Tool, ToolSubmission
from toolsync.domain.reconciliation import PROVENANCE_ID_KEY

if TYPE_CHECKING:
    from datetime import datetime

    from sqlalchemy import ColumnElement, Table
    from sqlalchemy.orm import Session


def _name_or_website(table: Table, name: str, website: str | None) -> ColumnElement[bool]:
    conditions = [table.c.name == name]
    if website is not None:
        conditions.append(table.c.website == website)
    return or_(*conditions)


class SqlAlchemyCatalogRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def find_tool_by_name_or_website(self, name: str, website: str | None) -> Tool | None:
        stmt = select(Tool).where(_name_or_website(tool_table, name, website)).limit(1)
        return self.session.scalars(stmt).first()

    def find_submission_by_name_or_website(
        self, name: str, website: str | None
    ) -> ToolSubmission | None:
        stmt = (
            select(ToolSubmission)
            .where(_name_or_website(tool_submission_table, name, website))
            .limit(1)
        )
        return self.session.scalars(stmt).first()

    def create_submission(self, submission: ToolSubmission) -> None:
        self.session.add(submission)
        self.session.flush()

    def update_tool(self, tool: Tool) -> None:
        self.session.merge(tool)
        self.session.flush()

    def add_tool(self, tool: Tool) -> None:
        self.session.add(tool)

    def list_categories(self) -> list[Category]:
        stmt = select(Category).order_by(category_table.c.name)
        return list(self.session.scalars(stmt))

    def add_category(self, category: Category) -> None:
        self.session.add(category)

    def list_tools_without_category(self) -> list[Tool]:
        stmt = select(Tool).where(tool_table.c.category_id.is_(None)).order_by(tool_table.c.name)
        return list(self.session.scalars(stmt))

    def count_submissions(self) -> int:
        stmt = select(func.count()).select_from(tool_submission_table)
        return self.session.execute(stmt).scalar_one()

    def count_synced_submissions(self) -> int:
        stmt = (
            select(func.count())
            .select_from(tool_submission_table)
            .where(_is_synced())
        )
        return self.session.execute(stmt).scalar_one()

    def latest_synced_submission_at(self) -> datetime | None:
        created_at = tool_submission_table.c.created_at
        stmt = select(created_at).where(_is_synced()).order_by(created_at.desc()).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()


def _is_synced() -> ColumnElement[bool]:
    # provenance lives in the JSON blob
    return cast(tool_submission_table.c.additional_info, String).like(f"%{PROVENANCE_ID_KEY}%")
