"""Ports for persisting catalog entries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime

    from toolsync.domain.model import Category, Tool, ToolSubmission


@runtime_checkable
class CatalogRepository(Protocol):
    """Persistence contract for tools, submissions and categories."""

    def find_tool_by_name_or_website(self, name: str, website: str | None) -> Tool | None: ...

    def find_submission_by_name_or_website(
        self, name: str, website: str | None
    ) -> ToolSubmission | None: ...

    def create_submission(self, submission: ToolSubmission) -> None: ...

    def add_tool(self, tool: Tool) -> None: ...

    def update_tool(self, tool: Tool) -> None: ...

    def list_categories(self) -> list[Category]: ...

    def add_category(self, category: Category) -> None: ...

    def list_tools_without_category(self) -> list[Tool]: ...

    def count_submissions(self) -> int: ...

    def count_synced_submissions(self) -> int: ...

    def latest_synced_submission_at(self) -> datetime | None: ...
