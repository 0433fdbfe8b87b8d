from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import inspect

from toolsync.adapters.sqlalchemy.unit_of_work import SqlAlchemyCatalogUnitOfWork
from toolsync.domain.model import Category, SubmissionStatus, Tool, ToolSubmission

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.engine import Engine

type UowFactory = Callable[[], SqlAlchemyCatalogUnitOfWork]


def test_migrations_create_catalog_tables(sqlite_engine: Engine) -> None:
    tables = set(inspect(sqlite_engine).get_table_names())

    assert {"category", "tool", "tool_submission", "alembic_version"} <= tables


def test_submission_round_trips_with_metadata(sqlite_unit_of_work: UowFactory) -> None:
    created_at = datetime(2024, 5, 1, 8, 30, tzinfo=UTC)
    with sqlite_unit_of_work() as uow:
        category = Category(name="Development", slug="development")
        uow.repositories.catalog.add_category(category)
        uow.repositories.catalog.create_submission(
            ToolSubmission(
                name="Acme",
                website="https://acme.dev",
                category_id=category.id,
                additional_info={"productHuntId": "123", "productHuntTopics": ["SaaS"]},
                created_at=created_at,
                updated_at=created_at,
            )
        )
        uow.commit()

    with sqlite_unit_of_work() as uow:
        found = uow.repositories.catalog.find_submission_by_name_or_website(
            "Other", "https://acme.dev"
        )

    assert found is not None
    assert found.name == "Acme"
    assert found.status is SubmissionStatus.PENDING
    assert found.category_id == category.id
    assert found.additional_info["productHuntTopics"] == ["SaaS"]
    assert found.created_at == created_at


def test_find_tool_matches_name_or_website(sqlite_unit_of_work: UowFactory) -> None:
    with sqlite_unit_of_work() as uow:
        uow.repositories.catalog.add_tool(Tool(name="Acme", website="https://acme.dev"))
        uow.repositories.catalog.add_tool(Tool(name="Loose", website=None))
        uow.commit()

    with sqlite_unit_of_work() as uow:
        repo = uow.repositories.catalog
        by_name = repo.find_tool_by_name_or_website("Acme", "https://elsewhere.dev")
        by_site = repo.find_tool_by_name_or_website("Renamed", "https://acme.dev")
        missing = repo.find_tool_by_name_or_website("acme", None)

    assert by_name is not None
    assert by_site is not None
    assert by_name.id == by_site.id
    assert missing is None


def test_update_tool_merges_detached_instance(sqlite_unit_of_work: UowFactory) -> None:
    tool = Tool(name="Acme", upvotes=9)
    with sqlite_unit_of_work() as uow:
        uow.repositories.catalog.add_tool(tool)
        uow.commit()

    tool.description = "Fresh tagline"
    with sqlite_unit_of_work() as uow:
        uow.repositories.catalog.update_tool(tool)
        uow.commit()

    with sqlite_unit_of_work() as uow:
        [stored] = uow.repositories.catalog.list_tools_without_category()

    assert stored.description == "Fresh tagline"
    assert stored.upvotes == 9


def test_list_tools_without_category(sqlite_unit_of_work: UowFactory) -> None:
    with sqlite_unit_of_work() as uow:
        category = Category(name="Design", slug="design")
        uow.repositories.catalog.add_category(category)
        uow.repositories.catalog.add_tool(Tool(name="Bare"))
        uow.repositories.catalog.add_tool(Tool(name="Filed", category_id=category.id))
        uow.commit()

    with sqlite_unit_of_work() as uow:
        names = [tool.name for tool in uow.repositories.catalog.list_tools_without_category()]
        categories = uow.repositories.catalog.list_categories()

    assert names == ["Bare"]
    assert [c.slug for c in categories] == ["design"]


def test_sync_statistics_queries(sqlite_unit_of_work: UowFactory) -> None:
    older = datetime(2024, 1, 1, tzinfo=UTC)
    newer = datetime(2024, 2, 1, tzinfo=UTC)
    with sqlite_unit_of_work() as uow:
        repo = uow.repositories.catalog
        repo.create_submission(
            ToolSubmission(name="Old", additional_info={"productHuntId": "1"}, created_at=older)
        )
        repo.create_submission(
            ToolSubmission(name="New", additional_info={"productHuntId": "2"}, created_at=newer)
        )
        repo.create_submission(ToolSubmission(name="Manual", created_at=datetime.now(UTC)))
        uow.commit()

    with sqlite_unit_of_work() as uow:
        repo = uow.repositories.catalog
        assert repo.count_submissions() == 3
        assert repo.count_synced_submissions() == 2
        assert repo.latest_synced_submission_at() == newer


def test_statistics_on_empty_catalog(sqlite_unit_of_work: UowFactory) -> None:
    with sqlite_unit_of_work() as uow:
        repo = uow.repositories.catalog
        assert repo.count_submissions() == 0
        assert repo.count_synced_submissions() == 0
        assert repo.latest_synced_submission_at() is None
