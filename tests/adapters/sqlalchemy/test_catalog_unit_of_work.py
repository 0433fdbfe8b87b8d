from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from toolsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    configured_engine,
    shutdown,
    startup,
)
from toolsync.domain.data_integration import sync_products
from toolsync.domain.model import Tool
from tests.helpers.catalog import make_product

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyCatalogUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b


def test_repositories_unavailable_outside_context(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyCatalogUnitOfWork()

    with pytest.raises(StartupError):
        _ = uow.repositories


def test_exception_rolls_back_pending_writes(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(RuntimeError), SqlAlchemyCatalogUnitOfWork() as uow:
        uow.repositories.catalog.add_tool(Tool(name="Ghost"))
        raise RuntimeError("boom")

    with SqlAlchemyCatalogUnitOfWork() as uow:
        assert uow.repositories.catalog.find_tool_by_name_or_website("Ghost", None) is None


def test_sync_batch_persists_and_is_idempotent(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    products = [make_product("Alpha"), make_product("Beta")]

    first = sync_products(
        products, unit_of_work_factory=SqlAlchemyCatalogUnitOfWork, submitted_by="admin"
    )
    second = sync_products(
        products, unit_of_work_factory=SqlAlchemyCatalogUnitOfWork, submitted_by="admin"
    )

    assert (first.created, first.skipped) == (2, 0)
    assert (second.created, second.skipped) == (0, 2)
    with SqlAlchemyCatalogUnitOfWork() as uow:
        assert uow.repositories.catalog.count_synced_submissions() == 2
