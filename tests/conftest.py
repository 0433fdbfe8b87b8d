from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002

from toolsync.adapters.sqlalchemy import start_mappers
from toolsync.adapters.sqlalchemy.migrations import upgrade_head
from toolsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    shutdown,
    startup,
)
from tests.helpers.catalog import InMemoryCatalogRepository, UnitOfWorkRecorder

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PRODUCT_HUNT_DEVELOPER_TOKEN",
        "PRODUCT_HUNT_SYNC_ENABLED",
        "PRODUCT_HUNT_API_URL",
        "PRODUCT_HUNT_MAX_RETRIES",
        "PRODUCT_HUNT_RATE_LIMIT_CALLS",
        "PRODUCT_HUNT_RATE_LIMIT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def catalog_repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def uow_recorder(catalog_repository: InMemoryCatalogRepository) -> UnitOfWorkRecorder:
    return UnitOfWorkRecorder(catalog_repository)


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyCatalogUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyCatalogUnitOfWork:
        return SqlAlchemyCatalogUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
