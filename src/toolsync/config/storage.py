"""Where the catalog database lives.

``DATABASE_URI`` wins outright. Without it the catalog is a SQLite file named
``TOOLSYNC_DB_FILENAME`` (default ``toolsync.db``) under ``TOOLSYNC_DATA_DIR``,
falling back to the platform's per-user data directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "toolsync"
CATALOG_DB_FILENAME: Final[str] = "toolsync.db"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Local directory holding the SQLite catalog file."""

    data_dir: Path
    catalog_filename: str = CATALOG_DB_FILENAME

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def catalog_path(self, *, create_dir: bool = True) -> Path:
        directory = self.resolve_data_dir()
        if create_dir:
            directory.mkdir(parents=True, exist_ok=True)
        return directory / self.catalog_filename

    def catalog_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.catalog_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _platform_data_dir() -> Path:
    if os.name == "nt":
        root = os.getenv("LOCALAPPDATA")
        root_path = Path(root) if root else Path.home() / "AppData" / "Local"
    else:
        root = os.getenv("XDG_DATA_HOME")
        root_path = Path(root) if root else Path.home() / ".local" / "share"
    return (root_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    configured_dir = os.getenv("TOOLSYNC_DATA_DIR")
    filename = os.getenv("TOOLSYNC_DB_FILENAME") or CATALOG_DB_FILENAME
    return StorageConfig(
        data_dir=Path(configured_dir) if configured_dir else _platform_data_dir(),
        catalog_filename=filename,
    )


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """Resolve the catalog database URI, creating the SQLite directory if needed."""

    explicit_uri = os.getenv("DATABASE_URI")
    if explicit_uri:
        return DatabaseConfig(uri=explicit_uri)
    return DatabaseConfig(uri=(storage or get_storage_config()).catalog_uri())
