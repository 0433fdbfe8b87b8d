"""Alembic entry points for the catalog schema."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Final

from alembic import command
from alembic.config import Config

from toolsync.config.storage import get_database_config

PROJECT_ROOT: Final[Path] = Path(__file__).resolve().parents[5]
PYPROJECT_PATH: Final[Path] = PROJECT_ROOT / "pyproject.toml"
MIGRATIONS_PATH: Final[Path] = Path(__file__).resolve().parent

# handled explicitly rather than copied into the main options
_RESERVED_OPTIONS: Final[frozenset[str]] = frozenset(
    {"script_location", "prepend_sys_path", "sqlalchemy.url"}
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def _pyproject_alembic_options() -> dict[str, str]:
    """Read ``[tool.alembic]``; a wheel install has no pyproject and gets ``{}``."""

    if not PYPROJECT_PATH.exists():
        return {}
    with PYPROJECT_PATH.open("rb") as pyproject_file:
        document = tomllib.load(pyproject_file)
    section = document.get("tool", {}).get("alembic", {})
    return {str(key): str(value) for key, value in section.items()}


def _script_location(options: dict[str, str]) -> Path:
    configured = options.get("script_location")
    if configured is None:
        return MIGRATIONS_PATH
    candidate = Path(configured)
    resolved = candidate if candidate.is_absolute() else PROJECT_ROOT / candidate
    return resolved if resolved.exists() else MIGRATIONS_PATH


def _build_config() -> Config:
    options = _pyproject_alembic_options()
    config = Config(toml_file=str(PYPROJECT_PATH)) if options else Config()
    config.set_main_option("script_location", str(_script_location(options)))
    if "sqlalchemy.url" in options:
        config.set_main_option("sqlalchemy.url", options["sqlalchemy.url"])
    for key, value in options.items():
        if key not in _RESERVED_OPTIONS:
            config.set_main_option(key, value)
    config.attributes["pyproject_options"] = options
    return config


def upgrade_head(*, engine: Engine | None = None, database_uri: str | None = None) -> None:
    """Bring the catalog tables up to the latest revision.

    With ``engine`` the upgrade runs on one of its connections, which lets
    in-memory SQLite databases keep the schema. Otherwise Alembic connects to
    ``database_uri`` or the configured catalog database.
    """

    config = _build_config()
    if engine is not None:
        with engine.begin() as connection:
            config.attributes["connection"] = connection
            command.upgrade(config, "head")
        return
    config.set_main_option("sqlalchemy.url", database_uri or get_database_config().uri)
    command.upgrade(config, "head")
