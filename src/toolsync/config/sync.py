"""Synchronization defaults for the catalog sync."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_SYNC_LIMIT = 20
MAX_SYNC_LIMIT = 50


@dataclass(frozen=True, slots=True)
class SyncConfig:
    default_limit: int = DEFAULT_SYNC_LIMIT
    max_limit: int = MAX_SYNC_LIMIT


def get_sync_config() -> SyncConfig:
    return SyncConfig()
