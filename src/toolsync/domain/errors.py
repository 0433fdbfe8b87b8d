"""Error taxonomy for the catalog sync."""

from __future__ import annotations

from toolsync.config.errors import ConfigurationError, MissingConfigurationError


class SyncError(RuntimeError):
    """Base class for catalog sync failures."""


class InvalidInputError(SyncError, ValueError):
    """Raised when a sync request or product URL cannot be interpreted."""


class UpstreamError(SyncError):
    """Raised when the external catalog API answers with an error."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ReconciliationError(SyncError):
    """A single record failed to reconcile; recorded, never raised out of a batch."""

    def __init__(self, product_name: str, cause: BaseException) -> None:
        super().__init__(f"{product_name}: {cause}")
        self.product_name = product_name
        self.cause = cause


__all__ = [
    "ConfigurationError",
    "InvalidInputError",
    "MissingConfigurationError",
    "ReconciliationError",
    "SyncError",
    "UpstreamError",
]
