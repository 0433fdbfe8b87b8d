"""Existence checks for external products against the local catalog.

Matching is loose: an entry counts as a duplicate when either the name or the
website is exactly equal (case-sensitive, no URL normalization).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from toolsync.domain.model import ExternalProduct
    from toolsync.domain.ports.persistence import CatalogRepository


@dataclass(frozen=True, slots=True)
class ExistenceCheck:
    tool_exists: bool
    submission_exists: bool

    @property
    def exists(self) -> bool:
        return self.tool_exists or self.submission_exists


def check_existing(product: ExternalProduct, repository: CatalogRepository) -> ExistenceCheck:
    """Look for a published tool and a pending submission matching ``product``."""

    tool = repository.find_tool_by_name_or_website(product.name, product.website)
    submission = repository.find_submission_by_name_or_website(product.name, product.website)
    return ExistenceCheck(tool_exists=tool is not None, submission_exists=submission is not None)
