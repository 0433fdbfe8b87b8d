from __future__ import annotations

from datetime import UTC, datetime

import pytest

from toolsync.domain.model import SubmissionStatus, Tool, ToolSubmission
from toolsync.domain.reconciliation import Reconciler, ReconciliationPolicy, build_provenance
from toolsync.domain.taxonomy import TaxonomyMapper
from tests.helpers.catalog import InMemoryCatalogRepository, make_categories, make_product

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


def _reconciler() -> Reconciler:
    return Reconciler(TaxonomyMapper({"developer tools": "development"}), clock=lambda: FIXED_NOW)


def test_skip_existing_creates_pending_submission_with_provenance() -> None:
    categories = make_categories(("development", "Development"))
    repository = InMemoryCatalogRepository(categories=categories)
    product = make_product("Acme", topics=["Developer Tools"], tagline="Ship faster")

    mutated = _reconciler().reconcile(product, repository=repository, submitted_by="admin-1")

    assert mutated is True
    [submission] = repository.submissions
    assert submission.status is SubmissionStatus.PENDING
    assert submission.description == "Ship faster"
    assert submission.long_description == product.description
    assert submission.logo_url == product.thumbnail_url
    assert submission.category_id == categories[0].id
    assert submission.submitted_by == "admin-1"
    assert submission.created_at == FIXED_NOW
    info = submission.additional_info
    assert info["productHuntId"] == product.id
    assert info["productHuntVotes"] == product.votes_count
    assert info["productHuntTopics"] == ["Developer Tools"]
    assert info["syncMode"] == "skip_existing"
    assert info["syncedAt"] == FIXED_NOW.isoformat()
    assert "forceSync" not in info


def test_skip_existing_leaves_duplicates_alone() -> None:
    repository = InMemoryCatalogRepository(submissions=[ToolSubmission(name="Acme")])

    mutated = _reconciler().reconcile(
        make_product("Acme"), repository=repository, submitted_by="admin"
    )

    assert mutated is False
    assert len(repository.submissions) == 1


def test_force_create_ignores_existing_entries() -> None:
    repository = InMemoryCatalogRepository(
        tools=[Tool(name="Acme")], submissions=[ToolSubmission(name="Acme")]
    )

    mutated = _reconciler().reconcile(
        make_product("Acme"),
        repository=repository,
        submitted_by="admin",
        policy=ReconciliationPolicy.FORCE_CREATE,
    )

    assert mutated is True
    assert len(repository.submissions) == 2
    assert repository.submissions[-1].additional_info["forceSync"] is True


def test_update_existing_overwrites_listing_fields_only() -> None:
    categories = make_categories(("development", "Development"))
    tool = Tool(
        name="Acme",
        website="https://acme.dev",
        description="old",
        upvotes=42,
        total_reviews=7,
        overall_score=4.5,
    )
    repository = InMemoryCatalogRepository(tools=[tool], categories=categories)
    product = make_product(
        "Acme", website="https://acme.dev", topics=["Developer Tools"], tagline="new"
    )

    mutated = _reconciler().reconcile(
        product,
        repository=repository,
        submitted_by="admin",
        policy=ReconciliationPolicy.UPDATE_EXISTING,
    )

    assert mutated is True
    assert repository.updated_tools == [tool]
    assert tool.description == "new"
    assert tool.logo_url == product.thumbnail_url
    assert tool.category_id == categories[0].id
    assert tool.updated_at == FIXED_NOW
    assert (tool.upvotes, tool.total_reviews, tool.overall_score) == (42, 7, 4.5)
    assert repository.submissions == []


def test_update_existing_retains_category_when_mapper_misses() -> None:
    existing = make_categories(("design", "Design"))[0]
    tool = Tool(name="Acme", category_id=existing.id)
    repository = InMemoryCatalogRepository(tools=[tool], categories=[existing])

    _reconciler().reconcile(
        make_product("Acme", topics=["Gardening"]),
        repository=repository,
        submitted_by="admin",
        policy=ReconciliationPolicy.UPDATE_EXISTING,
    )

    assert tool.category_id == existing.id


def test_update_existing_falls_back_to_creation() -> None:
    repository = InMemoryCatalogRepository()

    mutated = _reconciler().reconcile(
        make_product("Fresh"),
        repository=repository,
        submitted_by="admin",
        policy=ReconciliationPolicy.UPDATE_EXISTING,
    )

    assert mutated is True
    assert [entry.name for entry in repository.submissions] == ["Fresh"]
    assert repository.submissions[0].additional_info["syncMode"] == "update_existing"


def test_update_existing_fallback_still_skips_pending_submission() -> None:
    repository = InMemoryCatalogRepository(submissions=[ToolSubmission(name="Acme")])

    mutated = _reconciler().reconcile(
        make_product("Acme"),
        repository=repository,
        submitted_by="admin",
        policy=ReconciliationPolicy.UPDATE_EXISTING,
    )

    assert mutated is False


def test_repository_errors_propagate() -> None:
    repository = InMemoryCatalogRepository()
    repository.fail_on_create.add("Acme")

    with pytest.raises(RuntimeError, match="database rejected Acme"):
        _reconciler().reconcile(make_product("Acme"), repository=repository, submitted_by="x")


def test_build_provenance_copies_makers_and_description() -> None:
    product = make_product("Acme", description="Long form")

    info = build_provenance(product, policy=ReconciliationPolicy.FORCE_CREATE, synced_at=FIXED_NOW)

    assert info["productHuntMakers"] == ["Ada"]
    assert info["productHuntDescription"] == "Long form"
    assert info["productHuntComments"] == 2
    assert info["forceSync"] is True
