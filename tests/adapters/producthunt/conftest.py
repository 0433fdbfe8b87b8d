from __future__ import annotations

import pytest

from toolsync.config.producthunt import ProductHuntConfig, default_resilience


@pytest.fixture
def producthunt_config() -> ProductHuntConfig:
    return ProductHuntConfig(token="test-token", resilience=default_resilience())


@pytest.fixture
def post_payload() -> dict[str, object]:
    return {
        "id": "12345",
        "name": "Acme",
        "tagline": "Ship faster",
        "description": "Acme helps teams ship faster.",
        "website": "https://acme.dev",
        "thumbnail": {"url": "https://ph-files.imgix.net/acme.png"},
        "votesCount": 321,
        "commentsCount": 12,
        "createdAt": "2024-05-01T07:01:00Z",
        "makers": [{"name": "Ada"}, {"name": "Linus"}],
        "topics": {
            "edges": [
                {"node": {"name": "Developer Tools"}},
                {"node": {"name": "SaaS"}},
            ]
        },
    }
