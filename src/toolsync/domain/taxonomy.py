"""Map free-form external topics onto the fixed internal category set."""

from __future__ import annotations

import json
from collections.abc import Mapping
from importlib import resources
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path
    from uuid import UUID

    from toolsync.domain.model import Category

log = getLogger(__name__)

TOPIC_MAP_RESOURCE = "topic_categories.json"


def normalize_topic(topic: str) -> str:
    return topic.strip().lower()


def load_topic_map(path: Path | None = None) -> dict[str, str]:
    """Load the external-topic to category-slug table.

    Defaults to the table packaged with toolsync; keys are normalized on load.
    """

    if path is None:
        raw = resources.files("toolsync.domain.data").joinpath(TOPIC_MAP_RESOURCE).read_text(
            encoding="utf-8"
        )
    else:
        raw = path.read_text(encoding="utf-8")
    payload = json.loads(raw)
    if not isinstance(payload, Mapping):
        raise ValueError("Topic map must be a JSON object of topic -> category slug")
    return {normalize_topic(str(topic)): str(slug) for topic, slug in payload.items()}


class TaxonomyMapper:
    """First-topic-wins mapping: direct table lookup, then substring match."""

    def __init__(self, topic_map: Mapping[str, str] | None = None) -> None:
        source = load_topic_map() if topic_map is None else topic_map
        self._topic_map = {normalize_topic(topic): slug for topic, slug in source.items()}

    @property
    def topic_map(self) -> Mapping[str, str]:
        return self._topic_map

    def map_topics(self, topics: Iterable[str], categories: Sequence[Category]) -> UUID | None:
        """Return the id of the category matched by the first matching topic."""

        by_slug = {category.slug: category for category in categories}
        for topic in topics:
            normalized = normalize_topic(topic)
            if not normalized:
                continue
            category = self._direct_match(normalized, by_slug) or self._partial_match(
                normalized, categories
            )
            if category is not None:
                log.debug("Topic %r mapped to category %s", topic, category.slug)
                return category.id
        return None

    def _direct_match(self, topic: str, by_slug: Mapping[str, Category]) -> Category | None:
        slug = self._topic_map.get(topic)
        if slug is None:
            return None
        return by_slug.get(slug)

    @staticmethod
    def _partial_match(topic: str, categories: Sequence[Category]) -> Category | None:
        for category in categories:
            name = category.name.strip().lower()
            if not name:
                continue
            if name in topic or topic in name:
                return category
        return None
