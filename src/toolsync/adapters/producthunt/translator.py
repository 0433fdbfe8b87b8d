"""Translate Product Hunt payloads into domain entities."""

from __future__ import annotations

from toolsync.domain.model import ExternalProduct

from .schema import PostPayload, PostPayloadInput


def _ensure_post_payload(post: PostPayloadInput) -> PostPayload:
    if isinstance(post, PostPayload):
        return post
    return PostPayload.model_validate(post)


def parse_product(post: PostPayloadInput) -> ExternalProduct:
    payload = _ensure_post_payload(post)
    return ExternalProduct(
        id=payload.id,
        name=payload.name,
        tagline=payload.tagline,
        description=payload.description,
        website=payload.website,
        thumbnail_url=payload.thumbnail.url if payload.thumbnail else None,
        votes_count=payload.votes_count,
        comments_count=payload.comments_count,
        created_at=payload.created_at,
        makers=tuple(maker.name for maker in payload.makers),
        topics=tuple(payload.topic_names),
    )
