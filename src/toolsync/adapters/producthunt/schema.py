"""Pydantic models describing the Product Hunt GraphQL payloads."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class ProductHuntBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class MediaPayload(ProductHuntBaseModel):
    url: str | None = None

    _normalize_url = field_validator("url", mode="before")(_blank_to_none)


class MakerPayload(ProductHuntBaseModel):
    name: str


class TopicNode(ProductHuntBaseModel):
    name: str


class TopicEdge(ProductHuntBaseModel):
    node: TopicNode


class TopicConnection(ProductHuntBaseModel):
    edges: list[TopicEdge] = Field(default_factory=list[TopicEdge])


class PostPayload(ProductHuntBaseModel):
    id: str
    name: str
    tagline: str = ""
    description: str | None = None
    website: str | None = None
    thumbnail: MediaPayload | None = None
    votes_count: int = Field(default=0, alias="votesCount")
    comments_count: int = Field(default=0, alias="commentsCount")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    makers: list[MakerPayload] = Field(default_factory=list[MakerPayload])
    topics: TopicConnection = Field(default_factory=TopicConnection)

    _normalize_optional = field_validator("description", "website", mode="before")(
        _blank_to_none
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        return str(value) if isinstance(value, int) else value

    @field_validator("tagline", mode="before")
    @classmethod
    def _tagline_default(cls, value: object) -> object:
        return "" if value is None else value

    @property
    def topic_names(self) -> list[str]:
        return [edge.node.name for edge in self.topics.edges]


class PostEdge(ProductHuntBaseModel):
    node: PostPayload


class PostConnection(ProductHuntBaseModel):
    edges: list[PostEdge]


class PostData(ProductHuntBaseModel):
    post: PostPayload | None = None


class PostsData(ProductHuntBaseModel):
    posts: PostConnection


class PostResponse(ProductHuntBaseModel):
    data: PostData


class PostsResponse(ProductHuntBaseModel):
    data: PostsData


PostPayloadInput = PostPayload | Mapping[str, object]
