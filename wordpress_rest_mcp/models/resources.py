"""Schemas for WordPress REST API resources.

Responses are validated at the API boundary so that tools render known
fields instead of passing arbitrary JSON through. Unknown fields are
ignored; missing required fields are a shape mismatch.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Rendered(BaseModel):
    """A ``{"rendered": ...}`` field (title, content, excerpt, caption...)."""

    model_config = ConfigDict(extra="ignore")

    rendered: str = ""
    protected: bool = False


class _Resource(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int


class WordPressPost(_Resource):
    """A post or page."""

    date: str | None = None
    modified: str | None = None
    slug: str = ""
    status: str
    type: str = "post"
    link: str = ""
    title: Rendered = Field(default_factory=Rendered)
    content: Rendered = Field(default_factory=Rendered)
    excerpt: Rendered = Field(default_factory=Rendered)
    author: int | None = None
    featured_media: int | None = None
    categories: list[int] = Field(default_factory=list)
    tags: list[int] = Field(default_factory=list)
    meta: dict[str, Any] | list[Any] = Field(default_factory=dict)


class DeletedPost(BaseModel):
    """Response of DELETE with ``force=true``."""

    model_config = ConfigDict(extra="ignore")

    deleted: bool
    previous: WordPressPost


class MediaDetails(BaseModel):
    model_config = ConfigDict(extra="ignore")

    width: int | None = None
    height: int | None = None
    filesize: int | None = None


class WordPressMedia(_Resource):
    """An attachment."""

    date: str | None = None
    slug: str = ""
    status: str = "inherit"
    link: str = ""
    title: Rendered = Field(default_factory=Rendered)
    caption: Rendered = Field(default_factory=Rendered)
    description: Rendered = Field(default_factory=Rendered)
    alt_text: str = ""
    media_type: str = ""
    mime_type: str = ""
    source_url: str = ""
    post: int | None = None
    media_details: MediaDetails = Field(default_factory=MediaDetails)


class WordPressUser(_Resource):
    """A user; roles and capabilities only appear with ``context=edit``."""

    name: str = ""
    username: str | None = None
    slug: str = ""
    email: str | None = None
    url: str = ""
    link: str = ""
    roles: list[str] = Field(default_factory=list)
    capabilities: dict[str, bool] = Field(default_factory=dict)

    def can(self, capability: str) -> bool:
        return bool(self.capabilities.get(capability, False))

    def summary(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "roles": self.roles,
            "capabilities": self.capabilities,
        }


class WordPressCategory(_Resource):
    name: str
    slug: str = ""
    description: str = ""
    count: int = 0
    parent: int = 0
    link: str = ""


class WordPressTag(_Resource):
    name: str
    slug: str = ""
    description: str = ""
    count: int = 0
    link: str = ""


class DeletedTerm(BaseModel):
    model_config = ConfigDict(extra="ignore")

    deleted: bool
    previous: dict[str, Any] = Field(default_factory=dict)
