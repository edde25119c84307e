"""Input models for post tools."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .base import MAX_PER_PAGE, Order, OrderBy, PostStatus, PostType


class CreatePostInput(BaseModel):
    """Input for creating a post or page."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    title: str = Field(..., description="Post title.", min_length=1)
    content: str = Field(..., description="Post content (HTML or plain text).")
    status: PostStatus = Field(default=PostStatus.DRAFT, description="Post status.")
    type: PostType = Field(default=PostType.POST, description="Content type.")
    categories: list[int] | None = Field(default=None, description="Category IDs.")
    tags: list[int] | None = Field(default=None, description="Tag IDs.")
    featured_media: int | None = Field(default=None, description="Featured image ID.", ge=0)
    excerpt: str | None = Field(default=None, description="Post excerpt.")
    meta: dict[str, Any] | None = Field(default=None, description="Custom meta fields.")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude={"type"}, exclude_none=True)


class ReadPostInput(BaseModel):
    """Input for reading a single post by ID or slug."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    id: int | None = Field(default=None, description="Post ID.", ge=1)
    slug: str | None = Field(default=None, description="Post slug.", min_length=1)
    type: PostType = Field(default=PostType.POST)
    include_meta: bool = Field(default=False, description="Include custom fields.")
    context: str = Field(default="view", pattern="^(view|edit)$")

    @model_validator(mode="after")
    def require_id_or_slug(self) -> ReadPostInput:
        if self.id is None and self.slug is None:
            raise ValueError("Either 'id' or 'slug' must be provided")
        return self


class UpdatePostInput(BaseModel):
    """Input for updating an existing post. Unset fields are left alone."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    id: int = Field(..., description="Post ID.", ge=1)
    type: PostType = Field(default=PostType.POST)
    title: str | None = None
    content: str | None = None
    status: PostStatus | None = None
    categories: list[int] | None = None
    tags: list[int] | None = None
    featured_media: int | None = Field(default=None, ge=0)
    excerpt: str | None = None
    meta: dict[str, Any] | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude={"id", "type"}, exclude_none=True)


class ListPostsInput(BaseModel):
    """Input for listing posts."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    per_page: int = Field(default=10, ge=1, le=MAX_PER_PAGE)
    page: int = Field(default=1, ge=1)
    type: PostType = Field(default=PostType.POST)
    search: str | None = Field(default=None, max_length=200)
    author: int | None = Field(default=None, ge=1)
    categories: list[int] | None = None
    tags: list[int] | None = None
    status: str | None = Field(default=None, max_length=50)
    orderby: OrderBy = OrderBy.DATE
    order: Order = Order.DESC
    before: str | None = Field(default=None, description="ISO 8601 date.")
    after: str | None = Field(default=None, description="ISO 8601 date.")

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "per_page": self.per_page,
            "page": self.page,
            "orderby": self.orderby.value,
            "order": self.order.value,
        }
        for key in ("search", "author", "status", "before", "after"):
            value = getattr(self, key)
            if value is not None:
                params[key] = value
        if self.categories:
            params["categories"] = ",".join(str(c) for c in self.categories)
        if self.tags:
            params["tags"] = ",".join(str(t) for t in self.tags)
        return params


class DeletePostInput(BaseModel):
    """Input for deleting a post."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    id: int = Field(..., ge=1)
    type: PostType = Field(default=PostType.POST)
    force: bool = Field(default=False, description="Bypass the trash.")
