"""Input models for category and tag tools."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .base import MAX_PER_PAGE, TermAction


class ManageTermsInput(BaseModel):
    """Shared input for managing categories and tags."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    action: TermAction
    id: int | None = Field(default=None, ge=1)
    name: str | None = Field(default=None, min_length=1, max_length=200)
    slug: str | None = Field(default=None, max_length=200)
    description: str | None = None
    search: str | None = Field(default=None, max_length=200)
    per_page: int = Field(default=20, ge=1, le=MAX_PER_PAGE)
    page: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def check_action_requirements(self) -> ManageTermsInput:
        if self.action in (TermAction.READ, TermAction.UPDATE, TermAction.DELETE):
            if self.id is None:
                raise ValueError(f"'id' is required for action '{self.action.value}'")
        if self.action is TermAction.CREATE and not self.name:
            raise ValueError("'name' is required for action 'create'")
        return self

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(
            include={"name", "slug", "description"}, exclude_none=True
        )

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"per_page": self.per_page, "page": self.page}
        if self.search:
            params["search"] = self.search
        return params


class ManageCategoriesInput(ManageTermsInput):
    """Input for managing categories."""

    parent: int | None = Field(default=None, ge=0)

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        if self.parent is not None:
            payload["parent"] = self.parent
        return payload


class ManageTagsInput(ManageTermsInput):
    """Input for managing tags."""
