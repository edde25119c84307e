"""Input models for media tools."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import MAX_PER_PAGE


class UploadMediaInput(BaseModel):
    """Input for uploading a local file to the media library."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    file_path: str = Field(..., description="Path of the local file.", min_length=1)
    title: str | None = None
    alt_text: str | None = None
    caption: str | None = None
    description: str | None = None
    post_id: int | None = Field(default=None, description="Attach to post.", ge=1)

    @field_validator("file_path")
    @classmethod
    def validate_file_path(cls, v: str) -> str:
        path = Path(v).expanduser()
        if not path.is_file():
            raise ValueError(f"File not found: {v}")
        return str(path)

    def metadata(self) -> dict[str, object]:
        data = self.model_dump(
            include={"title", "alt_text", "caption", "description"}, exclude_none=True
        )
        if self.post_id is not None:
            data["post"] = self.post_id
        return data


class GetMediaInput(BaseModel):
    """Input for fetching one media item or listing the library."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    id: int | None = Field(default=None, ge=1)
    search: str | None = Field(default=None, max_length=200)
    per_page: int = Field(default=10, ge=1, le=MAX_PER_PAGE)
    page: int = Field(default=1, ge=1)
    mime_type: str | None = Field(default=None, max_length=100)

    def to_params(self) -> dict[str, object]:
        params: dict[str, object] = {"per_page": self.per_page, "page": self.page}
        if self.search:
            params["search"] = self.search
        if self.mime_type:
            params["mime_type"] = self.mime_type
        return params
