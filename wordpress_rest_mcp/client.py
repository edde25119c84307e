"""Typed WordPress REST operations on top of WordPressHttpClient."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Generic, Literal, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, TypeAdapter, ValidationError

from .config import logger
from .errors import AuthErrorType, WordPressError
from .http_client import ApiResponse, WordPressHttpClient
from .models import (
    CreatePostInput,
    DeletedPost,
    DeletedTerm,
    DeletePostInput,
    GetMediaInput,
    ListPostsInput,
    ReadPostInput,
    UpdatePostInput,
    UploadMediaInput,
    WordPressCategory,
    WordPressMedia,
    WordPressPost,
    WordPressTag,
    WordPressUser,
)

T = TypeVar("T")

Taxonomy = Literal["categories", "tags"]

_TERM_MODELS: dict[str, type[BaseModel]] = {
    "categories": WordPressCategory,
    "tags": WordPressTag,
}

# Fields requested when a post is read together with its custom fields
_POST_FIELDS_WITH_META = (
    "id,date,modified,slug,status,type,link,title,content,excerpt,"
    "author,featured_media,categories,tags,meta"
)


@dataclass
class Page(Generic[T]):
    """One page of a collection with the X-WP-Total* headers."""

    items: list[T] = field(default_factory=list)
    total: int | None = None
    total_pages: int | None = None


def parse_as(type_: Any, data: Any, what: str) -> Any:
    """Validate a response body against a resource schema.

    Raises:
        WordPressError: UNKNOWN_ERROR with code ``invalid_response`` when the
            body does not match.
    """
    try:
        return TypeAdapter(type_).validate_python(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(p) for p in first["loc"]) or "body"
        logger.warning("Unexpected %s response shape: %s", what, e)
        raise WordPressError(
            AuthErrorType.UNKNOWN_ERROR,
            f"Unexpected response shape from WordPress for {what} "
            f"({location}: {first['msg']})",
            code="invalid_response",
        ) from e


def _page(response: ApiResponse, type_: type[T], what: str) -> Page[T]:
    return Page(
        items=parse_as(list[type_], response.data, what),
        total=response.total,
        total_pages=response.total_pages,
    )


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and an RFC 5987 ``filename*``."""
    fallback = filename.encode("ascii", "ignore").decode("ascii") or "upload"
    fallback = fallback.replace("\\", "\\\\").replace('"', '\\"')
    header = f'attachment; filename="{fallback}"'
    if not filename.isascii():
        header += f"; filename*=UTF-8''{quote(filename)}"
    return header


class WordPressClient:
    """Posts, pages, media, terms, users and settings for one site."""

    def __init__(self, http: WordPressHttpClient) -> None:
        self._http = http

    @property
    def http(self) -> WordPressHttpClient:
        return self._http

    # -- posts ---------------------------------------------------------------

    async def create_post(self, params: CreatePostInput) -> WordPressPost:
        response = await self._http.post(params.type.collection, params.to_payload())
        return parse_as(WordPressPost, response.data, params.type.value)

    async def read_post(self, params: ReadPostInput) -> WordPressPost:
        collection = params.type.collection
        query: dict[str, Any] = {"context": params.context}
        if params.include_meta:
            query["_fields"] = _POST_FIELDS_WITH_META

        if params.id is not None:
            response = await self._http.get(f"{collection}/{params.id}", params=query)
            return parse_as(WordPressPost, response.data, params.type.value)

        query["slug"] = params.slug
        response = await self._http.get(collection, params=query)
        posts = parse_as(list[WordPressPost], response.data, params.type.value)
        if not posts:
            raise WordPressError(
                AuthErrorType.NOT_FOUND,
                f"{params.type.value.capitalize()} not found with slug: {params.slug}",
                404,
            )
        return posts[0]

    async def update_post(self, params: UpdatePostInput) -> WordPressPost:
        response = await self._http.post(
            f"{params.type.collection}/{params.id}", params.to_payload()
        )
        return parse_as(WordPressPost, response.data, params.type.value)

    async def list_posts(self, params: ListPostsInput) -> Page[WordPressPost]:
        response = await self._http.get(params.type.collection, params=params.to_params())
        return _page(response, WordPressPost, params.type.value)

    async def delete_post(self, params: DeletePostInput) -> WordPressPost:
        """Trash a post, or delete it permanently with ``force``.

        Returns:
            The post as it was before deletion (forced) or as trashed.
        """
        query = {"force": "true"} if params.force else None
        response = await self._http.delete(
            f"{params.type.collection}/{params.id}", params=query
        )
        if params.force:
            return parse_as(DeletedPost, response.data, params.type.value).previous
        return parse_as(WordPressPost, response.data, params.type.value)

    # -- media ---------------------------------------------------------------

    async def upload_media(self, params: UploadMediaInput) -> WordPressMedia:
        path = Path(params.file_path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        response = await self._http.request(
            "POST",
            "/media",
            content=path.read_bytes(),
            headers={
                "Content-Type": content_type,
                "Content-Disposition": content_disposition(path.name),
            },
        )
        media = parse_as(WordPressMedia, response.data, "media")

        metadata = params.metadata()
        if metadata:
            response = await self._http.post(f"/media/{media.id}", metadata)
            media = parse_as(WordPressMedia, response.data, "media")
        logger.info("Uploaded %s as media %s", path.name, media.id)
        return media

    async def get_media(self, media_id: int) -> WordPressMedia:
        response = await self._http.get(f"/media/{media_id}")
        return parse_as(WordPressMedia, response.data, "media")

    async def list_media(self, params: GetMediaInput) -> Page[WordPressMedia]:
        response = await self._http.get("/media", params=params.to_params())
        return _page(response, WordPressMedia, "media")

    # -- categories and tags -------------------------------------------------

    async def list_terms(self, taxonomy: Taxonomy, params: dict[str, Any]) -> Page[Any]:
        response = await self._http.get(f"/{taxonomy}", params=params)
        return _page(response, _TERM_MODELS[taxonomy], taxonomy)

    async def get_term(self, taxonomy: Taxonomy, term_id: int) -> Any:
        response = await self._http.get(f"/{taxonomy}/{term_id}")
        return parse_as(_TERM_MODELS[taxonomy], response.data, taxonomy)

    async def create_term(self, taxonomy: Taxonomy, payload: dict[str, Any]) -> Any:
        response = await self._http.post(f"/{taxonomy}", payload)
        return parse_as(_TERM_MODELS[taxonomy], response.data, taxonomy)

    async def update_term(
        self, taxonomy: Taxonomy, term_id: int, payload: dict[str, Any]
    ) -> Any:
        response = await self._http.post(f"/{taxonomy}/{term_id}", payload)
        return parse_as(_TERM_MODELS[taxonomy], response.data, taxonomy)

    async def delete_term(self, taxonomy: Taxonomy, term_id: int) -> DeletedTerm:
        # Terms have no trash; WordPress rejects deletes without force
        response = await self._http.delete(f"/{taxonomy}/{term_id}", params={"force": "true"})
        return parse_as(DeletedTerm, response.data, taxonomy)

    # -- users and settings --------------------------------------------------

    async def current_user(self, context: str = "edit") -> WordPressUser:
        response = await self._http.get("/users/me", params={"context": context})
        return parse_as(WordPressUser, response.data, "user")

    async def site_settings(self) -> dict[str, Any]:
        response = await self._http.get("/settings")
        return parse_as(dict[str, Any], response.data, "settings")
