"""Tests for typed WordPress resource operations."""

import asyncio

import httpx
import pytest

from wordpress_rest_mcp.client import content_disposition
from wordpress_rest_mcp.errors import AuthErrorType, WordPressError
from wordpress_rest_mcp.models import (
    CreatePostInput,
    DeletePostInput,
    GetMediaInput,
    ListPostsInput,
    ReadPostInput,
    UpdatePostInput,
    UploadMediaInput,
)

from conftest import make_post, make_user


class TestPosts:
    """Tests for post and page operations."""

    def test_create_post_payload(self, wp_client, recorder):
        """Only given fields should be sent, without the content type."""
        recorder.responses["POST /posts"] = httpx.Response(201, json=make_post(status="draft"))
        post = asyncio.run(
            wp_client.create_post(CreatePostInput(title="Hello", content="Body", tags=[3]))
        )
        assert post.id == 1
        assert recorder.body() == {
            "title": "Hello",
            "content": "Body",
            "status": "draft",
            "tags": [3],
        }

    def test_create_page_uses_pages_collection(self, wp_client, recorder):
        """Pages should be created under /pages."""
        recorder.responses["POST /pages"] = httpx.Response(201, json=make_post(post_type="page"))
        asyncio.run(
            wp_client.create_post(CreatePostInput(title="About", content="Us", type="page"))
        )
        assert recorder.paths == ["POST /pages"]

    def test_read_post_by_id(self, wp_client, recorder):
        """Reading by id should fetch the single resource."""
        recorder.responses["GET /posts/7"] = httpx.Response(200, json=make_post(post_id=7))
        post = asyncio.run(wp_client.read_post(ReadPostInput(id=7)))
        assert post.id == 7
        assert recorder.requests[0].url.params["context"] == "view"

    def test_read_post_with_meta_requests_fields(self, wp_client, recorder):
        """include_meta should request the meta field explicitly."""
        recorder.responses["GET /posts/7"] = httpx.Response(200, json=make_post(post_id=7))
        asyncio.run(wp_client.read_post(ReadPostInput(id=7, include_meta=True)))
        assert "meta" in recorder.requests[0].url.params["_fields"]

    def test_read_post_by_slug(self, wp_client, recorder):
        """Reading by slug should query the collection."""
        recorder.responses["GET /posts"] = httpx.Response(200, json=[make_post(post_id=3)])
        post = asyncio.run(wp_client.read_post(ReadPostInput(slug="hello-world")))
        assert post.id == 3
        assert recorder.requests[0].url.params["slug"] == "hello-world"

    def test_read_post_missing_slug(self, wp_client, recorder):
        """An empty slug result should be NOT_FOUND."""
        recorder.responses["GET /posts"] = httpx.Response(200, json=[])
        with pytest.raises(WordPressError) as exc_info:
            asyncio.run(wp_client.read_post(ReadPostInput(slug="nope")))
        assert exc_info.value.error_type is AuthErrorType.NOT_FOUND
        assert "nope" in exc_info.value.message

    def test_update_post(self, wp_client, recorder):
        """Updates should POST only the changed fields."""
        recorder.responses["POST /posts/4"] = httpx.Response(200, json=make_post(post_id=4))
        asyncio.run(wp_client.update_post(UpdatePostInput(id=4, status="publish")))
        assert recorder.body() == {"status": "publish"}

    def test_list_posts(self, wp_client, recorder):
        """Listing should join category filters and keep pagination totals."""
        recorder.responses["GET /posts"] = httpx.Response(
            200,
            json=[make_post(post_id=1), make_post(post_id=2)],
            headers={"X-WP-Total": "12", "X-WP-TotalPages": "6"},
        )
        page = asyncio.run(
            wp_client.list_posts(ListPostsInput(per_page=2, categories=[1, 5]))
        )
        assert [p.id for p in page.items] == [1, 2]
        assert page.total == 12
        assert page.total_pages == 6
        params = recorder.requests[0].url.params
        assert params["categories"] == "1,5"
        assert params["orderby"] == "date"

    def test_trash_post(self, wp_client, recorder):
        """Deleting without force should return the trashed post."""
        recorder.responses["DELETE /posts/9"] = httpx.Response(
            200, json=make_post(post_id=9, status="trash")
        )
        post = asyncio.run(wp_client.delete_post(DeletePostInput(id=9)))
        assert post.status == "trash"
        assert "force" not in recorder.requests[0].url.params

    def test_force_delete_post(self, wp_client, recorder):
        """Forced deletes should unwrap the previous post."""
        recorder.responses["DELETE /posts/9"] = httpx.Response(
            200, json={"deleted": True, "previous": make_post(post_id=9)}
        )
        post = asyncio.run(wp_client.delete_post(DeletePostInput(id=9, force=True)))
        assert post.id == 9
        assert recorder.requests[0].url.params["force"] == "true"

    def test_unexpected_shape(self, wp_client, recorder):
        """A body missing required fields should be an invalid_response error."""
        recorder.responses["GET /posts/1"] = httpx.Response(200, json={"title": "no id"})
        with pytest.raises(WordPressError) as exc_info:
            asyncio.run(wp_client.read_post(ReadPostInput(id=1)))
        assert exc_info.value.code == "invalid_response"
        assert exc_info.value.error_type is AuthErrorType.UNKNOWN_ERROR


class TestMedia:
    """Tests for media operations."""

    def test_upload_sends_raw_bytes(self, wp_client, recorder, tmp_path):
        """Uploads should send file bytes with the guessed content type."""
        image = tmp_path / "photo.png"
        image.write_bytes(b"\x89PNG fake")
        recorder.responses["POST /media"] = httpx.Response(
            201, json={"id": 11, "source_url": "https://example.com/photo.png"}
        )
        media = asyncio.run(wp_client.upload_media(UploadMediaInput(file_path=str(image))))
        request = recorder.requests[0]
        assert media.id == 11
        assert request.content == b"\x89PNG fake"
        assert request.headers["Content-Type"] == "image/png"
        assert 'filename="photo.png"' in request.headers["Content-Disposition"]
        assert len(recorder.requests) == 1

    def test_upload_non_ascii_filename(self, wp_client, recorder, tmp_path):
        """Non-ASCII names should be sent as an encoded filename* parameter."""
        image = tmp_path / "café.png"
        image.write_bytes(b"\x89PNG fake")
        recorder.responses["POST /media"] = httpx.Response(201, json={"id": 13})
        media = asyncio.run(wp_client.upload_media(UploadMediaInput(file_path=str(image))))
        assert media.id == 13
        assert recorder.requests[0].headers["Content-Disposition"] == (
            "attachment; filename=\"caf.png\"; filename*=UTF-8''caf%C3%A9.png"
        )

    def test_content_disposition_escapes_quotes(self):
        """Quotes in the fallback name should be escaped."""
        assert content_disposition('my "best" shot.jpg') == (
            'attachment; filename="my \\"best\\" shot.jpg"'
        )

    def test_upload_then_sets_metadata(self, wp_client, recorder, tmp_path):
        """Metadata should be applied in a follow-up request."""
        doc = tmp_path / "notes.txt"
        doc.write_text("hello")
        recorder.responses["POST /media"] = httpx.Response(201, json={"id": 12})
        recorder.responses["POST /media/12"] = httpx.Response(
            200, json={"id": 12, "alt_text": "Notes", "post": 4}
        )
        media = asyncio.run(
            wp_client.upload_media(
                UploadMediaInput(file_path=str(doc), alt_text="Notes", post_id=4)
            )
        )
        assert media.alt_text == "Notes"
        assert recorder.body() == {"alt_text": "Notes", "post": 4}

    def test_list_media(self, wp_client, recorder):
        """Listing media should pass filters through."""
        recorder.responses["GET /media"] = httpx.Response(200, json=[{"id": 1}, {"id": 2}])
        page = asyncio.run(wp_client.list_media(GetMediaInput(mime_type="image/jpeg")))
        assert len(page.items) == 2
        assert recorder.requests[0].url.params["mime_type"] == "image/jpeg"


class TestTerms:
    """Tests for category and tag operations."""

    def test_create_category(self, wp_client, recorder):
        """Creating a category should post its payload."""
        recorder.responses["POST /categories"] = httpx.Response(
            201, json={"id": 5, "name": "News", "slug": "news"}
        )
        term = asyncio.run(wp_client.create_term("categories", {"name": "News"}))
        assert term.name == "News"

    def test_delete_tag_forces(self, wp_client, recorder):
        """Term deletion should always pass force=true."""
        recorder.responses["DELETE /tags/3"] = httpx.Response(
            200, json={"deleted": True, "previous": {"id": 3, "name": "old"}}
        )
        result = asyncio.run(wp_client.delete_term("tags", 3))
        assert result.deleted
        assert recorder.requests[0].url.params["force"] == "true"


class TestUsers:
    """Tests for user and settings lookups."""

    def test_current_user_capabilities(self, wp_client, recorder):
        """The current user should expose capability checks."""
        recorder.responses["GET /users/me"] = httpx.Response(
            200, json=make_user(capabilities={"edit_posts": True})
        )
        user = asyncio.run(wp_client.current_user())
        assert user.can("edit_posts")
        assert not user.can("upload_files")
        assert recorder.requests[0].url.params["context"] == "edit"
