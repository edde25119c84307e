"""Media library tools."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from ..models import GetMediaInput, UploadMediaInput, WordPressMedia
from ..session import get_service
from ..utils import format_date, handle_tool_exception, strip_html


def _format_size(size: int | None) -> str | None:
    if size is None:
        return None
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def render_media(media: WordPressMedia) -> str:
    lines = [
        f"**{strip_html(media.title.rendered) or media.slug or '(untitled)'}** (ID: {media.id})",
        f"- Type: {media.mime_type or media.media_type or 'unknown'}",
        f"- URL: {media.source_url}",
        f"- Uploaded: {format_date(media.date)}",
    ]
    details = media.media_details
    if details.width and details.height:
        lines.append(f"- Dimensions: {details.width}x{details.height}")
    size = _format_size(details.filesize)
    if size:
        lines.append(f"- Size: {size}")
    if media.alt_text:
        lines.append(f"- Alt text: {media.alt_text}")
    caption = strip_html(media.caption.rendered)
    if caption:
        lines.append(f"- Caption: {caption}")
    if media.post:
        lines.append(f"- Attached to post: {media.post}")
    return "\n".join(lines)


def register_media_tools(mcp):
    """Register media-related tools with the MCP server."""

    @mcp.tool(
        name="wordpress_upload_media",
        annotations={
            "title": "Upload Media to WordPress",
            "readOnlyHint": False,
            "destructiveHint": False,
            "idempotentHint": False,
            "openWorldHint": True,
        },
    )
    async def wordpress_upload_media(
        file_path: str,
        title: str | None = None,
        alt_text: str | None = None,
        caption: str | None = None,
        description: str | None = None,
        post_id: int | None = None,
        ctx: Context = None,
    ) -> str:
        """Upload a local file to the WordPress media library.

        Args:
            file_path: Path of the file on the machine running this server.
            title: Media title.
            alt_text: Alternative text for images.
            caption: Media caption.
            description: Media description.
            post_id: Post ID to attach the media to.

        Returns:
            str: Details of the uploaded media item.
        """
        try:
            params = UploadMediaInput(
                file_path=file_path,
                title=title,
                alt_text=alt_text,
                caption=caption,
                description=description,
                post_id=post_id,
            )
            media = await get_service().client.upload_media(params)
        except Exception as e:
            return handle_tool_exception(e, "upload media")

        return "Successfully uploaded media:\n\n" + render_media(media)

    @mcp.tool(
        name="wordpress_get_media",
        annotations={
            "title": "Get WordPress Media",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    async def wordpress_get_media(
        id: int | None = None,
        search: str | None = None,
        per_page: int = 10,
        page: int = 1,
        mime_type: str | None = None,
        ctx: Context = None,
    ) -> str:
        """Get one media item by ID, or list the media library.

        Args:
            id: Media ID. When given, the other filters are ignored.
            search: Search term for listing.
            per_page: Items per page (1-100, default 10).
            page: Page number (default 1).
            mime_type: Filter by MIME type (e.g. image/jpeg).

        Returns:
            str: Media details or a numbered list of media items.
        """
        try:
            params = GetMediaInput(
                id=id, search=search, per_page=per_page, page=page, mime_type=mime_type
            )
            client = get_service().client
            if params.id is not None:
                media = await client.get_media(params.id)
                return render_media(media)
            result = await client.list_media(params)
        except Exception as e:
            return handle_tool_exception(e, "get media")

        if not result.items:
            return "No media found matching your criteria."

        header = f"Found {len(result.items)} media item(s)"
        if result.total_pages:
            header += f" - Page {params.page} of {result.total_pages}"
        if result.total is not None:
            header += f" ({result.total} total)"
        entries = [
            f"{index}. {render_media(media)}"
            for index, media in enumerate(result.items, start=1)
        ]
        return header + ":\n\n" + "\n\n".join(entries)
