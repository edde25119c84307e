"""Post and page tools for the WordPress REST API."""

from __future__ import annotations

from typing import Any, Literal

from mcp.server.fastmcp import Context

from ..models import (
    CreatePostInput,
    DeletePostInput,
    ListPostsInput,
    ReadPostInput,
    UpdatePostInput,
    WordPressPost,
)
from ..session import get_service
from ..utils import format_date, handle_tool_exception, strip_html, truncate


def _status_phrase(post: WordPressPost) -> str:
    if post.status == "publish":
        return "live on your site"
    return f"saved as {post.status}"


def render_post_summary(post: WordPressPost, index: int | None = None) -> str:
    prefix = f"{index}. " if index is not None else ""
    return (
        f"{prefix}**{strip_html(post.title.rendered) or '(no title)'}** (ID: {post.id})\n"
        f"   Status: {post.status} | Type: {post.type}\n"
        f"   Published: {format_date(post.date)}\n"
        f"   URL: {post.link}"
    )


def render_post(post: WordPressPost, include_meta: bool = False) -> str:
    lines = [
        f"**{strip_html(post.title.rendered) or '(no title)'}** (ID: {post.id})",
        "",
        "Details:",
        f"- Status: {post.status}",
        f"- Type: {post.type}",
        f"- Author: {post.author}",
        f"- Published: {format_date(post.date)}",
        f"- Modified: {format_date(post.modified)}",
        f"- URL: {post.link}",
    ]
    if post.categories:
        lines.append(f"- Categories: {', '.join(str(c) for c in post.categories)}")
    if post.tags:
        lines.append(f"- Tags: {', '.join(str(t) for t in post.tags)}")

    excerpt = strip_html(post.excerpt.rendered)
    if excerpt:
        lines += ["", "Excerpt:", excerpt]
    lines += ["", "Content:", truncate(strip_html(post.content.rendered)) or "(empty)"]

    if include_meta and isinstance(post.meta, dict) and post.meta:
        lines += ["", "Custom Fields:"]
        lines += [f"- {key}: {value}" for key, value in post.meta.items()]
    return "\n".join(lines)


def register_post_tools(mcp):
    """Register post-related tools with the MCP server."""

    @mcp.tool(
        name="wordpress_create_post",
        annotations={
            "title": "Create WordPress Post or Page",
            "readOnlyHint": False,
            "destructiveHint": False,
            "idempotentHint": False,
            "openWorldHint": True,
        },
    )
    async def wordpress_create_post(
        title: str,
        content: str,
        status: Literal["draft", "publish", "private", "pending"] = "draft",
        type: Literal["post", "page"] = "post",
        categories: list[int] | None = None,
        tags: list[int] | None = None,
        featured_media: int | None = None,
        excerpt: str | None = None,
        meta: dict[str, Any] | None = None,
        ctx: Context = None,
    ) -> str:
        """Create a new WordPress post or page.

        Args:
            title: The title of the post.
            content: The content of the post (HTML or plain text).
            status: draft, publish, private or pending (default draft).
            type: post or page (default post).
            categories: Category IDs.
            tags: Tag IDs.
            featured_media: Featured image (media) ID.
            excerpt: Post excerpt.
            meta: Custom meta fields registered for the REST API.

        Returns:
            str: Summary of the created post.
        """
        try:
            params = CreatePostInput(
                title=title,
                content=content,
                status=status,
                type=type,
                categories=categories,
                tags=tags,
                featured_media=featured_media,
                excerpt=excerpt,
                meta=meta,
            )
            post = await get_service().client.create_post(params)
        except Exception as e:
            return handle_tool_exception(e, "create post")

        lines = [
            f"Successfully created {params.type.value}: "
            f"**{strip_html(post.title.rendered)}**",
            "",
            "Details:",
            f"- ID: {post.id}",
            f"- Status: {post.status}",
            f"- Type: {post.type}",
            f"- Published: {format_date(post.date)}",
            f"- URL: {post.link}",
        ]
        excerpt_text = strip_html(post.excerpt.rendered)
        if excerpt_text:
            lines += ["", f"Excerpt: {excerpt_text}"]
        lines += ["", f"The {params.type.value} is {_status_phrase(post)}."]
        return "\n".join(lines)

    @mcp.tool(
        name="wordpress_read_post",
        annotations={
            "title": "Read WordPress Post",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    async def wordpress_read_post(
        id: int | None = None,
        slug: str | None = None,
        type: Literal["post", "page"] = "post",
        include_meta: bool = False,
        context: Literal["view", "edit"] = "view",
        ctx: Context = None,
    ) -> str:
        """Retrieve a WordPress post or page by ID or slug.

        Args:
            id: Post ID.
            slug: Post slug (used when no ID is given).
            type: post or page (default post).
            include_meta: Include custom meta fields in the response.
            context: Response context - view or edit (default view).

        Returns:
            str: Post details and plain-text content.
        """
        try:
            params = ReadPostInput(
                id=id, slug=slug, type=type, include_meta=include_meta, context=context
            )
            post = await get_service().client.read_post(params)
        except Exception as e:
            return handle_tool_exception(e, "read post")

        return render_post(post, include_meta=params.include_meta)

    @mcp.tool(
        name="wordpress_update_post",
        annotations={
            "title": "Update WordPress Post",
            "readOnlyHint": False,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    async def wordpress_update_post(
        id: int,
        type: Literal["post", "page"] = "post",
        title: str | None = None,
        content: str | None = None,
        status: Literal["draft", "publish", "private", "pending"] | None = None,
        categories: list[int] | None = None,
        tags: list[int] | None = None,
        featured_media: int | None = None,
        excerpt: str | None = None,
        meta: dict[str, Any] | None = None,
        ctx: Context = None,
    ) -> str:
        """Update an existing WordPress post or page.

        Only the fields that are given are changed.

        Args:
            id: Post ID.
            type: post or page (default post).
            title: New title.
            content: New content.
            status: New status.
            categories: Category IDs (replaces existing).
            tags: Tag IDs (replaces existing).
            featured_media: Featured image ID.
            excerpt: New excerpt.
            meta: Custom meta fields.

        Returns:
            str: Summary of the updated post.
        """
        try:
            params = UpdatePostInput(
                id=id,
                type=type,
                title=title,
                content=content,
                status=status,
                categories=categories,
                tags=tags,
                featured_media=featured_media,
                excerpt=excerpt,
                meta=meta,
            )
            post = await get_service().client.update_post(params)
        except Exception as e:
            return handle_tool_exception(e, "update post")

        return "\n".join(
            [
                f"Successfully updated {post.type}: **{strip_html(post.title.rendered)}**",
                "",
                "Details:",
                f"- ID: {post.id}",
                f"- Status: {post.status}",
                f"- Type: {post.type}",
                f"- Last Modified: {format_date(post.modified)}",
                f"- URL: {post.link}",
            ]
        )

    @mcp.tool(
        name="wordpress_list_posts",
        annotations={
            "title": "List WordPress Posts",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": True,
        },
    )
    async def wordpress_list_posts(
        per_page: int = 10,
        page: int = 1,
        type: Literal["post", "page"] = "post",
        search: str | None = None,
        author: int | None = None,
        categories: list[int] | None = None,
        tags: list[int] | None = None,
        status: str | None = None,
        orderby: Literal["date", "title", "id"] = "date",
        order: Literal["asc", "desc"] = "desc",
        before: str | None = None,
        after: str | None = None,
        ctx: Context = None,
    ) -> str:
        """List WordPress posts with optional filters.

        Args:
            per_page: Posts per page (1-100, default 10).
            page: Page number (default 1).
            type: post or page (default post).
            search: Search term.
            author: Author user ID.
            categories: Category IDs.
            tags: Tag IDs.
            status: Status filter (e.g. publish, draft).
            orderby: date, title or id (default date).
            order: asc or desc (default desc).
            before: Only items published before this ISO 8601 date.
            after: Only items published after this ISO 8601 date.

        Returns:
            str: Numbered list of posts with pagination info.
        """
        try:
            params = ListPostsInput(
                per_page=per_page,
                page=page,
                type=type,
                search=search,
                author=author,
                categories=categories,
                tags=tags,
                status=status,
                orderby=orderby,
                order=order,
                before=before,
                after=after,
            )
            result = await get_service().client.list_posts(params)
        except Exception as e:
            return handle_tool_exception(e, "list posts")

        if not result.items:
            return "No posts found matching your criteria."

        header = f"Found {len(result.items)} post(s)"
        if result.total_pages:
            header += f" - Page {params.page} of {result.total_pages}"
        if result.total is not None:
            header += f" ({result.total} total)"

        entries = [
            render_post_summary(post, index)
            for index, post in enumerate(result.items, start=1)
        ]
        return header + ":\n\n" + "\n\n".join(entries)

    @mcp.tool(
        name="wordpress_delete_post",
        annotations={
            "title": "Delete WordPress Post",
            "readOnlyHint": False,
            "destructiveHint": True,
            "idempotentHint": False,
            "openWorldHint": True,
        },
    )
    async def wordpress_delete_post(
        id: int,
        type: Literal["post", "page"] = "post",
        force: bool = False,
        ctx: Context = None,
    ) -> str:
        """Delete a WordPress post or page.

        Without force the item is moved to the trash.

        Args:
            id: Post ID.
            type: post or page (default post).
            force: Permanently delete, bypassing the trash.

        Returns:
            str: Confirmation of the deletion.
        """
        try:
            params = DeletePostInput(id=id, type=type, force=force)
            post = await get_service().client.delete_post(params)
        except Exception as e:
            return handle_tool_exception(e, "delete post")

        outcome = "permanently deleted" if params.force else "moved to trash"
        return "\n".join(
            [
                f"Successfully deleted {post.type}: **{strip_html(post.title.rendered)}**",
                "",
                "Details:",
                f"- ID: {post.id}",
                f"- {outcome.capitalize()}",
                f"- Former URL: {post.link}",
                "",
                f"The {post.type} has been {outcome}.",
            ]
        )
