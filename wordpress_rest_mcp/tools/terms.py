"""Category and tag management tools."""

from __future__ import annotations

from typing import Literal

from mcp.server.fastmcp import Context

from ..models import (
    ManageCategoriesInput,
    ManageTagsInput,
    ManageTermsInput,
    TermAction,
    WordPressCategory,
    WordPressTag,
)
from ..session import get_service
from ..utils import handle_tool_exception, strip_html


def render_term(term: WordPressCategory | WordPressTag) -> str:
    text = f"**{strip_html(term.name)}** (ID: {term.id}) - slug: {term.slug}, posts: {term.count}"
    parent = getattr(term, "parent", 0)
    if parent:
        text += f", parent: {parent}"
    description = strip_html(term.description)
    if description:
        text += f"\n   {description}"
    return text


async def run_term_action(
    taxonomy: Literal["categories", "tags"], params: ManageTermsInput
) -> str:
    """Dispatch one create/read/update/delete/list action on a taxonomy."""
    client = get_service().client
    singular = "category" if taxonomy == "categories" else "tag"

    if params.action is TermAction.LIST:
        result = await client.list_terms(taxonomy, params.to_params())
        if not result.items:
            return f"No {taxonomy} found."
        header = f"Found {len(result.items)} {taxonomy}"
        if result.total is not None:
            header += f" ({result.total} total)"
        entries = [
            f"{index}. {render_term(term)}"
            for index, term in enumerate(result.items, start=1)
        ]
        return header + ":\n\n" + "\n".join(entries)

    if params.action is TermAction.READ:
        term = await client.get_term(taxonomy, params.id)
        return render_term(term)

    if params.action is TermAction.CREATE:
        term = await client.create_term(taxonomy, params.to_payload())
        return f"Successfully created {singular}:\n\n{render_term(term)}"

    if params.action is TermAction.UPDATE:
        term = await client.update_term(taxonomy, params.id, params.to_payload())
        return f"Successfully updated {singular}:\n\n{render_term(term)}"

    deleted = await client.delete_term(taxonomy, params.id)
    name = deleted.previous.get("name", params.id)
    return f"Successfully deleted {singular}: **{name}** (ID: {params.id})"


def register_term_tools(mcp):
    """Register category and tag tools with the MCP server."""

    @mcp.tool(
        name="wordpress_manage_categories",
        annotations={
            "title": "Manage WordPress Categories",
            "readOnlyHint": False,
            "destructiveHint": True,
            "idempotentHint": False,
            "openWorldHint": True,
        },
    )
    async def wordpress_manage_categories(
        action: Literal["create", "read", "update", "delete", "list"],
        id: int | None = None,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
        parent: int | None = None,
        search: str | None = None,
        per_page: int = 20,
        page: int = 1,
        ctx: Context = None,
    ) -> str:
        """Create, read, update, delete or list WordPress categories.

        Args:
            action: create, read, update, delete or list.
            id: Category ID (required for read, update and delete).
            name: Category name (required for create).
            slug: Category slug.
            description: Category description.
            parent: Parent category ID.
            search: Search term for list.
            per_page: Items per page for list (1-100, default 20).
            page: Page number for list (default 1).

        Returns:
            str: Result of the action.
        """
        try:
            params = ManageCategoriesInput(
                action=action,
                id=id,
                name=name,
                slug=slug,
                description=description,
                parent=parent,
                search=search,
                per_page=per_page,
                page=page,
            )
            return await run_term_action("categories", params)
        except Exception as e:
            return handle_tool_exception(e, f"{action} category")

    @mcp.tool(
        name="wordpress_manage_tags",
        annotations={
            "title": "Manage WordPress Tags",
            "readOnlyHint": False,
            "destructiveHint": True,
            "idempotentHint": False,
            "openWorldHint": True,
        },
    )
    async def wordpress_manage_tags(
        action: Literal["create", "read", "update", "delete", "list"],
        id: int | None = None,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
        search: str | None = None,
        per_page: int = 20,
        page: int = 1,
        ctx: Context = None,
    ) -> str:
        """Create, read, update, delete or list WordPress tags.

        Args:
            action: create, read, update, delete or list.
            id: Tag ID (required for read, update and delete).
            name: Tag name (required for create).
            slug: Tag slug.
            description: Tag description.
            search: Search term for list.
            per_page: Items per page for list (1-100, default 20).
            page: Page number for list (default 1).

        Returns:
            str: Result of the action.
        """
        try:
            params = ManageTagsInput(
                action=action,
                id=id,
                name=name,
                slug=slug,
                description=description,
                search=search,
                per_page=per_page,
                page=page,
            )
            return await run_term_action("tags", params)
        except Exception as e:
            return handle_tool_exception(e, f"{action} tag")
