"""Base types and enums for MCP tool input models."""

from __future__ import annotations

from enum import Enum

# WordPress caps per_page at 100 for collection endpoints
MAX_PER_PAGE = 100


class PostStatus(str, Enum):
    """Statuses a tool may set on a post."""

    DRAFT = "draft"
    PUBLISH = "publish"
    PRIVATE = "private"
    PENDING = "pending"


class PostType(str, Enum):
    """Content types handled by the post tools."""

    POST = "post"
    PAGE = "page"

    @property
    def collection(self) -> str:
        return "/pages" if self is PostType.PAGE else "/posts"


class OrderBy(str, Enum):
    DATE = "date"
    TITLE = "title"
    ID = "id"


class Order(str, Enum):
    ASC = "asc"
    DESC = "desc"


class TermAction(str, Enum):
    """Actions for the category and tag management tools."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    LIST = "list"


class Functionality(str, Enum):
    """Areas probed by the connection tester."""

    POSTS = "posts"
    MEDIA = "media"
    CATEGORIES = "categories"
    USERS = "users"
