"""Pydantic models: configuration, tool inputs, WordPress resources and results."""

from .base import (
    MAX_PER_PAGE,
    Functionality,
    Order,
    OrderBy,
    PostStatus,
    PostType,
    TermAction,
)
from .config import RateLimitPolicy, WordPressConfig, is_valid_application_password
from .media import GetMediaInput, UploadMediaInput
from .posts import (
    CreatePostInput,
    DeletePostInput,
    ListPostsInput,
    ReadPostInput,
    UpdatePostInput,
)
from .resources import (
    DeletedPost,
    DeletedTerm,
    Rendered,
    WordPressCategory,
    WordPressMedia,
    WordPressPost,
    WordPressTag,
    WordPressUser,
)
from .results import (
    ConnectionDetails,
    ConnectionErrorInfo,
    ConnectionReport,
    ConnectionTestResult,
    SecurityValidationResult,
)
from .terms import ManageCategoriesInput, ManageTagsInput, ManageTermsInput

__all__ = [
    # Base
    "MAX_PER_PAGE",
    "Functionality",
    "Order",
    "OrderBy",
    "PostStatus",
    "PostType",
    "TermAction",
    # Configuration
    "RateLimitPolicy",
    "WordPressConfig",
    "is_valid_application_password",
    # Posts
    "CreatePostInput",
    "ReadPostInput",
    "UpdatePostInput",
    "ListPostsInput",
    "DeletePostInput",
    # Media
    "UploadMediaInput",
    "GetMediaInput",
    # Terms
    "ManageTermsInput",
    "ManageCategoriesInput",
    "ManageTagsInput",
    # Resources
    "Rendered",
    "WordPressPost",
    "DeletedPost",
    "WordPressMedia",
    "WordPressUser",
    "WordPressCategory",
    "WordPressTag",
    "DeletedTerm",
    # Results
    "SecurityValidationResult",
    "ConnectionErrorInfo",
    "ConnectionDetails",
    "ConnectionTestResult",
    "ConnectionReport",
]
