"""
Activity Data Models.

Defines the canonical records produced from activity queries.
Uses Pydantic for validation and serialization; field aliases follow the
camelCase shape the activity source emits (``createdAt``, ``nameWithOwner``).
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Upper bound on results requested from a single activity query
SEARCH_RESULT_LIMIT = 1000

# Number of items per kind whose comments are fetched
COMMENT_SAMPLE_SIZE = 5

# Comments read per item; one page of the comment endpoint
COMMENT_PAGE_LIMIT = 30

# Rendered in place of a missing comment author
UNKNOWN_AUTHOR = "Unknown"


class ActivityKind(Enum):
    """
    Kind of activity item.

    Attributes:
        PULL_REQUEST: Pull requests authored by the contributor
        ISSUE: Issues opened by the contributor
    """

    PULL_REQUEST = "pr"
    ISSUE = "issue"

    @property
    def label(self) -> str:
        return "pull requests" if self is ActivityKind.PULL_REQUEST else "issues"


class RepositoryRef(BaseModel):
    """Repository an item belongs to, keyed by ``owner/name``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name_with_owner: str = Field(alias="nameWithOwner")


class CommentAuthor(BaseModel):
    """Comment author handle."""

    login: str


class Comment(BaseModel):
    """Discussion comment attached to an activity item."""

    model_config = ConfigDict(populate_by_name=True)

    author: Optional[CommentAuthor] = None
    body: str
    created_at: str = Field(alias="createdAt")

    @model_validator(mode="before")
    @classmethod
    def _normalize_author(cls, data: Any) -> Any:
        """Accept ``user`` in place of ``author`` and bare login strings."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "author" not in data and "user" in data:
            data["author"] = data.pop("user")
        author = data.get("author")
        if isinstance(author, str):
            data["author"] = {"login": author}
        elif isinstance(author, dict) and not author.get("login"):
            data["author"] = None
        return data


class ActivityItem(BaseModel):
    """Pull request or issue retrieved from the activity source."""

    model_config = ConfigDict(populate_by_name=True)

    kind: ActivityKind
    number: int = Field(ge=0)
    title: str
    body: str = ""
    created_at: str = Field(alias="createdAt")
    state: str
    url: str
    repository: RepositoryRef
    comments: List[Comment] = Field(default_factory=list)

    @field_validator("body", mode="before")
    def empty_body(cls, v: Optional[str]) -> str:
        """Treat an absent body as empty."""
        return "" if v is None else v
