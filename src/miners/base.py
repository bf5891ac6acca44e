"""
Abstract Base Class for Activity Sources.

Defines the interface the pipeline uses to reach the code-hosting platform.
Implementations wrap a transport (REST client, GraphQL client, CLI tool) and
return plain records in the canonical raw shape:

- activity: ``{"number", "title", "body", "createdAt", "state", "url",
  "repository": {"nameWithOwner"}}``
- comments: ``{"author": {"login"} | None, "body", "createdAt"}``
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from miners.models import ActivityKind


class ActivitySource(ABC):
    """
    Abstract base class for activity sources.

    Implementations should handle:
    - Authentication with the hosting service
    - Translating filters into the service's query language
    - Emitting records in the canonical raw shape
    """

    @abstractmethod
    def query_activity(
        self,
        kind: ActivityKind,
        owner: str,
        author: str,
        since: str,
        until: str,
        limit: int,
    ) -> List[Dict[str, Any]]:
        """
        Query items of one kind created by ``author`` under ``owner``.

        Args:
            kind (ActivityKind): Pull requests or issues
            owner (str): User or organization owning the repositories
            author (str): Author login
            since (str): Inclusive start date (YYYY-MM-DD)
            until (str): Inclusive end date (YYYY-MM-DD)
            limit (int): Maximum number of records to return

        Returns:
            List[Dict[str, Any]]: Raw activity records in query order

        Raises:
            SourceUnavailable: If the query fails
        """
        pass

    @abstractmethod
    def query_comments(
        self, repository: str, kind: ActivityKind, number: int
    ) -> List[Dict[str, Any]]:
        """
        Query the discussion comments of a single item.

        Args:
            repository (str): Repository in ``owner/name`` form
            kind (ActivityKind): Kind of the item
            number (int): Item number within the repository

        Returns:
            List[Dict[str, Any]]: Raw comment records in retrieval order

        Raises:
            CommentFetchFailed: If the query fails
        """
        pass

    @abstractmethod
    def current_login(self) -> str:
        """Return the login of the authenticated identity."""
        pass
