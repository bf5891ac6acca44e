"""
Activity Source Client Module.

Runs the activity and comment queries against an ActivitySource and turns
their results into canonical models. Activity failures are fatal; comment
failures degrade to an empty comment list for the affected item.
"""

from typing import List

from config import logger
from errors import SourceUnavailable
from miners.base import ActivitySource
from miners.models import SEARCH_RESULT_LIMIT, ActivityItem, ActivityKind, Comment
from miners.normalizer import parse_activity_records, parse_comment_records


class ActivityClient:
    """
    Client for a contributor's activity on the hosting platform.

    Attributes:
        source (ActivitySource): Transport adapter
        limit (int): Maximum results requested per activity query
    """

    def __init__(self, source: ActivitySource, limit: int = SEARCH_RESULT_LIMIT):
        self.source = source
        self.limit = limit

    def fetch_activity(
        self,
        kind: ActivityKind,
        owner: str,
        author: str,
        since: str,
        until: str,
    ) -> List[ActivityItem]:
        """
        Fetch the items of one kind authored in the inclusive window.

        Args:
            kind (ActivityKind): Pull requests or issues
            owner (str): User or organization owning the repositories
            author (str): Author login
            since (str): Inclusive start date
            until (str): Inclusive end date

        Returns:
            List[ActivityItem]: Items in query order with empty comments

        Raises:
            SourceUnavailable: If the query fails or returns malformed data
        """
        try:
            records = self.source.query_activity(
                kind, owner, author, since, until, self.limit
            )
        except SourceUnavailable:
            raise
        except Exception as e:
            raise SourceUnavailable(f"Activity query for {kind.label} failed: {e}") from e

        items = parse_activity_records(kind, records)

        # Reaching the cap exactly is the only truncation signal the search gives
        if len(items) == self.limit:
            logger.warning(
                {
                    "message": f"Search results reached the {self.limit} item limit; "
                    f"some {kind.label} may be missing. "
                    "Narrow the window with --since/--until.",
                    "kind": kind.value,
                    "count": len(items),
                }
            )

        logger.info(
            {"message": f"Fetched {kind.label}", "kind": kind.value, "count": len(items)}
        )
        return items

    def fetch_comments(
        self, repository: str, kind: ActivityKind, number: int
    ) -> List[Comment]:
        """
        Fetch the comments of one item without ever raising.

        Args:
            repository (str): Repository in ``owner/name`` form
            kind (ActivityKind): Kind of the item
            number (int): Item number

        Returns:
            List[Comment]: Parsed comments; empty if the query failed
        """
        context = {"repository": repository, "kind": kind.value, "number": number}
        try:
            records = self.source.query_comments(repository, kind, number)
            return parse_comment_records(records or [], context)
        except Exception as e:
            logger.warning(
                {"message": "Comment query failed", "error": str(e), **context}
            )
            return []
