"""
Activity Normalization Module.

Converts raw activity and comment records into the canonical models and
attaches a bounded sample of comments to each kind's leading items.

Activity records are validated as a batch: one malformed record means the
source returned data the pipeline cannot trust. Comment records are
validated one at a time and malformed ones are dropped and counted.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional

from pydantic import ValidationError

from config import logger
from errors import SourceUnavailable
from miners.models import (
    COMMENT_SAMPLE_SIZE,
    ActivityItem,
    ActivityKind,
    Comment,
)

CommentFetcher = Callable[[str, ActivityKind, int], List[Comment]]


def parse_activity_records(
    kind: ActivityKind, records: Optional[Iterable[Dict[str, Any]]]
) -> List[ActivityItem]:
    """
    Validate raw activity records into ActivityItem models.

    Args:
        kind (ActivityKind): Kind of every record in the batch
        records (Optional[Iterable[Dict[str, Any]]]): Raw records in query order

    Returns:
        List[ActivityItem]: Items in the same order, with no comments

    Raises:
        SourceUnavailable: If the payload is missing or any record is malformed
    """
    if records is None or isinstance(records, (str, bytes, dict)):
        raise SourceUnavailable(
            f"Activity query for {kind.label} returned no record list"
        )

    items = []
    for position, record in enumerate(records):
        if not isinstance(record, dict):
            raise SourceUnavailable(
                f"Malformed {kind.label} record at position {position}: "
                f"expected an object, got {type(record).__name__}"
            )
        try:
            items.append(ActivityItem.model_validate({**record, "kind": kind}))
        except ValidationError as e:
            raise SourceUnavailable(
                f"Malformed {kind.label} record at position {position}: {e}"
            ) from e
    return items


def _parse_comment(record: Any) -> Optional[Comment]:
    try:
        return Comment.model_validate(record)
    except ValidationError:
        return None


def parse_comment_records(
    records: Iterable[Any], context: Optional[Dict[str, Any]] = None
) -> List[Comment]:
    """
    Parse raw comment records, dropping the ones that do not fit the Comment shape.

    Args:
        records (Iterable[Any]): Raw comment records in retrieval order
        context (Optional[Dict[str, Any]]): Extra fields for the drop warning

    Returns:
        List[Comment]: Valid comments in retrieval order
    """
    parsed = [_parse_comment(record) for record in records]
    comments = [comment for comment in parsed if comment is not None]

    dropped = len(parsed) - len(comments)
    if dropped:
        logger.warning(
            {
                "message": "Dropped malformed comment records",
                "dropped": dropped,
                "kept": len(comments),
                **(context or {}),
            }
        )
    return comments


class ActivityNormalizer:
    """
    Attaches sampled comments to normalized activity items.

    Attributes:
        fetch_comments (CommentFetcher): Returns the comments of one item,
            never raising
        sample_size (int): Number of leading items per kind that get comments
    """

    def __init__(
        self, fetch_comments: CommentFetcher, sample_size: int = COMMENT_SAMPLE_SIZE
    ):
        self.fetch_comments = fetch_comments
        self.sample_size = sample_size

    def attach_comments(
        self, kind: ActivityKind, items: List[ActivityItem]
    ) -> List[ActivityItem]:
        """
        Populate comments for the first ``sample_size`` items in query order.

        Args:
            kind (ActivityKind): Kind of the items
            items (List[ActivityItem]): Items in query order

        Returns:
            List[ActivityItem]: New list; items past the sample keep no comments
        """
        logger.info(
            {
                "message": "Fetching comments for the latest items",
                "kind": kind.value,
                "sampled": min(len(items), self.sample_size),
                "total": len(items),
            }
        )

        normalized = []
        for index, item in enumerate(items):
            if index < self.sample_size:
                comments = self.fetch_comments(
                    item.repository.name_with_owner, kind, item.number
                )
                item = item.model_copy(update={"comments": list(comments)})
            normalized.append(item)
        return normalized
