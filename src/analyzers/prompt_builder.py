"""
Summary Prompt Construction Module.

Renders statistics and normalized activity into the user prompt of the
summary request. Items are emitted one JSON object per line so that each
record stands on its own; the instruction text comes from analyzers.prompts.
"""

import json
from typing import Any, Dict, List, Sequence

from analyzers.models import ActivityStatistics
from analyzers.prompts import ANALYSIS_INSTRUCTIONS
from errors import SerializationFailed
from miners.models import UNKNOWN_AUTHOR, ActivityItem, Comment

PULL_REQUEST_BLOCK_TITLE = "Pull Request Data (JSONL)"
ISSUE_BLOCK_TITLE = "Issue Data (JSONL)"


def comment_record(comment: Comment) -> Dict[str, Any]:
    return {
        "user": comment.author.login if comment.author else UNKNOWN_AUTHOR,
        "comment_body": comment.body,
        "created_at": comment.created_at,
    }


def item_record(item: ActivityItem) -> Dict[str, Any]:
    """Structured form of an item as it appears in the prompt."""
    return {
        "url": item.url,
        "title": item.title,
        "description": item.body or "",
        "status": item.state,
        "repository": item.repository.name_with_owner,
        "created_at": item.created_at,
        "comments": [comment_record(comment) for comment in item.comments],
    }


def render_item_line(item: ActivityItem) -> str:
    """
    Serialize one item as a single JSON line.

    Args:
        item (ActivityItem): Normalized item

    Returns:
        str: JSON object without a trailing newline

    Raises:
        SerializationFailed: If the record cannot be serialized
    """
    try:
        return json.dumps(item_record(item), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationFailed(
            f"Could not serialize {item.repository.name_with_owner}#{item.number}: {e}"
        ) from e


def render_item_block(title: str, items: Sequence[ActivityItem]) -> str:
    """Render a titled, fenced JSONL block; the block is kept when empty."""
    lines = "".join(f"{render_item_line(item)}\n" for item in items)
    return f"## {title}\n```\n{lines}```\n\n"


def render_header(author: str, since: str, until: str) -> str:
    return f"The following is GitHub activity data for {author} from {since} to {until}.\n\n"


def render_statistics(stats: ActivityStatistics) -> str:
    lines: List[str] = [
        "## Statistics Summary",
        f"- Total pull requests: {stats.pr_total} "
        f"(merged: {stats.pr_merged}, open: {stats.pr_open}, closed: {stats.pr_closed})",
        f"- Total issues: {stats.issue_total} "
        f"(open: {stats.issue_open}, closed: {stats.issue_closed})",
    ]
    if stats.repositories:
        lines.append("- Activity by repository:")
        lines.extend(
            f"  - {entry.repository}: {entry.count}" for entry in stats.repositories
        )
    return "\n".join(lines) + "\n\n"


def build_prompt(
    author: str,
    since: str,
    until: str,
    stats: ActivityStatistics,
    prs: Sequence[ActivityItem],
    issues: Sequence[ActivityItem],
    language: str = "English",
) -> str:
    """
    Build the user prompt for the summary request.

    Sections, in order: header, statistics, pull request block, issue
    block, instructions. Every item is included; only comments are sampled.

    Args:
        author (str): Contributor login
        since (str): Start of the window
        until (str): End of the window
        stats (ActivityStatistics): Aggregated counts
        prs (Sequence[ActivityItem]): Pull requests in query order
        issues (Sequence[ActivityItem]): Issues in query order
        language (str): Language the summary is requested in

    Returns:
        str: The complete user prompt

    Raises:
        SerializationFailed: If any item cannot be serialized
    """
    return "".join(
        [
            render_header(author, since, until),
            render_statistics(stats),
            render_item_block(PULL_REQUEST_BLOCK_TITLE, prs),
            render_item_block(ISSUE_BLOCK_TITLE, issues),
            ANALYSIS_INSTRUCTIONS.format(language=language),
        ]
    )
