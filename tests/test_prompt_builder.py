"""
Prompt Builder Test Suite.

This module contains tests for prompt synthesis, covering:
- Section order and the fixed instructions
- The structured item lines
- Serialization failures
"""

import json

import pytest

from analyzers.models import ActivityStatistics, RepositoryCount
from analyzers.prompt_builder import (
    ISSUE_BLOCK_TITLE,
    PULL_REQUEST_BLOCK_TITLE,
    build_prompt,
    render_item_line,
    render_statistics,
)
from analyzers.prompts import ANALYSIS_INSTRUCTIONS
from analyzers.statistics import aggregate
from errors import SerializationFailed
from miners.models import ActivityKind, Comment
from miners.normalizer import parse_activity_records


def _json_lines(prompt):
    return [line for line in prompt.splitlines() if line.startswith("{")]


@pytest.fixture
def pr_with_comments(record):
    """A merged PR with one attributed and one anonymous comment."""
    item = parse_activity_records(
        ActivityKind.PULL_REQUEST, [record(42, "merged", body="Adds caching ✨")]
    )[0]
    return item.model_copy(
        update={
            "comments": [
                Comment.model_validate(
                    {"author": {"login": "bob"}, "body": "Nice", "createdAt": "2025-01-03T00:00:00Z"}
                ),
                Comment.model_validate(
                    {"author": None, "body": "+1", "createdAt": "2025-01-04T00:00:00Z"}
                ),
            ]
        }
    )


def test_item_line_parses_back(pr_with_comments):
    """Test that a rendered line recovers the item's fields."""
    line = render_item_line(pr_with_comments)
    parsed = json.loads(line)

    assert "\n" not in line
    assert parsed["url"] == pr_with_comments.url
    assert parsed["title"] == "Item 42"
    assert parsed["description"] == "Adds caching ✨"
    assert parsed["status"] == "merged"
    assert parsed["repository"] == "org/repo"
    assert parsed["created_at"] == pr_with_comments.created_at
    assert len(parsed["comments"]) == 2
    assert parsed["comments"][0] == {
        "user": "bob",
        "comment_body": "Nice",
        "created_at": "2025-01-03T00:00:00Z",
    }
    assert parsed["comments"][1]["user"] == "Unknown"


def test_item_line_keeps_non_ascii(pr_with_comments):
    """Test that text is not escaped."""
    assert "✨" in render_item_line(pr_with_comments)


def test_missing_body_renders_empty_description(record):
    """Test that an absent body becomes an empty description."""
    item = parse_activity_records(ActivityKind.ISSUE, [record(1, body=None)])[0]

    assert json.loads(render_item_line(item))["description"] == ""


def test_single_pr_scenario(record):
    """Test the prompt for one merged PR and no issues."""
    prs = parse_activity_records(ActivityKind.PULL_REQUEST, [record(1, "merged", "org/repo")])
    stats = aggregate(prs, [])

    prompt = build_prompt("alice", "2025-01-01", "2025-01-31", stats, prs, [])

    assert prompt.startswith(
        "The following is GitHub activity data for alice from 2025-01-01 to 2025-01-31."
    )
    assert "- Total pull requests: 1 (merged: 1, open: 0, closed: 0)" in prompt
    assert "- Total issues: 0 (open: 0, closed: 0)" in prompt
    assert len(_json_lines(prompt)) == 1

    issue_block = prompt.index(f"## {ISSUE_BLOCK_TITLE}")
    assert not _json_lines(prompt[issue_block:])
    assert f"## {ISSUE_BLOCK_TITLE}\n```\n```\n" in prompt


def test_sections_in_order(record):
    """Test header, statistics, PR block, issue block and instructions order."""
    prs = parse_activity_records(ActivityKind.PULL_REQUEST, [record(1)])
    issues = parse_activity_records(ActivityKind.ISSUE, [record(2), record(3)])
    stats = aggregate(prs, issues)

    prompt = build_prompt("alice", "2025-01-01", "2025-06-30", stats, prs, issues, "Japanese")

    positions = [
        prompt.index("The following is GitHub activity data"),
        prompt.index("## Statistics Summary"),
        prompt.index(f"## {PULL_REQUEST_BLOCK_TITLE}"),
        prompt.index(f"## {ISSUE_BLOCK_TITLE}"),
        prompt.index("[Analysis angles]"),
    ]
    assert positions == sorted(positions)
    assert prompt.endswith(ANALYSIS_INSTRUCTIONS.format(language="Japanese"))
    assert len(_json_lines(prompt)) == 3


def test_every_item_is_rendered(record):
    """Test that items past the comment sample are still included."""
    prs = parse_activity_records(ActivityKind.PULL_REQUEST, [record(n) for n in range(1, 13)])

    prompt = build_prompt("alice", "a", "b", aggregate(prs, []), prs, [])

    assert len(_json_lines(prompt)) == 12


def test_prompt_is_deterministic(record):
    """Test that the same input renders the same prompt."""
    prs = parse_activity_records(ActivityKind.PULL_REQUEST, [record(1), record(2)])
    stats = aggregate(prs, [])

    assert build_prompt("alice", "a", "b", stats, prs, []) == build_prompt(
        "alice", "a", "b", stats, prs, []
    )


def test_statistics_lists_repositories():
    """Test the per-repository lines of the statistics block."""
    stats = ActivityStatistics(
        pr_total=3,
        repositories=[
            RepositoryCount(repository="org/b", count=2),
            RepositoryCount(repository="org/a", count=1),
        ],
    )

    block = render_statistics(stats)

    assert "- Activity by repository:\n  - org/b: 2\n  - org/a: 1\n" in block


def test_serialization_failure_is_fatal(record, monkeypatch):
    """Test that a record that cannot be serialized aborts synthesis."""
    prs = parse_activity_records(ActivityKind.PULL_REQUEST, [record(1)])
    monkeypatch.setattr(
        "analyzers.prompt_builder.item_record", lambda item: {"url": object()}
    )

    with pytest.raises(SerializationFailed, match="org/repo#1"):
        build_prompt("alice", "a", "b", aggregate(prs, []), prs, [])
