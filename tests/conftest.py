"""
Shared test configuration.

Settings are instantiated when ``config`` is imported, so the required
credentials are seeded here before any test module imports it.
"""

import os
import tempfile

os.environ.setdefault("GITHUB_TOKEN", "test-github-token")
os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="perfyzer-logs-"))

from typing import Any, Dict, List, Optional  # noqa: E402

import pytest  # noqa: E402

from errors import CommentFetchFailed  # noqa: E402
from miners.base import ActivitySource  # noqa: E402
from miners.models import ActivityKind  # noqa: E402


def make_record(
    number: int,
    state: str = "open",
    repository: str = "org/repo",
    body: Optional[str] = "Description",
) -> Dict[str, Any]:
    """Raw activity record in the shape the source emits."""
    return {
        "number": number,
        "title": f"Item {number}",
        "body": body,
        "createdAt": f"2025-01-{(number % 28) + 1:02d}T09:00:00Z",
        "state": state,
        "url": f"https://github.com/{repository}/pull/{number}",
        "repository": {"nameWithOwner": repository},
    }


def make_comment(login: Optional[str] = "reviewer", body: str = "Looks good") -> Dict[str, Any]:
    return {
        "author": {"login": login} if login else None,
        "body": body,
        "createdAt": "2025-01-10T12:00:00Z",
    }


class FakeActivitySource(ActivitySource):
    """Fixture-backed activity source."""

    def __init__(
        self,
        prs: Optional[List[Dict[str, Any]]] = None,
        issues: Optional[List[Dict[str, Any]]] = None,
        comments: Optional[Dict[int, List[Dict[str, Any]]]] = None,
        failing_comments: Optional[List[int]] = None,
        login: str = "alice",
    ):
        self.records = {
            ActivityKind.PULL_REQUEST: prs or [],
            ActivityKind.ISSUE: issues or [],
        }
        self.comments = comments or {}
        self.failing_comments = failing_comments or []
        self.login = login
        self.activity_calls = []
        self.comment_calls = []

    def query_activity(self, kind, owner, author, since, until, limit):
        self.activity_calls.append((kind, owner, author, since, until, limit))
        return self.records[kind][:limit]

    def query_comments(self, repository, kind, number):
        self.comment_calls.append((repository, kind, number))
        if number in self.failing_comments:
            raise CommentFetchFailed(f"comment query for {repository}#{number} failed")
        return self.comments.get(number, [make_comment()])

    def current_login(self):
        return self.login


@pytest.fixture
def fake_source():
    """Factory for fixture-backed activity sources."""
    return FakeActivitySource


@pytest.fixture
def record():
    """Factory for raw activity records."""
    return make_record


@pytest.fixture
def comment():
    """Factory for raw comment records."""
    return make_comment
