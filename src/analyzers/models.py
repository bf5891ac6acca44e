"""
Activity Analysis Data Models.

Defines the statistics derived from normalized activity and the report the
pipeline hands back to its caller.
"""

from typing import List, Optional

from pydantic import BaseModel

from miners.models import ActivityItem


class RepositoryCount(BaseModel):
    """Number of activity items in one repository."""

    repository: str
    count: int


class ActivityStatistics(BaseModel):
    """Counts over a contributor's pull requests and issues."""

    pr_total: int = 0
    pr_merged: int = 0
    pr_open: int = 0
    pr_closed: int = 0
    issue_total: int = 0
    issue_open: int = 0
    issue_closed: int = 0
    repositories: List[RepositoryCount] = []


class ActivityReport(BaseModel):
    """Everything one pipeline run produced."""

    author: str
    since: str
    until: str
    pull_requests: List[ActivityItem]
    issues: List[ActivityItem]
    statistics: ActivityStatistics
    prompt: str
    summary: Optional[str] = None
