"""
Activity Statistics Module.

Counts pull requests and issues by state and activity by repository.
"""

from typing import List, Sequence

import pandas as pd

from analyzers.models import ActivityStatistics, RepositoryCount
from miners.models import ActivityItem


def _count_state(items: Sequence[ActivityItem], state: str) -> int:
    return len([item for item in items if item.state == state])


def repository_counts(items: Sequence[ActivityItem]) -> List[RepositoryCount]:
    """
    Count items per repository, busiest first.

    Ties keep the order in which repositories were first encountered.

    Args:
        items (Sequence[ActivityItem]): Items in encounter order

    Returns:
        List[RepositoryCount]: Per-repository counts sorted descending
    """
    names = pd.Series(
        [item.repository.name_with_owner for item in items], dtype="object"
    )
    counts = (
        names.groupby(names, sort=False)
        .size()
        .sort_values(ascending=False, kind="stable")
    )
    return [
        RepositoryCount(repository=name, count=int(count))
        for name, count in counts.items()
    ]


def aggregate(
    prs: Sequence[ActivityItem], issues: Sequence[ActivityItem]
) -> ActivityStatistics:
    """
    Compute statistics over normalized pull requests and issues.

    States are matched exactly ("merged", "open", "closed"). Repository
    counts cover pull requests first, then issues.

    Args:
        prs (Sequence[ActivityItem]): Pull requests in query order
        issues (Sequence[ActivityItem]): Issues in query order

    Returns:
        ActivityStatistics: Derived counts
    """
    return ActivityStatistics(
        pr_total=len(prs),
        pr_merged=_count_state(prs, "merged"),
        pr_open=_count_state(prs, "open"),
        pr_closed=_count_state(prs, "closed"),
        issue_total=len(issues),
        issue_open=_count_state(issues, "open"),
        issue_closed=_count_state(issues, "closed"),
        repositories=repository_counts(list(prs) + list(issues)),
    )
