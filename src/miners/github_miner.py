"""
GitHub Activity Source Module.

Adapts the GitHub REST API (through PyGithub) to the ActivitySource interface.
Pull requests and issues are found with the search API; comments are read
from the per-item comment endpoints.
"""

from datetime import datetime, timezone
from itertools import islice
from typing import Any, Dict, List, Optional

from github import Auth, Github, GithubException
from github.Issue import Issue
from github.RateLimit import RateLimit

from config import settings, logger
from errors import CommentFetchFailed, SourceUnavailable
from miners.base import ActivitySource
from miners.models import COMMENT_PAGE_LIMIT, ActivityKind


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    """Render a PyGithub timestamp as ``YYYY-MM-DDTHH:MM:SSZ``."""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def _repository_from_api_url(url: str) -> str:
    """Extract ``owner/name`` from ``.../repos/owner/name/issues/123``."""
    parts = url.rstrip("/").split("/")
    return "/".join(parts[-4:-2])


class GitHubActivitySource(ActivitySource):
    """
    GitHubActivitySource reads a contributor's activity from GitHub.
    It emits records in the canonical raw shape defined by ActivitySource.
    """

    def __init__(
        self,
        github_token: Optional[str] = None,
        github: Optional[Github] = None,
    ):
        """Initialize the source with authentication.

        Args:
            github_token (Optional[str]): GitHub API token for authentication.
            github (Optional[Github]): Preconfigured client, used instead of the token.
        """
        self.github = github or Github(
            auth=Auth.Token(github_token or settings.github_token.get_secret_value())
        )

    def _check_rate_limit(self, check_name: str = None) -> None:
        """
        Check and log the GitHub API rate limit status.

        Args:
            check_name (Optional[str]): Identifier for the rate limit check point.

        Raises:
            SourceUnavailable: Raised when the rate limit is exhausted.
        """
        # Searches draw on their own per-minute bucket, not the core one
        overview = self.github.get_rate_limit()
        resources = getattr(overview, "resources", overview)
        rate_limit: RateLimit = resources.search
        remaining = rate_limit.remaining
        limit = rate_limit.limit
        reset_time = rate_limit.reset.replace(tzinfo=timezone.utc)
        now = datetime.now(timezone.utc)

        logger.info(
            {
                "message": f"{check_name} API rate limit status",
                "remaining_points": remaining,
                "total_points": limit,
                "reset_time": reset_time.isoformat(),
                "minutes_to_reset": (reset_time - now).total_seconds() / 60,
            }
        )

        if remaining < (limit * 0.1) and remaining > 0:
            logger.warning(
                {
                    "message": "GitHub API rate limit running low",
                    "remaining_points": remaining,
                    "reset_time": reset_time.isoformat(),
                }
            )

        if remaining == 0:
            wait_time = (reset_time - now).total_seconds()
            logger.critical(
                {
                    "message": "GitHub API rate limit exhausted",
                    "reset_time": reset_time.isoformat(),
                    "wait_time_seconds": wait_time,
                }
            )
            raise SourceUnavailable(
                f"GitHub API rate limit exhausted. Resets in {wait_time/60:.1f} minutes"
            )

    def _activity_record(self, issue: Issue, kind: ActivityKind) -> Dict[str, Any]:
        """Convert a search hit into the canonical raw activity record.

        Args:
            issue (Issue): Search result; pull requests are returned as issues.
            kind (ActivityKind): Kind the search was run for.

        Returns:
            Dict[str, Any]: Raw activity record.
        """
        state = issue.state
        if kind is ActivityKind.PULL_REQUEST and issue.pull_request is not None:
            if issue.pull_request.raw_data.get("merged_at"):
                state = "merged"

        return {
            "number": issue.number,
            "title": issue.title,
            "body": issue.body,
            "createdAt": _isoformat(issue.created_at),
            "state": state,
            "url": issue.html_url,
            "repository": {"nameWithOwner": _repository_from_api_url(issue.url)},
        }

    def query_activity(
        self,
        kind: ActivityKind,
        owner: str,
        author: str,
        since: str,
        until: str,
        limit: int,
    ) -> List[Dict[str, Any]]:
        qualifier = "is:pr" if kind is ActivityKind.PULL_REQUEST else "is:issue"
        query = f"{qualifier} user:{owner} author:{author} created:{since}..{until}"
        logger.info({"message": "Searching activity", "query": query, "limit": limit})

        try:
            self._check_rate_limit(f"{kind.label.capitalize()} search")
            results = self.github.search_issues(query=query, sort="created", order="desc")
            return [self._activity_record(issue, kind) for issue in islice(results, limit)]
        except GithubException as e:
            logger.error(
                {
                    "message": "Activity search failed",
                    "query": query,
                    "status": e.status,
                    "error": str(e),
                }
            )
            raise SourceUnavailable(f"GitHub search failed ({e.status}): {e.data}") from e

    def query_comments(
        self, repository: str, kind: ActivityKind, number: int
    ) -> List[Dict[str, Any]]:
        try:
            repo = self.github.get_repo(repository, lazy=True)
            if kind is ActivityKind.PULL_REQUEST:
                comments = repo.get_pull(number).get_review_comments()
            else:
                comments = repo.get_issue(number).get_comments()

            return [
                {
                    "author": {"login": comment.user.login} if comment.user else None,
                    "body": comment.body,
                    "createdAt": _isoformat(comment.created_at),
                }
                for comment in islice(comments, COMMENT_PAGE_LIMIT)
            ]
        except GithubException as e:
            raise CommentFetchFailed(
                f"GitHub comment query for {repository}#{number} failed ({e.status})"
            ) from e

    def current_login(self) -> str:
        try:
            return self.github.get_user().login
        except GithubException as e:
            raise SourceUnavailable(
                f"Failed to get current GitHub user ({e.status}): {e.data}"
            ) from e
        except Exception as e:
            raise SourceUnavailable(f"Failed to get current GitHub user: {e}") from e
