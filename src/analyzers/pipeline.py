"""
Activity Summary Pipeline Module.

Coordinates one summary run for a contributor:

- Fetching pull requests and issues from the activity source
- Attaching sampled comments
- Aggregating statistics
- Building the prompt
- Requesting the summary

Stages run sequentially and nothing is kept between runs. Any error except
a comment-query failure aborts the run.
"""

from typing import List

from analyzers.models import ActivityReport
from analyzers.prompt_builder import build_prompt
from analyzers.statistics import aggregate
from analyzers.summarizer import SummaryRequester
from config import logger
from errors import PerfyzerError
from miners.activity_client import ActivityClient
from miners.models import ActivityItem, ActivityKind
from miners.normalizer import ActivityNormalizer


class ActivitySummaryPipeline:
    """
    Turns a contributor's activity in a date window into a summary.

    Attributes:
        client (ActivityClient): Activity and comment queries
        normalizer (ActivityNormalizer): Comment sampling
        requester (SummaryRequester): Completion request
        language (str): Language the summary is requested in
    """

    def __init__(
        self,
        client: ActivityClient,
        requester: SummaryRequester,
        normalizer: ActivityNormalizer = None,
        language: str = "English",
    ):
        """Initialize the pipeline.

        Args:
            client (ActivityClient): Activity and comment queries.
            requester (SummaryRequester): Completion request.
            normalizer (ActivityNormalizer): Comment sampling; defaults to one
                backed by ``client.fetch_comments``.
            language (str): Language the summary is requested in.
        """
        self.client = client
        self.requester = requester
        self.normalizer = normalizer or ActivityNormalizer(client.fetch_comments)
        self.language = language

    def _collect(
        self, kind: ActivityKind, owner: str, author: str, since: str, until: str
    ) -> List[ActivityItem]:
        items = self.client.fetch_activity(kind, owner, author, since, until)
        return self.normalizer.attach_comments(kind, items)

    def build_report(
        self, owner: str, author: str, since: str, until: str
    ) -> ActivityReport:
        """
        Collect activity and build the prompt without requesting the summary.

        Args:
            owner (str): User or organization owning the repositories
            author (str): Contributor login
            since (str): Inclusive start date
            until (str): Inclusive end date

        Returns:
            ActivityReport: Items, statistics and prompt; ``summary`` is unset

        Raises:
            SourceUnavailable: If an activity query fails
            SerializationFailed: If the prompt cannot be built
        """
        logger.info(
            {
                "message": "Collecting activity",
                "owner": owner,
                "author": author,
                "since": since,
                "until": until,
            }
        )
        try:
            prs = self._collect(ActivityKind.PULL_REQUEST, owner, author, since, until)
            issues = self._collect(ActivityKind.ISSUE, owner, author, since, until)

            statistics = aggregate(prs, issues)
            prompt = build_prompt(
                author, since, until, statistics, prs, issues, self.language
            )
        except PerfyzerError as e:
            logger.error(
                {"message": "Summary pipeline failed", "stage": e.stage, "error": e.message}
            )
            raise

        return ActivityReport(
            author=author,
            since=since,
            until=until,
            pull_requests=prs,
            issues=issues,
            statistics=statistics,
            prompt=prompt,
        )

    async def summarize(self, report: ActivityReport) -> ActivityReport:
        """
        Request the summary for a prepared report.

        Args:
            report (ActivityReport): Output of build_report

        Returns:
            ActivityReport: Copy of the report with ``summary`` set

        Raises:
            UpstreamError: If the completion endpoint fails
            NoCompletionError: If no completion was returned
        """
        logger.info({"message": "Requesting summary", "author": report.author})
        try:
            summary = await self.requester.request_summary(report.prompt)
        except PerfyzerError as e:
            logger.error(
                {"message": "Summary pipeline failed", "stage": e.stage, "error": e.message}
            )
            raise

        logger.info({"message": "Summary generated", "author": report.author})
        return report.model_copy(update={"summary": summary})

    async def run(self, owner: str, author: str, since: str, until: str) -> str:
        """Run every stage and return the summary text."""
        report = self.build_report(owner, author, since, until)
        report = await self.summarize(report)
        return report.summary
