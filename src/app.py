"""
Main Application Entry Point.

This module serves as the primary entry point for the performance summary
tool. It orchestrates one run, including:
- Argument parsing and author resolution
- Activity collection and prompt synthesis
- Optional echo of the prompts
- Summary generation and output
- Error reporting

Run it as ``perfyzer --owner my-org`` once GITHUB_TOKEN and OPENAI_API_KEY
are set in the environment or a .env file.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

import tiktoken

from config import settings, logger
from analyzers.pipeline import ActivitySummaryPipeline
from analyzers.prompts import SYSTEM_PROMPT
from analyzers.summarizer import SummaryRequester, build_client
from errors import PerfyzerError
from miners.activity_client import ActivityClient
from miners.base import ActivitySource
from miners.github_miner import GitHubActivitySource

BANNER = "=" * 37


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="perfyzer",
        description="Summarize GitHub pull request and issue activity with OpenAI",
    )
    parser.add_argument("--owner", required=True, help="User or organization to search under")
    parser.add_argument("--author", help="Author login (default: authenticated user)")
    parser.add_argument(
        "--since", default=settings.default_since, help="Start date YYYY-MM-DD (inclusive)"
    )
    parser.add_argument(
        "--until", default=settings.default_until, help="End date YYYY-MM-DD (inclusive)"
    )
    parser.add_argument(
        "--show-prompts",
        action="store_true",
        help="Print the prompts sent to OpenAI",
    )
    return parser.parse_args(argv)


def echo_prompts(prompt: str) -> None:
    print("\n=== Prompts sent to OpenAI ===")
    print("[System prompt]")
    print(SYSTEM_PROMPT)
    print("\n[User prompt]")
    print(prompt)
    print(f"{BANNER}\n")


async def main(
    argv: Optional[List[str]] = None,
    source: Optional[ActivitySource] = None,
    requester: Optional[SummaryRequester] = None,
) -> str:
    """
    Execute one summary run.

    Performs the following steps:
    1. Resolves the author, defaulting to the authenticated user
    2. Collects pull requests and issues and builds the prompt
    3. Optionally echoes the prompts
    4. Requests the summary and prints it

    Args:
        argv (Optional[List[str]]): Command-line arguments, sys.argv when None
        source (Optional[ActivitySource]): Activity source, GitHub when None
        requester (Optional[SummaryRequester]): Summary requester, OpenAI when None

    Returns:
        str: The generated summary

    Raises:
        PerfyzerError: If any pipeline stage fails
    """
    args = parse_args(argv)

    logger.debug("initializing activity source...")
    source = source or GitHubActivitySource(settings.github_token.get_secret_value())

    author = args.author
    if not author:
        author = source.current_login()
        logger.info({"message": "Using the authenticated GitHub user", "author": author})

    if requester is None:
        logger.debug("initializing openai client...")
        requester = SummaryRequester(
            build_client(
                settings.openai_base_url,
                settings.openai_api_key.get_secret_value(),
                settings.openai_timeout,
            ),
            settings.openai_llm_model,
            tiktoken.get_encoding(settings.openai_encoding_name),
        )

    pipeline = ActivitySummaryPipeline(
        ActivityClient(source), requester, language=settings.summary_language
    )

    logger.info("collecting GitHub activity...")
    report = pipeline.build_report(args.owner, author, args.since, args.until)

    if args.show_prompts:
        echo_prompts(report.prompt)

    logger.info("generating summary...")
    report = await pipeline.summarize(report)

    print("\nPerformance Summary")
    print(BANNER)
    print(report.summary)
    return report.summary


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except PerfyzerError as e:
        logger.error({"message": "application failed", "stage": e.stage, "error": str(e)})
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    logger.info("Starting application ...")
    run()
