import pytest
from unittest.mock import AsyncMock, Mock, patch

import app
from analyzers.prompts import SYSTEM_PROMPT
from errors import SourceUnavailable, UpstreamError


@pytest.fixture
def mock_requester():
    requester = Mock()
    requester.request_summary = AsyncMock(return_value="Summary text")
    return requester


def test_parse_args_defaults():
    """Test the default reporting window."""
    args = app.parse_args(["--owner", "org"])

    assert args.owner == "org"
    assert args.author is None
    assert (args.since, args.until) == ("2025-01-01", "2025-06-30")
    assert args.show_prompts is False


@pytest.mark.asyncio
async def test_main_resolves_author_and_prints(fake_source, record, mock_requester, capsys):
    """Test a run without --author uses the authenticated login."""
    source = fake_source(prs=[record(1, "merged")], login="octocat")

    summary = await app.main(["--owner", "org"], source=source, requester=mock_requester)

    assert summary == "Summary text"
    assert source.activity_calls[0][2] == "octocat"
    out = capsys.readouterr().out
    assert "Performance Summary" in out
    assert "Summary text" in out
    assert SYSTEM_PROMPT not in out


@pytest.mark.asyncio
async def test_main_show_prompts(fake_source, mock_requester, capsys):
    """Test that --show-prompts echoes both prompts."""
    await app.main(
        ["--owner", "org", "--author", "alice", "--show-prompts"],
        source=fake_source(),
        requester=mock_requester,
    )

    out = capsys.readouterr().out
    assert SYSTEM_PROMPT in out
    assert "GitHub activity data for alice" in out


def test_run_reports_pipeline_errors(capsys):
    """Test that pipeline errors exit with status 1 and the stage."""
    failing_main = AsyncMock(side_effect=UpstreamError("HTTP 500", body="boom", status_code=500))

    with patch("app.main", failing_main), pytest.raises(SystemExit) as excinfo:
        app.run()

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "[completion request]" in err
    assert "boom" in err


def test_run_reports_source_errors(capsys):
    """Test that activity failures name their stage."""
    with patch("app.main", AsyncMock(side_effect=SourceUnavailable("search failed"))):
        with pytest.raises(SystemExit):
            app.run()

    assert "[activity query] search failed" in capsys.readouterr().err
