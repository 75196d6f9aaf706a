"""Unit tests for plain-text rendering of events."""

import pytest

from ghfeed.services.decoder import decode_event
from ghfeed.services.render import describe_event, render_feed


@pytest.mark.unit
class TestDescribeEvent:
    """Test describe_event for every event variant."""

    @pytest.mark.parametrize(
        "event_type,expected",
        [
            ("PushEvent", "octocat pushed 1 commit to octocat/Hello-World"),
            ("ForkEvent", "octocat forked octocat/Hello-World"),
            (
                "PullRequestReviewCommentEvent",
                'octocat commented on pull request #3 "Fix typo" in octocat/Hello-World',
            ),
            ("PullRequestEvent", 'octocat opened pull request #3 "Fix typo" in octocat/Hello-World'),
            (
                "IssueCommentEvent",
                'octocat commented on issue #7 "Crash on start" in octocat/Hello-World',
            ),
            ("IssuesEvent", 'octocat closed issue #7 "Crash on start" in octocat/Hello-World'),
            ("CommitCommentEvent", "octocat commented on a commit in octocat/Hello-World"),
            ("WatchEvent", "octocat starred octocat/Hello-World"),
            ("DeleteEvent", "octocat deleted branch feature/old in octocat/Hello-World"),
            ("MemberEvent", "octocat added hubot as a collaborator to octocat/Hello-World"),
            ("CreateEvent", "octocat created tag v1.0.0 in octocat/Hello-World"),
            ("GollumEvent", "octocat triggered GollumEvent in octocat/Hello-World"),
        ],
    )
    def test_describe(self, raw_event_factory, event_type, expected):
        """Test the summary line of each event type."""
        assert describe_event(decode_event(raw_event_factory(event_type))) == expected

    def test_push_plural(self, raw_event_factory):
        """Test commit counts are pluralised."""
        raw = raw_event_factory("PushEvent", payload={"head": "b", "commits": [{"sha": "a"}, {"sha": "b"}]})

        assert describe_event(decode_event(raw)) == "octocat pushed 2 commits to octocat/Hello-World"

    def test_created_repository(self, raw_event_factory):
        """Test repository creation has no ref."""
        raw = raw_event_factory("CreateEvent", payload={"ref": None, "ref_type": "repository"})

        assert describe_event(decode_event(raw)) == "octocat created repository octocat/Hello-World"


@pytest.mark.unit
class TestRenderFeed:
    """Test render_feed."""

    def test_render_lines(self, sample_github_events):
        """Test one timestamped line per event, in the given order."""
        events = [decode_event(raw) for raw in sample_github_events]

        assert render_feed(events) == (
            "2024-01-15T12:00:00Z  octocat pushed 1 commit to octocat/Hello-World\n"
            "2024-01-14T08:30:00Z  octocat starred octocat/Hello-World"
        )

    def test_render_empty(self):
        """Test an empty feed renders as an empty string."""
        assert render_feed([]) == ""
