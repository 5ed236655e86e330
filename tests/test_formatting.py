"""Tests for Markdown rendering."""

from glitchtip import formatting
from glitchtip.events import LatestEvents
from glitchtip.models import Event, Issue, Organization, Project


def _issue(**overrides) -> Issue:
    data = {
        "id": "42", "title": "ZeroDivisionError: division by zero",
        "type": "error", "count": "17", "status": "unresolved",
        "firstSeen": "2024-05-01T10:00:00Z", "lastSeen": "2024-05-03T12:30:00Z",
    }
    data.update(overrides)
    return Issue.from_api(data)


class TestLists:
    def test_organizations(self):
        text = formatting.render_organizations([
            Organization(name="Acme Corp", slug="acme"),
            Organization(name="Globex", slug="globex"),
        ])

        assert text == (
            "# Organizations\n\n"
            "- Acme Corp (acme)\n"
            "- Globex (globex)\n\n"
            "Total: 2"
        )

    def test_organizations_empty(self):
        assert formatting.render_organizations([]) == "No organizations found."

    def test_projects_empty(self):
        assert formatting.render_projects("acme", []) == "No projects found."

    def test_projects(self):
        text = formatting.render_projects("acme", [Project(id=3, name="Web", slug="web")])

        assert text == "# Projects in acme\n\n- **Web** (web) - ID: 3\n\nTotal: 1"

    def test_issues_empty(self):
        assert formatting.render_issues("web", []) == "No issues found."

    def test_issues(self):
        text = formatting.render_issues("web", [_issue()])

        assert text.startswith("# Issues in web\n\n### ZeroDivisionError: division by zero\n")
        assert "- ID: 42\n" in text
        assert "- Count: 17\n" in text
        assert "- First seen: 2024-05-01T10:00:00Z\n" in text
        assert "- Last seen: 2024-05-03T12:30:00Z\n" in text

    def test_missing_field_renders_placeholder(self):
        text = formatting.render_issues("web", [Issue.from_api({"id": "1", "title": "x"})])

        assert "- Count: N/A" in text
        assert "None" not in text


class TestIssueDetail:
    def test_without_events_has_no_recent_events_heading(self):
        text = formatting.render_issue_detail(_issue(), [])

        assert text.startswith("# Issue: ZeroDivisionError: division by zero\n\n")
        assert "- **Type:** error\n" in text
        assert "- **Status:** unresolved\n" in text
        assert "Recent Events" not in text

    def test_events_with_message_and_context(self):
        event = Event.from_api({
            "eventID": "e1", "dateCreated": "2024-05-03T12:30:00Z",
            "message": "division by zero",
            "context": {"user": {"id": 5}},
        })

        text = formatting.render_issue_detail(_issue(), [event])

        assert "## Recent Events\n\n### Event e1\n- Time: 2024-05-03T12:30:00Z\n" in text
        assert "- Message: division by zero\n" in text
        assert '- Context: ```json\n{\n  "user": {\n    "id": 5\n  }\n}\n```\n' in text

    def test_non_dict_context_is_rendered(self):
        event = Event.from_api({
            "eventID": "e3", "dateCreated": "t3",
            "context": ["frame_a", "frame_b"],
        })

        text = formatting.render_issue_detail(_issue(), [event])

        assert '- Context: ```json\n[\n  "frame_a",\n  "frame_b"\n]\n```\n' in text

    def test_event_without_optional_fields(self):
        event = Event.from_api({"eventID": "e2", "dateCreated": "2024-05-03T12:30:00Z"})

        text = formatting.render_issue_detail(_issue(), [event])

        assert "### Event e2\n- Time: 2024-05-03T12:30:00Z\n\n" in text
        assert "Message" not in text
        assert "Context" not in text


class TestLatestEvents:
    def test_no_projects(self):
        assert formatting.render_latest_events(LatestEvents(no_projects=True)) == "No projects found."

    def test_no_events(self):
        assert formatting.render_latest_events(LatestEvents()) == "No recent events."

    def test_title_then_message_then_unknown(self):
        events = [
            Event(event_id="a", date_created="t1", title="Crash", message="ignored"),
            Event(event_id="b", date_created="t2", message="Only message"),
            Event(event_id="c", date_created="t3"),
        ]

        text = formatting.render_latest_events(LatestEvents(events=events))

        assert text == (
            "# Latest Events\n\n"
            "- **Crash**\n  Time: t1\n  ID: a\n\n"
            "- **Only message**\n  Time: t2\n  ID: b\n\n"
            "- **Unknown**\n  Time: t3\n  ID: c"
        )


class TestIssueEvents:
    def test_empty(self):
        assert formatting.render_issue_events("42", []) == "No events found."

    def test_tags_and_ordinals(self):
        events = [
            Event.from_api({
                "eventID": "e1", "dateCreated": "t1", "message": "boom",
                "tags": [{"key": "env", "value": "prod"}, {"key": "release", "value": "1.2"}],
            }),
            Event.from_api({"eventID": "e2", "dateCreated": "t2"}),
        ]

        text = formatting.render_issue_events("42", events)

        assert text.startswith("# Events for Issue 42\n\n### Event 1\n- ID: e1\n")
        assert "- Message: boom\n" in text
        assert "- Tags: env=prod, release=1.2\n" in text
        assert "### Event 2\n- ID: e2\n- Time: t2\n" in text
        assert text.count("Tags:") == 1
        assert "None" not in text

    def test_single_tag(self):
        event = Event.from_api({
            "eventID": "e1", "dateCreated": "t1",
            "tags": [{"key": "env", "value": "prod"}],
        })

        assert "Tags: env=prod" in formatting.render_issue_events("42", [event])


def test_resolved():
    assert formatting.render_resolved("7") == "✅ Issue 7 marked as resolved."
