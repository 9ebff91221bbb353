from datetime import datetime, timedelta
from types import SimpleNamespace

from feedhub.core.filters import filter_feedback, sort_feedback, split_tags
from feedhub.core.statuses import STATUS_META, Status, parse_status, status_meta, status_options


def test_parse_status_is_case_insensitive():
    assert parse_status("Under Review") is Status.UNDER_REVIEW
    assert parse_status("under review") is Status.UNDER_REVIEW
    assert parse_status("IN_PROGRESS") is Status.IN_PROGRESS
    assert parse_status("in-progress") is Status.IN_PROGRESS
    assert parse_status("backlog") is None
    assert parse_status(None) is None
    assert parse_status("In Progress").key == "in progress"


def test_status_meta_falls_back_to_first_status():
    assert status_meta("done") == STATUS_META[Status.DONE]
    assert status_meta("unknown") == STATUS_META[Status.OPEN]
    assert status_meta(None) == STATUS_META[Status.OPEN]


def test_status_options_order():
    labels = [o["label"] for o in status_options()]
    assert labels == ["Open", "Under Review", "Planned", "In Progress", "Done", "Closed"]


def fb(title, status="open", tags=(), upvotes=0, age=0):
    return SimpleNamespace(
        title=title,
        status=status,
        upvotes=upvotes,
        tags=[SimpleNamespace(name=t) for t in tags],
        created_at=datetime(2026, 1, 1) - timedelta(days=age),
    )


FEEDBACK = [
    fb("Dark mode", "planned", ["UI"], upvotes=3, age=2),
    fb("Export to CSV", "open", ["Data"], upvotes=9, age=1),
    fb("Dark theme for emails", "done", ["UI", "Email"], upvotes=1, age=0),
]


def test_split_tags():
    assert split_tags("UI, data,,") == ["ui", "data"]
    assert split_tags(None) == []


def test_filter_by_search():
    assert [f.title for f in filter_feedback(FEEDBACK, search="DARK")] == [
        "Dark mode",
        "Dark theme for emails",
    ]


def test_filter_by_any_tag():
    assert [f.title for f in filter_feedback(FEEDBACK, tags="email,data")] == [
        "Export to CSV",
        "Dark theme for emails",
    ]


def test_filter_by_status_substring():
    assert [f.title for f in filter_feedback(FEEDBACK, status="Plan")] == ["Dark mode"]


def test_empty_filters_keep_everything():
    assert filter_feedback(FEEDBACK, search="", tags="", status="") == FEEDBACK


def test_sorting():
    assert [f.title for f in sort_feedback(FEEDBACK)][0] == "Dark theme for emails"
    assert [f.title for f in sort_feedback(FEEDBACK, "oldest")][0] == "Dark mode"
    assert [f.title for f in sort_feedback(FEEDBACK, "upvotes")][0] == "Export to CSV"
