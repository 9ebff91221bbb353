from typing import Iterable, List, Optional

from feedhub.db.models import Feedback

SORT_OPTIONS = ("newest", "oldest", "upvotes")


def split_tags(raw: Optional[str]) -> List[str]:
    """Comma separated tag names, lower-cased, blanks dropped."""
    if not raw:
        return []
    return [t.strip().lower() for t in raw.split(",") if t.strip()]


def filter_feedback(
    feedback: Iterable[Feedback],
    search: Optional[str] = None,
    tags: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Feedback]:
    """Apply the dashboard's query-string filters to a feedback list."""
    wanted_tags = split_tags(tags)
    search = (search or "").lower()
    status = (status or "").lower()

    result = []
    for fb in feedback:
        if search and search not in fb.title.lower():
            continue
        if wanted_tags and not any(t.name.lower() in wanted_tags for t in fb.tags):
            continue
        if status and status not in (fb.status or "").lower():
            continue
        result.append(fb)
    return result


def sort_feedback(feedback: List[Feedback], sort: Optional[str] = None) -> List[Feedback]:
    if sort == "oldest":
        return sorted(feedback, key=lambda f: f.created_at)
    if sort == "upvotes":
        return sorted(feedback, key=lambda f: (f.upvotes, f.created_at), reverse=True)
    return sorted(feedback, key=lambda f: f.created_at, reverse=True)
