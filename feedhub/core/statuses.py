from enum import Enum
from typing import Dict, List, NamedTuple, Optional


class Status(str, Enum):
    OPEN = "Open"
    UNDER_REVIEW = "Under Review"
    PLANNED = "Planned"
    IN_PROGRESS = "In Progress"
    DONE = "Done"
    CLOSED = "Closed"

    @property
    def label(self) -> str:
        return self.value

    @property
    def key(self) -> str:
        return self.value.lower()


class StatusMeta(NamedTuple):
    icon: str
    color: str


# Board columns are laid out in this order.
STATUSES = tuple(Status)

STATUS_META: Dict[Status, StatusMeta] = {
    Status.OPEN: StatusMeta(icon="circle-dashed", color="#a1a1aa"),
    Status.UNDER_REVIEW: StatusMeta(icon="circle-dot", color="#f59e0b"),
    Status.PLANNED: StatusMeta(icon="circle", color="#3b82f6"),
    Status.IN_PROGRESS: StatusMeta(icon="circle-ellipsis", color="#8b5cf6"),
    Status.DONE: StatusMeta(icon="check-circle", color="#22c55e"),
    Status.CLOSED: StatusMeta(icon="x-circle", color="#ef4444"),
}

_LOOKUP: Dict[str, Status] = {}
for _status in STATUSES:
    _LOOKUP[_status.key] = _status
    _LOOKUP[_status.name.lower()] = _status
    _LOOKUP[_status.key.replace(" ", "-")] = _status


def parse_status(label: Optional[str]) -> Optional[Status]:
    """Resolve a label, column key or enum name to a Status.

    Matching ignores case and surrounding whitespace. Returns None when the
    label names no known status.
    """
    if not label:
        return None
    return _LOOKUP.get(label.strip().lower())


def status_meta(label: Optional[str]) -> StatusMeta:
    """Icon and color for a status label, falling back to the first status."""
    status = parse_status(label) or STATUSES[0]
    return STATUS_META[status]


def status_options() -> List[dict]:
    return [
        {
            "key": status.key,
            "label": status.label,
            "icon": STATUS_META[status].icon,
            "color": STATUS_META[status].color,
        }
        for status in STATUSES
    ]
