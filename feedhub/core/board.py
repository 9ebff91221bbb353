"""In-memory roadmap board: feedback cards grouped into status columns.

A card lives in exactly one column at a time and its ``status`` always
matches that column. The column set comes from the status enumeration and
is fixed for the lifetime of a board. Drag gestures are the main mutators;
drops on an unknown column, on the card's own column or of a card that no
longer exists are ignored rather than reported.
"""
import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from feedhub.core.statuses import STATUSES, Status, parse_status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tag:
    name: str
    color: str


@dataclass(frozen=True)
class FeedbackCard:
    id: str
    title: str
    status: str = Status.OPEN.label
    upvotes: int = 0
    has_upvoted: bool = False
    tags: Tuple[Tag, ...] = field(default_factory=tuple)


class StatusChange(NamedTuple):
    item_id: str
    status: Status


class Board:
    def __init__(
        self,
        columns: Optional[Mapping[str, Iterable[FeedbackCard]]] = None,
        statuses: Sequence[Status] = STATUSES,
    ):
        self._statuses: Dict[str, Status] = {s.key: s for s in statuses}
        self._columns: Dict[str, Dict[str, FeedbackCard]] = {key: {} for key in self._statuses}
        self._owner: Dict[str, str] = {}
        self._active: Optional[str] = None

        for key, cards in (columns or {}).items():
            status = parse_status(key)
            if status is None or status.key not in self._columns:
                raise ValueError(f"Unknown board column: {key!r}")
            for card in cards:
                if card.id in self._owner:
                    raise ValueError(f"Card {card.id!r} appears in more than one column")
                self._place(card, status.key)

    @classmethod
    def from_cards(cls, cards: Iterable[FeedbackCard], statuses: Sequence[Status] = STATUSES) -> "Board":
        """Partition a flat card list by status.

        Cards with an unrecognised status land in the first column.
        """
        grouped: Dict[str, List[FeedbackCard]] = {s.key: [] for s in statuses}
        fallback = statuses[0].key
        for card in cards:
            status = parse_status(card.status)
            key = status.key if status is not None and status.key in grouped else fallback
            grouped[key].append(card)
        return cls(grouped, statuses)

    # -------------------- queries --------------------
    def keys(self) -> List[str]:
        return list(self._columns)

    def column(self, key: str) -> Tuple[FeedbackCard, ...]:
        return tuple(self._columns.get(key, {}).values())

    def columns(self) -> Dict[str, Tuple[FeedbackCard, ...]]:
        return {key: tuple(cards.values()) for key, cards in self._columns.items()}

    def status_of(self, key: str) -> Optional[Status]:
        return self._statuses.get(key)

    def locate(self, item_id: str) -> Optional[Tuple[str, FeedbackCard]]:
        key = self._owner.get(item_id)
        if key is None:
            return None
        return key, self._columns[key][item_id]

    def active_item(self) -> Optional[FeedbackCard]:
        if self._active is None:
            return None
        found = self.locate(self._active)
        return found[1] if found else None

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._owner

    def __len__(self) -> int:
        return len(self._owner)

    # -------------------- drag gestures --------------------
    def begin_drag(self, item_id: str) -> None:
        if item_id not in self._owner:
            logger.debug(f"Ignoring drag of unknown card {item_id}")
            return
        self._active = item_id

    def end_drag(self, item_id: str, target_key: str) -> Optional[StatusChange]:
        """Drop a card on a column.

        Returns the status change to persist, or None when the drop left
        the board untouched.
        """
        self._active = None
        status = self._statuses.get(target_key)
        if status is None:
            return None
        return self.set_status(item_id, status)

    # -------------------- explicit edits --------------------
    def set_status(self, item_id: str, status: Status) -> Optional[StatusChange]:
        """Relocate a card to the column of ``status``, appended at its end."""
        found = self.locate(item_id)
        if found is None or status.key not in self._columns or found[0] == status.key:
            return None
        return self._move(item_id, found[0], status.key)

    # -------------------- internals --------------------
    def _place(self, card: FeedbackCard, key: str) -> None:
        label = self._statuses[key].label
        if card.status != label:
            card = dataclasses.replace(card, status=label)
        self._columns[key][card.id] = card
        self._owner[card.id] = key

    def _move(self, item_id: str, source: str, target: str) -> StatusChange:
        card = self._columns[source].pop(item_id)
        self._place(card, target)
        logger.debug(f"Moved card {item_id} from {source} to {target}")
        return StatusChange(item_id, self._statuses[target])
