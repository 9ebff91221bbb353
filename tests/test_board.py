"""
Tests for the roadmap board: drag gestures, membership invariant, edits.
"""
import random

import pytest

from feedhub.core.board import Board, FeedbackCard, StatusChange, Tag
from feedhub.core.statuses import Status


def card(card_id, status="Open", **fields):
    return FeedbackCard(id=card_id, title=f"Card {card_id}", status=status, **fields)


def ids(cards):
    return [c.id for c in cards]


@pytest.fixture
def board():
    return Board({
        "open": [card("x"), card("y"), card("z")],
        "planned": [card("p", "Planned")],
    })


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Construction
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_columns_follow_status_order(board):
    assert board.keys() == ["open", "under review", "planned", "in progress", "done", "closed"]
    assert board.column("done") == ()
    assert len(board) == 4


def test_unknown_column_rejected():
    with pytest.raises(ValueError):
        Board({"backlog": [card("1")]})


def test_duplicate_card_rejected():
    with pytest.raises(ValueError):
        Board({"open": [card("1")], "done": [card("1", "Done")]})


def test_card_status_follows_column():
    board = Board({"done": [card("1", "Open")]})
    assert board.locate("1")[1].status == "Done"


def test_from_cards_partitions_by_status():
    board = Board.from_cards([card("1", "planned"), card("2", "weird"), card("3", "IN PROGRESS")])
    assert ids(board.column("planned")) == ["1"]
    assert ids(board.column("open")) == ["2"]
    assert ids(board.column("in progress")) == ["3"]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Drag gestures
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_locate(board):
    key, found = board.locate("y")
    assert key == "open"
    assert found.title == "Card y"
    assert board.locate("missing") is None


def test_drag_scenario():
    board = Board({"open": [card("1")], "done": []})
    assert board.active_item() is None

    board.begin_drag("1")
    assert board.active_item().id == "1"

    change = board.end_drag("1", "done")
    assert change == StatusChange("1", Status.DONE)
    assert board.column("open") == ()
    assert ids(board.column("done")) == ["1"]
    assert board.active_item() is None


def test_relocation_preserves_remaining_order(board):
    board.end_drag("y", "planned")
    assert ids(board.column("open")) == ["x", "z"]
    assert ids(board.column("planned")) == ["p", "y"]
    assert board.locate("y")[1].status == "Planned"


def test_drop_on_same_column_is_noop(board):
    before = board.columns()
    board.begin_drag("y")
    assert board.end_drag("y", "open") is None
    assert board.columns() == before
    assert board.active_item() is None


def test_drop_on_unknown_column_is_noop(board):
    before = board.columns()
    for _ in range(3):
        assert board.end_drag("y", "nonexistent-key") is None
    assert board.columns() == before


def test_drop_of_unknown_card_is_noop(board):
    before = board.columns()
    assert board.end_drag("missing-id", "done") is None
    assert board.columns() == before


def test_begin_drag_of_unknown_card_is_ignored(board):
    board.begin_drag("missing-id")
    assert board.active_item() is None


def test_random_moves_keep_every_card_in_one_column():
    rng = random.Random(7)
    board = Board.from_cards([card(str(i)) for i in range(20)])
    targets = board.keys() + ["nowhere", ""]
    card_ids = [str(i) for i in range(25)]

    for _ in range(500):
        item_id = rng.choice(card_ids)
        board.begin_drag(item_id)
        board.end_drag(item_id, rng.choice(targets))

    placed = [c.id for cards in board.columns().values() for c in cards]
    assert sorted(placed) == sorted(str(i) for i in range(20))
    for key, cards in board.columns().items():
        assert all(c.status == board.status_of(key).label for c in cards)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Explicit edits
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_set_status(board):
    assert board.set_status("x", Status.CLOSED) == StatusChange("x", Status.CLOSED)
    assert ids(board.column("closed")) == ["x"]
    assert board.set_status("x", Status.CLOSED) is None
    assert board.set_status("missing", Status.DONE) is None


def test_move_keeps_card_payload():
    board = Board({"open": [card("1", upvotes=4, has_upvoted=True, tags=(Tag("bug", "#f00"),))]})
    board.end_drag("1", "done")
    moved = board.locate("1")[1]
    assert "1" in board
    assert (moved.upvotes, moved.has_upvoted, moved.tags) == (4, True, (Tag("bug", "#f00"),))
