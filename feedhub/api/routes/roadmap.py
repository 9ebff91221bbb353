import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from feedhub.db.session import get_db
from feedhub.db.models import Feedback
from feedhub.schemas.roadmap import RoadmapMove, RoadmapRead, StatusOption
from feedhub.core.board import Board
from feedhub.core.services import get_project_or_404, record_status_change, to_card
from feedhub.core.statuses import STATUS_META, parse_status, status_options

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["roadmap"])


def serialize_board(board: Board, moved: bool = False) -> dict:
    columns = []
    for key, cards in board.columns().items():
        status = board.status_of(key)
        meta = STATUS_META[status]
        columns.append(
            {
                "key": key,
                "label": status.label,
                "icon": meta.icon,
                "color": meta.color,
                "items": [
                    {
                        "id": c.id,
                        "title": c.title,
                        "status": c.status,
                        "upvotes": c.upvotes,
                        "has_upvoted": c.has_upvoted,
                        "tags": [{"name": t.name, "color": t.color} for t in c.tags],
                    }
                    for c in cards
                ],
            }
        )
    return {"columns": columns, "moved": moved}


async def load_board(db: AsyncSession, project_id: str, viewer: Optional[str]) -> Board:
    """Snapshot the project's feedback into a board.

    A card sits after every card that was created or moved into its column
    before it, so a moved card stays at the end of its new column.
    """
    result = await db.execute(
        select(Feedback)
        .where(Feedback.project_id == project_id)
        .order_by(func.coalesce(Feedback.moved_at, Feedback.created_at), Feedback.created_at)
    )
    return Board.from_cards(to_card(f, viewer) for f in result.scalars().all())


@router.get("/statuses", response_model=list[StatusOption])
async def list_statuses():
    return status_options()


@router.get("/projects/{slug}/roadmap", response_model=RoadmapRead)
async def get_roadmap(
    slug: str,
    viewer: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    project = await get_project_or_404(db, slug)
    board = await load_board(db, project.id, viewer)
    return serialize_board(board)


@router.post("/projects/{slug}/roadmap/moves", response_model=RoadmapRead)
async def move_card(
    request: Request,
    slug: str,
    move: RoadmapMove,
    viewer: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """Drop a card on a roadmap column.

    Drops of unknown cards, on unknown columns or on the card's own column
    leave the roadmap unchanged and report ``moved: false``.
    """
    project = await get_project_or_404(db, slug)
    board = await load_board(db, project.id, viewer)

    target = parse_status(move.target)
    board.begin_drag(move.item_id)
    change = board.end_drag(move.item_id, target.key if target else move.target)

    if change is None:
        return serialize_board(board)

    await record_status_change(db, request.app.state.redis, change.item_id, change.status)
    return serialize_board(board, moved=True)
