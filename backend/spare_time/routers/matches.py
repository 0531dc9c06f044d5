# backend/spare_time/routers/matches.py
import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import get_session
from ..exceptions import ProblemDetail
from ..models import Match
from ..schemas import MatchCreate, MatchOut, MatchUpdate
from ..services import get_active_match

logger = logging.getLogger(__name__)

# Resource-only prefix; versioning is added in main.py
router = APIRouter(
    prefix="/matches",
    tags=["matches"],
    responses={404: {"model": ProblemDetail}},
)


def _to_match_out(match: Match) -> MatchOut:
    return MatchOut(
        id=match.id,
        user_id=match.user_id,
        date_played=match.date_played,
        total_score=match.total_score,
        lane=match.lane,
        location=match.location,
        notes=match.notes,
    )


@router.post("", response_model=MatchOut, status_code=status.HTTP_201_CREATED)
async def create_match(
    body: MatchCreate, session: AsyncSession = Depends(get_session)
) -> MatchOut:
    match = Match(
        id=uuid.uuid4().hex,
        user_id=body.user_id,
        date_played=body.date_played,
        lane=body.lane,
        location=body.location,
        notes=body.notes,
    )
    session.add(match)
    await session.commit()
    logger.info("Created match %s for user %s", match.id, match.user_id)
    return _to_match_out(match)


# GET /api/v0/matches?user_id=...
@router.get("", response_model=list[MatchOut])
async def list_matches(
    user_id: str = Query(..., min_length=1, description="Owner of the matches"),
    session: AsyncSession = Depends(get_session),
) -> list[MatchOut]:
    stmt = (
        select(Match)
        .where(Match.user_id == user_id, Match.deleted_at.is_(None))
        .order_by(Match.date_played.desc(), Match.id)
    )
    rows = (await session.execute(stmt)).scalars().all()
    return [_to_match_out(m) for m in rows]


@router.get("/{match_id}", response_model=MatchOut)
async def get_match(
    match_id: str, session: AsyncSession = Depends(get_session)
) -> MatchOut:
    match = await get_active_match(session, match_id)
    return _to_match_out(match)


@router.put("/{match_id}", response_model=MatchOut)
async def update_match(
    match_id: str,
    body: MatchUpdate,
    session: AsyncSession = Depends(get_session),
) -> MatchOut:
    match = await get_active_match(session, match_id)
    # total_score is derived from the frames and never taken from the client.
    for field, value in body.model_dump(exclude_unset=True).items():
        if field == "date_played" and value is None:
            continue
        setattr(match, field, value)
    await session.commit()
    return _to_match_out(match)


@router.delete("/{match_id}", status_code=204)
async def delete_match(
    match_id: str, session: AsyncSession = Depends(get_session)
) -> Response:
    match = await get_active_match(session, match_id)
    match.deleted_at = datetime.now(timezone.utc).replace(tzinfo=None)
    await session.commit()
    logger.info("Soft-deleted match %s", match_id)
    return Response(status_code=204)
