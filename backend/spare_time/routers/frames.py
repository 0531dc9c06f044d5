# backend/spare_time/routers/frames.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import get_session
from ..exceptions import ProblemDetail, http_problem
from ..models import FrameRecord
from ..schemas import CardOut, FrameOut, FrameUpsert
from ..scoring import Frame, frame_marks
from ..services import final_total, load_frames, save_frame

# Resource-only prefix; versioning is added in main.py
router = APIRouter(
    prefix="/frames",
    tags=["frames"],
    responses={404: {"model": ProblemDetail}, 422: {"model": ProblemDetail}},
)


def _to_frame_out(match_id: str, frame: Frame, record: FrameRecord | None) -> FrameOut:
    return FrameOut(
        match_id=match_id,
        frame_number=frame.id,
        first_shot=frame.first_shot,
        second_shot=frame.second_shot,
        third_shot=frame.third_shot,
        is_strike=frame.is_strike,
        is_spare=frame.is_spare,
        pins_standing=list(record.pins_standing or []) if record else [],
        running_total=frame.running_total,
        marks=list(frame_marks(frame)),
        line_drawing=record.line_drawing if record else None,
    )


def _to_card_out(
    match_id: str,
    frames: list[Frame],
    records: dict[int, FrameRecord],
    changed: list[int] | None = None,
) -> CardOut:
    return CardOut(
        match_id=match_id,
        frames=[_to_frame_out(match_id, f, records.get(f.id)) for f in frames],
        total_score=final_total(frames),
        changed=changed or [],
    )


# PUT /api/v0/frames
@router.put("", response_model=CardOut)
async def upsert_frame(
    body: FrameUpsert, session: AsyncSession = Depends(get_session)
) -> CardOut:
    edited = Frame(
        id=body.frame_number,
        first_shot=body.first_shot,
        second_shot=body.second_shot,
        third_shot=body.third_shot,
    )
    line_drawing = body.line_drawing.model_dump() if body.line_drawing else None
    try:
        saved = await save_frame(
            session,
            body.match_id,
            edited,
            pins_standing=body.pins_standing,
            line_drawing=line_drawing,
        )
    except ValueError as exc:
        raise http_problem(status_code=422, detail=str(exc), code="invalid_frame")
    return _to_card_out(body.match_id, saved.frames, saved.records, saved.changed)


# GET /api/v0/frames/match/{match_id}
@router.get("/match/{match_id}", response_model=CardOut)
async def get_card(
    match_id: str, session: AsyncSession = Depends(get_session)
) -> CardOut:
    frames, records = await load_frames(session, match_id)
    return _to_card_out(match_id, frames, records)
