from fastapi import APIRouter

from ..exceptions import InvalidFrameSequence, ProblemDetail
from ..schemas import ScoreOut, ScoreRequest
from ..scoring import Frame, FrameSequenceError, frame_marks, running_totals

# Stateless scoring; nothing here touches the database.
router = APIRouter(
    prefix="/scores",
    tags=["scores"],
    responses={422: {"model": ProblemDetail}},
)


@router.post("", response_model=ScoreOut)
async def score_card(body: ScoreRequest) -> ScoreOut:
    frames = [
        Frame(
            id=f.id,
            first_shot=f.first_shot,
            second_shot=f.second_shot,
            third_shot=f.third_shot,
        )
        for f in body.frames
    ]
    try:
        totals = running_totals(frames)
    except FrameSequenceError as exc:
        raise InvalidFrameSequence(str(exc))

    resolved = [t for t in totals if t is not None]
    return ScoreOut(
        running_totals=totals,
        marks=[list(frame_marks(f)) for f in frames],
        total=resolved[-1] if resolved else None,
        complete=totals[-1] is not None,
    )
