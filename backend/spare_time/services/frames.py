"""Load, rescore and persist the frames of a match."""

from __future__ import annotations

import asyncio
import logging
import uuid
import weakref
from typing import Any, NamedTuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import MatchNotFound
from ..models import FrameRecord, Match
from ..scoring import Frame, changed_frames, upsert_frame, with_running_totals
from ..scoring.frame import FRAME_COUNT

logger = logging.getLogger(__name__)

# One lock per match id; idle locks are dropped with their last reference.
_match_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = (
    weakref.WeakValueDictionary()
)


def match_lock(match_id: str) -> asyncio.Lock:
    """Return the lock that serializes edits to ``match_id``."""

    lock = _match_locks.get(match_id)
    if lock is None:
        lock = asyncio.Lock()
        _match_locks[match_id] = lock
    return lock


class SavedCard(NamedTuple):
    frames: list[Frame]
    records: dict[int, FrameRecord]
    changed: list[int]
    total_score: int | None


async def get_active_match(session: AsyncSession, match_id: str) -> Match:
    match = await session.get(Match, match_id)
    if match is None or match.deleted_at is not None:
        raise MatchNotFound(match_id)
    return match


def record_to_frame(record: FrameRecord, *, with_total: bool = False) -> Frame:
    return Frame(
        id=record.frame_number,
        first_shot=record.first_shot,
        second_shot=record.second_shot,
        third_shot=record.third_shot,
        running_total=record.running_total if with_total else None,
    )


async def load_records(session: AsyncSession, match_id: str) -> dict[int, FrameRecord]:
    rows = (
        await session.execute(
            select(FrameRecord)
            .where(FrameRecord.match_id == match_id)
            .order_by(FrameRecord.frame_number)
        )
    ).scalars().all()
    return {row.frame_number: row for row in rows}


def _card_from_records(records: dict[int, FrameRecord]) -> list[Frame]:
    return [
        record_to_frame(records[i]) if i in records else Frame(id=i)
        for i in range(1, FRAME_COUNT + 1)
    ]


def final_total(frames: list[Frame]) -> int | None:
    resolved = [f.running_total for f in frames if f.running_total is not None]
    return resolved[-1] if resolved else None


async def load_frames(session: AsyncSession, match_id: str) -> tuple[list[Frame], dict[int, FrameRecord]]:
    """Rebuild the full ten-frame card for a match, freshly scored."""

    await get_active_match(session, match_id)
    records = await load_records(session, match_id)
    return with_running_totals(_card_from_records(records)), records


def _apply_frame(record: FrameRecord, frame: Frame) -> None:
    record.first_shot = frame.first_shot
    record.second_shot = frame.second_shot
    record.third_shot = frame.third_shot
    record.is_strike = frame.is_strike
    record.is_spare = frame.is_spare
    record.running_total = frame.running_total


async def save_frame(
    session: AsyncSession,
    match_id: str,
    edited: Frame,
    *,
    pins_standing: list[int] | None = None,
    line_drawing: dict[str, Any] | None = None,
) -> SavedCard:
    """Upsert one frame, rescore the card and write back only what changed.

    Raises ``ValueError`` when the edited frame is not a possible frame.
    """

    if not edited.is_well_formed:
        raise ValueError(f"frame {edited.id} is not a possible frame")

    async with match_lock(match_id):
        match = await get_active_match(session, match_id)
        records = await load_records(session, match_id)
        before = [record_to_frame(r, with_total=True) for r in records.values()]
        after = upsert_frame(_card_from_records(records), edited)

        changed = {
            f.id
            for f in changed_frames(before, after)
            if f.id in records or f.first_shot is not None
        }
        changed.add(edited.id)

        for frame in after:
            if frame.id not in changed:
                continue
            record = records.get(frame.id)
            if record is None:
                record = FrameRecord(
                    id=uuid.uuid4().hex,
                    match_id=match_id,
                    frame_number=frame.id,
                    pins_standing=[],
                )
                session.add(record)
                records[frame.id] = record
            _apply_frame(record, frame)
            if frame.id == edited.id:
                record.pins_standing = list(pins_standing or [])
                record.line_drawing = line_drawing

        total = final_total(after)
        match.total_score = total
        await session.commit()

    logger.info(
        "Rescored match %s after editing frame %d; %d frame(s) written, total=%s",
        match_id,
        edited.id,
        len(changed),
        total,
    )
    return SavedCard(after, records, sorted(changed), total)
