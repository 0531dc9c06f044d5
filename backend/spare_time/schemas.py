from typing import List, Optional
from datetime import datetime, timezone
from pydantic import BaseModel, Field, model_validator, field_validator, ConfigDict

from .scoring.frame import FRAME_COUNT, PIN_COUNT, SPARE


class ShotsIn(BaseModel):
    """Raw shot entries for one frame, ``-1`` meaning "spare"."""

    first_shot: Optional[int] = Field(default=None, ge=0, le=PIN_COUNT)
    second_shot: Optional[int] = Field(default=None, ge=SPARE, le=PIN_COUNT)
    third_shot: Optional[int] = Field(default=None, ge=SPARE, le=PIN_COUNT)


class ScoreFrameIn(ShotsIn):
    id: int


class ScoreRequest(BaseModel):
    frames: List[ScoreFrameIn]


class ScoreOut(BaseModel):
    running_totals: List[Optional[int]]
    marks: List[List[str]]
    total: Optional[int] = None
    complete: bool


class LaneCoordinate(BaseModel):
    x: float = Field(..., ge=0, le=3.5)   # feet across the lane
    y: float = Field(..., ge=0, le=63)    # feet from the foul line


class LineDrawing(BaseModel):
    release: LaneCoordinate
    arrows: LaneCoordinate
    breakpoint: LaneCoordinate
    entry_point: LaneCoordinate


class FrameUpsert(ShotsIn):
    match_id: str = Field(..., min_length=1)
    frame_number: int = Field(..., ge=1, le=FRAME_COUNT)
    pins_standing: List[int] = Field(default_factory=list)
    line_drawing: Optional[LineDrawing] = None

    @field_validator("pins_standing")
    @classmethod
    def _validate_pins(cls, value: List[int]) -> List[int]:
        if any(pin < 1 or pin > PIN_COUNT for pin in value):
            raise ValueError(f"pin ids must be between 1 and {PIN_COUNT}")
        if len(set(value)) != len(value):
            raise ValueError("pin ids must be unique")
        return sorted(value)

    @model_validator(mode="after")
    def _check_shots(self):
        if self.second_shot is not None and self.first_shot is None:
            raise ValueError("second_shot requires first_shot")
        if self.third_shot is not None and self.second_shot is None:
            raise ValueError("third_shot requires second_shot")
        if self.third_shot is not None and self.frame_number != FRAME_COUNT:
            raise ValueError("third_shot is only allowed in the tenth frame")
        return self


class FrameOut(BaseModel):
    match_id: str
    frame_number: int
    first_shot: Optional[int] = None
    second_shot: Optional[int] = None
    third_shot: Optional[int] = None
    is_strike: bool = False
    is_spare: bool = False
    pins_standing: List[int] = Field(default_factory=list)
    running_total: Optional[int] = None
    marks: List[str] = Field(default_factory=lambda: ["", "", ""])
    line_drawing: Optional[LineDrawing] = None


class CardOut(BaseModel):
    match_id: str
    frames: List[FrameOut]
    total_score: Optional[int] = None
    changed: List[int] = Field(default_factory=list)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Naive timestamps from clients are taken to be UTC already.
    if value is None:
        return None
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class MatchCreate(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=100)
    date_played: datetime
    lane: Optional[int] = Field(default=None, ge=1)
    location: Optional[str] = Field(default=None, max_length=200)
    notes: Optional[str] = Field(default=None, max_length=2000)

    model_config = ConfigDict(extra="ignore")

    @field_validator("user_id", mode="before")
    @classmethod
    def _validate_user_id(cls, value: str) -> str:
        if not isinstance(value, str):
            raise TypeError("user_id must be a string")
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("user_id must not be empty")
        return trimmed

    @field_validator("date_played")
    @classmethod
    def _normalize_date(cls, value: datetime) -> datetime:
        return _as_utc(value)


class MatchUpdate(BaseModel):
    date_played: Optional[datetime] = None
    lane: Optional[int] = Field(default=None, ge=1)
    location: Optional[str] = Field(default=None, max_length=200)
    notes: Optional[str] = Field(default=None, max_length=2000)

    model_config = ConfigDict(extra="ignore")

    @field_validator("date_played")
    @classmethod
    def _normalize_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(value)


class MatchOut(BaseModel):
    id: str
    user_id: str
    date_played: datetime
    total_score: Optional[int] = None
    lane: Optional[int] = None
    location: Optional[str] = None
    notes: Optional[str] = None
