from sqlalchemy.orm import relationship
from sqlalchemy import (
    Column,
    String,
    DateTime,
    ForeignKey,
    JSON,
    Integer,
    Boolean,
    Text,
    UniqueConstraint,
)
from sqlalchemy.sql import func
from .db import Base


class Match(Base):
    """One bowled game (ten frames) owned by a user."""

    __tablename__ = "match"
    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    date_played = Column(DateTime(timezone=True), nullable=False)
    total_score = Column(Integer, nullable=True)
    lane = Column(Integer, nullable=True)
    location = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    deleted_at = Column(DateTime, nullable=True)

    frames = relationship(
        "FrameRecord",
        cascade="all, delete-orphan",
        order_by="FrameRecord.frame_number",
        back_populates="match",
    )


class FrameRecord(Base):
    __tablename__ = "frame"
    id = Column(String, primary_key=True)
    match_id = Column(String, ForeignKey("match.id", ondelete="CASCADE"), nullable=False)
    frame_number = Column(Integer, nullable=False)
    first_shot = Column(Integer, nullable=True)
    second_shot = Column(Integer, nullable=True)   # -1 = spare
    third_shot = Column(Integer, nullable=True)    # tenth frame only
    is_strike = Column(Boolean, nullable=False, default=False)
    is_spare = Column(Boolean, nullable=False, default=False)
    pins_standing = Column(JSON, nullable=False, default=list)
    running_total = Column(Integer, nullable=True)
    line_drawing = Column(JSON, nullable=True)
    updated_at = Column(
        DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )

    match = relationship("Match", back_populates="frames")

    __table_args__ = (
        UniqueConstraint(
            "match_id", "frame_number", name="uq_frame_match_id_frame_number"
        ),
    )
