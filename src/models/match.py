"""matches table model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class MatchRow(Base):
    """One recorded match. Seats 1/3 play against seats 2/4."""

    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint("player1_id <> player2_id", name="ck_matches_distinct_leads"),
        Index("idx_matches_date", "date", "id"),
        Index("idx_matches_player1", "player1_id"),
        Index("idx_matches_player2", "player2_id"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    player1_id: Mapped[str] = mapped_column(ForeignKey("players.id", ondelete="CASCADE"), nullable=False)
    player2_id: Mapped[str] = mapped_column(ForeignKey("players.id", ondelete="CASCADE"), nullable=False)
    player3_id: Mapped[str | None] = mapped_column(
        ForeignKey("players.id", ondelete="CASCADE"),
        nullable=True,
    )
    player4_id: Mapped[str | None] = mapped_column(
        ForeignKey("players.id", ondelete="CASCADE"),
        nullable=True,
    )
    is_doubles: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sets: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    winner_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    note: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
