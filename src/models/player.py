"""players table model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class PlayerRow(Base):
    """Registered player. ``elo_rating`` is owned by the rating replay."""

    __tablename__ = "players"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    elo_rating: Mapped[int] = mapped_column(Integer, nullable=False, default=1200, server_default="1200")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )


Index("uq_players_name_lower", func.lower(PlayerRow.name), unique=True)
