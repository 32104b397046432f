"""SQLAlchemy ORM model for per-user key/value state."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from sitebuilder.infrastructure.database.base import Base


class UserStateModel(Base):
    """ORM model — maps to the 'user_state' table.

    ``value`` holds the caller's serialized JSON verbatim.
    """

    __tablename__ = "user_state"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    key: Mapped[str] = mapped_column(String(100), nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "key", name="uq_user_state_user_key"),
    )

    def __repr__(self) -> str:
        return f"<UserStateModel(user_id='{self.user_id}', key='{self.key}')>"
