import uuid
from datetime import date, datetime, timezone

from sqlalchemy import String, DateTime, Boolean, ForeignKey, Text, Date, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sigo.core.database import Base


class Restriction(Base):
    __tablename__ = "restrictions"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    person_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("personnel.id"), nullable=False, index=True)

    codes: Mapped[list] = mapped_column(JSON, nullable=False)  # canonical, sorted
    has_critical: Mapped[bool] = mapped_column(Boolean, default=False)
    medical_opinion: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)

    document: Mapped[str] = mapped_column(String(100), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    deleted: Mapped[bool] = mapped_column(Boolean, default=False)
    created_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    person: Mapped["Person"] = relationship(back_populates="restrictions")
