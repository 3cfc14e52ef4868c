import uuid
from datetime import date, datetime, timezone

from sqlalchemy import String, DateTime, Boolean, Date
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sigo.core.database import Base


class Person(Base):
    __tablename__ = "personnel"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)

    re: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)  # registration number
    check_digit: Mapped[str | None] = mapped_column(String(2), nullable=True)
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    war_name: Mapped[str] = mapped_column(String(100), nullable=False)
    rank: Mapped[str] = mapped_column(String(10), nullable=False)  # SD | CB | SGT3 | ... | CAP
    function: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    subunit: Mapped[str | None] = mapped_column(String(100), nullable=True)

    inclusion_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
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
    leaves: Mapped[list["Leave"]] = relationship(back_populates="person")
    restrictions: Mapped[list["Restriction"]] = relationship(back_populates="person")
