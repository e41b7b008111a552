from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from qualifications.db.base import Base
from qualifications.models.common import CreatedAtMixin, UUIDPrimaryKeyMixin


class Activity(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "activities"
    __table_args__ = (CheckConstraint("percent >= 0", name="ck_activities_percent_non_negative"),)

    qualification_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("qualifications.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    percent: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    score: Mapped[Decimal] = mapped_column(Numeric(6, 2), nullable=False)

    qualification = relationship("Qualification", back_populates="activities")
