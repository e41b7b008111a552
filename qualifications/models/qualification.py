from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from qualifications.core.grading import (
    QUALIFICATIONS_PER_SUBJECT,
    as_decimal,
    as_points,
    fits_cap,
    total_percent,
    weighted_total,
)
from qualifications.db.base import Base
from qualifications.models.activity import Activity
from qualifications.models.common import UUIDPrimaryKeyMixin


class Qualification(UUIDPrimaryKeyMixin, Base):
    """One grading period of a subject.

    Mutating methods never recalculate on their own: callers run ``calculate()``
    once the activity set is final. A mutation that would push the summed
    percentages over the cap returns False and leaves the collection untouched.
    """

    __tablename__ = "qualifications"
    __table_args__ = (
        UniqueConstraint("subject_code", "cort", name="uq_qualifications_subject_cort"),
        CheckConstraint(f"cort >= 1 AND cort <= {QUALIFICATIONS_PER_SUBJECT}", name="ck_qualifications_cort_range"),
    )

    subject_code: Mapped[str] = mapped_column(
        String(10), ForeignKey("subjects.code", ondelete="CASCADE"), nullable=False, index=True
    )
    cort: Mapped[int] = mapped_column(Integer, nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(12, 4), nullable=False, default=Decimal("0"))
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    subject = relationship("Subject", back_populates="qualifications")
    activities = relationship(
        "Activity",
        back_populates="qualification",
        cascade="all, delete-orphan",
        order_by="Activity.created_at",
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def total_activities_percent(self) -> Decimal:
        return total_percent(self.activities)

    def add_activity(self, activity: Activity) -> bool:
        if not fits_cap(self.activities, activity.percent):
            return False
        self.activities.append(activity)
        return True

    def edit_activity(self, activity: Activity, percent, score, name: str | None = None) -> bool:
        if activity not in self.activities:
            return False
        new_percent = as_points(percent)
        # Checked on the delta so the activity's current weight is not counted twice.
        if not fits_cap(self.activities, new_percent - as_decimal(activity.percent)):
            return False
        activity.percent = new_percent
        activity.score = as_points(score)
        if name is not None:
            activity.name = name
        return True

    def remove_activity(self, activity_id: str) -> Activity | None:
        for activity in self.activities:
            if activity.id == activity_id:
                self.activities.remove(activity)
                return activity
        return None

    def calculate(self) -> Decimal:
        self.total = weighted_total(self.activities)
        return self.total
