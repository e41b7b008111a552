from decimal import Decimal

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from qualifications.core.grading import QUALIFICATIONS_PER_SUBJECT, definitive_score
from qualifications.db.base import Base
from qualifications.models.common import CreatedAtMixin
from qualifications.models.qualification import Qualification


class Subject(CreatedAtMixin, Base):
    __tablename__ = "subjects"

    code: Mapped[str] = mapped_column(String(10), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    owner = relationship("User", back_populates="subjects")
    qualifications = relationship(
        "Qualification",
        back_populates="subject",
        cascade="all, delete-orphan",
        order_by="Qualification.cort",
    )

    @classmethod
    def create(cls, code: str, name: str, owner_id: str) -> "Subject":
        subject = cls(code=code, name=name, owner_id=owner_id)
        for cort in range(1, QUALIFICATIONS_PER_SUBJECT + 1):
            subject.qualifications.append(Qualification(cort=cort, total=Decimal("0")))
        return subject

    @property
    def definitive(self) -> Decimal:
        for qualification in self.qualifications:
            qualification.calculate()
        return definitive_score(qualification.total for qualification in self.qualifications)
