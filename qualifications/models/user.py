from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from qualifications.db.base import Base
from qualifications.models.common import CreatedAtMixin, UUIDPrimaryKeyMixin


class User(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "users"

    login: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(512), nullable=False)

    subjects = relationship("Subject", back_populates="owner", cascade="all, delete-orphan")
