"""SQLAlchemy models for user accounts."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from core.models.base import Base, IntegerIdMixin


class User(IntegerIdMixin, Base):
    """A registered user. Only the bcrypt digest of the password is stored."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    email: Mapped[str] = mapped_column(String(254), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(60), nullable=False)
    mobile_number: Mapped[str | None] = mapped_column(String(20), nullable=True)

    def to_dict(self) -> dict:
        # password_hash stays out of the public representation
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "mobile_number": self.mobile_number,
        }
