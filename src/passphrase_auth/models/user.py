"""SQLAlchemy model for issued passphrases."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Integer, LargeBinary, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""


class User(Base):
    """The latest passphrase issued to an email address.

    One row per email; a new issuance overwrites ``passphrase`` and
    ``expiry`` in place.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)
    passphrase: Mapped[bytes] = mapped_column(
        LargeBinary(64), nullable=False, doc="Argon2id digest, never the plaintext"
    )
    expiry: Mapped[str] = mapped_column(
        String(20), nullable=False, doc="Unix timestamp in seconds, stored as text"
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} expiry={self.expiry!r}>"
