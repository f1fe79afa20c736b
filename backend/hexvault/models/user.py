"""User ORM — one row per registered client.

Invariants:
    - id is an integer primary key assigned by the store
    - key is 64 lowercase hex chars; unique across users
    - email is stored verbatim; unique across users
    - vault is an opaque hex string, never interpreted

Design Decisions:
    - Unique constraints at storage level: closes the check-then-insert race on register
    - Text for email and vault: neither has an upper size bound at the header guard
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hexvault.db.base import Base


class User(Base):
    """Registered vault owner."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    key: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    vault: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, email={self.email!r})"
