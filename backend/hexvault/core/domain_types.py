"""Domain Types — typed values produced by the header guards.

Invariants:
    - AuthKey and NewAuthKey each wrap exactly 32 raw bytes
    - AuthKey and NewAuthKey are unrelated classes: one is never accepted where the other is expected
    - Keys encode to 64 lowercase hex characters (the stored form)
    - Email and Vault keep the header string verbatim

Design Decisions:
    - Frozen dataclasses for keys: the nominal distinction holds at runtime, not only for mypy
    - NewType for Email/Vault: zero runtime cost, the guard is the only constructor in practice
"""

from dataclasses import dataclass
from typing import NewType


KEY_LENGTH = 32


# ─── Authentication Keys ─────────────────────────────────────────

@dataclass(frozen=True)
class AuthKey:
    """Key that identifies the caller (the key to authenticate or rotate from)."""
    raw: bytes

    def __post_init__(self):
        if len(self.raw) != KEY_LENGTH:
            raise ValueError(f"AuthKey must be {KEY_LENGTH} bytes, got {len(self.raw)}")

    def hex(self) -> str:
        return self.raw.hex()

    def __repr__(self) -> str:
        return "AuthKey(<redacted>)"


@dataclass(frozen=True)
class NewAuthKey:
    """Key the caller is rotating to."""
    raw: bytes

    def __post_init__(self):
        if len(self.raw) != KEY_LENGTH:
            raise ValueError(f"NewAuthKey must be {KEY_LENGTH} bytes, got {len(self.raw)}")

    def hex(self) -> str:
        return self.raw.hex()

    def __repr__(self) -> str:
        return "NewAuthKey(<redacted>)"


# ─── Value Types ─────────────────────────────────────────────────

Email = NewType("Email", str)
Vault = NewType("Vault", str)
