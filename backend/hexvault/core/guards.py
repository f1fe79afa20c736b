"""Header Guards — turn raw header values into validated domain types.

Invariants:
    - None means the header was absent → *Missing error
    - Keys: case-insensitive hex, exactly 64 chars / 32 bytes → else AuthKeyInvalid
    - Email: exactly one '@', domain part has exactly one '.' → else EmailInvalid
    - Vault: even-length valid hex → else VaultInvalid; decoded bytes discarded
    - Accepted email and vault strings are returned unchanged

Design Decisions:
    - binascii.unhexlify over bytes.fromhex: fromhex silently skips whitespace
"""

import binascii

from hexvault.core.domain_types import AuthKey, NewAuthKey, Email, Vault, KEY_LENGTH
from hexvault.core.errors import (
    AuthKeyMissingError, AuthKeyInvalidError,
    EmailMissingError, EmailInvalidError,
    VaultMissingError, VaultInvalidError,
)


def decode_hex(value: str) -> bytes | None:
    """Strict hex decode. Returns None when the string is not valid hex."""
    try:
        return binascii.unhexlify(value)
    except (ValueError, TypeError):
        return None


def _decode_key_bytes(raw: str | None) -> bytes:
    if raw is None:
        raise AuthKeyMissingError()
    decoded = decode_hex(raw)
    if decoded is None or len(decoded) != KEY_LENGTH:
        raise AuthKeyInvalidError()
    return decoded


def parse_auth_key(raw: str | None) -> AuthKey:
    """Validate the `x-auth-key` header."""
    return AuthKey(_decode_key_bytes(raw))


def parse_new_auth_key(raw: str | None) -> NewAuthKey:
    """Validate the `x-new-auth-key` header."""
    return NewAuthKey(_decode_key_bytes(raw))


def parse_email(raw: str | None) -> Email:
    """Validate the `x-email` header (coarse structural check only)."""
    if raw is None:
        raise EmailMissingError()
    halves = raw.split("@")
    if len(halves) != 2:
        raise EmailInvalidError()
    if len(halves[1].split(".")) != 2:
        raise EmailInvalidError()
    return Email(raw)


def parse_vault(raw: str | None) -> Vault:
    """Validate the `x-vault` header."""
    if raw is None:
        raise VaultMissingError()
    if decode_hex(raw) is None:
        raise VaultInvalidError()
    return Vault(raw)
