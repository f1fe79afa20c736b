"""Header Guards — tests for pure header → domain type validation.

Tests cover:
    - parse_auth_key / parse_new_auth_key: missing, wrong length, odd length, non-hex, any case
    - Key hex round-trip: encode(decode(s)) == lowercase(s)
    - parse_email: one '@', exactly one '.' after it, string kept verbatim
    - parse_vault: missing, invalid hex, valid hex kept verbatim
"""

import pytest

from hexvault.core.domain_types import AuthKey, NewAuthKey
from hexvault.core.errors import (
    AuthKeyMissingError, AuthKeyInvalidError,
    EmailMissingError, EmailInvalidError,
    VaultMissingError, VaultInvalidError,
)
from hexvault.core.guards import (
    parse_auth_key, parse_new_auth_key, parse_email, parse_vault, decode_hex,
)

VALID_KEY = "0123456789abcdef" * 4


# ─── Authentication keys ─────────────────────────────────────────

@pytest.mark.parametrize("parse", [parse_auth_key, parse_new_auth_key])
def test_key_missing(parse):
    with pytest.raises(AuthKeyMissingError):
        parse(None)


@pytest.mark.parametrize("parse", [parse_auth_key, parse_new_auth_key])
@pytest.mark.parametrize("raw", [
    "",
    "ab" * 31,            # 31 bytes
    "ab" * 33,            # 33 bytes
    VALID_KEY[:-1],       # odd length
    "zz" + VALID_KEY[2:],  # non-hex digit
    " " + VALID_KEY[1:],  # whitespace
    "é" * 64,             # non-ascii
])
def test_key_invalid(parse, raw):
    with pytest.raises(AuthKeyInvalidError):
        parse(raw)


def test_auth_key_decodes_32_bytes():
    key = parse_auth_key(VALID_KEY)
    assert isinstance(key, AuthKey)
    assert key.raw == bytes.fromhex(VALID_KEY)
    assert len(key.raw) == 32


@pytest.mark.parametrize("raw", [VALID_KEY, VALID_KEY.upper(), "aBcD" * 16])
def test_key_round_trip_is_lowercase(raw):
    assert parse_auth_key(raw).hex() == raw.lower()
    assert parse_new_auth_key(raw).hex() == raw.lower()


def test_new_auth_key_is_distinct_type():
    new_key = parse_new_auth_key(VALID_KEY)
    assert isinstance(new_key, NewAuthKey)
    assert not isinstance(new_key, AuthKey)
    assert new_key != parse_auth_key(VALID_KEY)


def test_key_types_reject_wrong_length():
    with pytest.raises(ValueError):
        AuthKey(b"\x00" * 31)
    with pytest.raises(ValueError):
        NewAuthKey(b"\x00" * 33)


def test_key_repr_hides_material():
    assert VALID_KEY not in repr(parse_auth_key(VALID_KEY))


# ─── Email ───────────────────────────────────────────────────────

def test_email_missing():
    with pytest.raises(EmailMissingError):
        parse_email(None)


@pytest.mark.parametrize("raw", ["a@b.com", "User.Name@Example.org", "@.", " x @y.z"])
def test_email_valid_kept_verbatim(raw):
    assert parse_email(raw) == raw


@pytest.mark.parametrize("raw", [
    "a@b",          # no dot in domain
    "a@b@c.com",    # two '@'
    "a@b.c.com",    # three dot-segments
    "ab.com",       # no '@'
    "",
])
def test_email_invalid(raw):
    with pytest.raises(EmailInvalidError):
        parse_email(raw)


# ─── Vault ───────────────────────────────────────────────────────

def test_vault_missing():
    with pytest.raises(VaultMissingError):
        parse_vault(None)


@pytest.mark.parametrize("raw", ["deadbeef", "DEADBEEF", "", "00" * 4096])
def test_vault_valid_kept_verbatim(raw):
    assert parse_vault(raw) == raw


@pytest.mark.parametrize("raw", ["abc", "xyz0", "de ad", "0x00"])
def test_vault_invalid(raw):
    with pytest.raises(VaultInvalidError):
        parse_vault(raw)


def test_decode_hex_returns_none_on_failure():
    assert decode_hex("a") is None
    assert decode_hex("ff") == b"\xff"
