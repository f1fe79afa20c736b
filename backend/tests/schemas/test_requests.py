"""Request Schemas — key roles cannot be swapped when building request structs."""

import pytest
from pydantic import ValidationError

from hexvault.core.guards import parse_auth_key, parse_new_auth_key
from hexvault.schemas.requests import AuthRequest, KeyRotationRequest

OLD = "11" * 32
NEW = "22" * 32


def test_key_rotation_request_accepts_correct_roles():
    req = KeyRotationRequest(
        old_key=parse_auth_key(OLD), new_key=parse_new_auth_key(NEW), vault="bb",
    )
    assert req.old_key.hex() == OLD
    assert req.new_key.hex() == NEW


def test_key_rotation_request_rejects_swapped_roles():
    with pytest.raises(ValidationError):
        KeyRotationRequest(
            old_key=parse_new_auth_key(OLD), new_key=parse_auth_key(NEW), vault="bb",
        )


def test_auth_request_rejects_raw_string():
    with pytest.raises(ValidationError):
        AuthRequest(key=OLD)


def test_requests_are_frozen():
    req = AuthRequest(key=parse_auth_key(OLD))
    with pytest.raises(ValidationError):
        req.key = parse_auth_key(NEW)
