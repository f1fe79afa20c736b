"""Header Dependencies — FastAPI adapters around core.guards.

Invariants:
    - Each header is read by name, case-insensitively (FastAPI/Starlette header lookup)
    - A missing header reaches the guard as None, so the guard picks the *Missing error
    - Guards run before the repository dependency touches the database
    - Which failing guard is reported first is not part of the contract

Design Decisions:
    - One dependency per header, combined into request structs: routes receive one typed value
    - convert_underscores=False + explicit alias: header names stay exactly as documented
"""

import logging

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hexvault.core.domain_types import AuthKey, NewAuthKey, Email, Vault
from hexvault.core.repository_protocols import UserRepository
from hexvault.core.guards import (
    parse_auth_key, parse_new_auth_key, parse_email, parse_vault,
)
from hexvault.infrastructure.database import get_db
from hexvault.infrastructure.observability import SERVICE_LOGGER_NAME
from hexvault.schemas.requests import (
    AuthRequest, RegisterRequest, VaultUpdateRequest, KeyRotationRequest,
)
from hexvault.services.user_repository import SqlUserRepository


# ─── Single-header guards ────────────────────────────────────────

def auth_key_header(
    raw: str | None = Header(None, alias="x-auth-key", convert_underscores=False),
) -> AuthKey:
    return parse_auth_key(raw)


def new_auth_key_header(
    raw: str | None = Header(None, alias="x-new-auth-key", convert_underscores=False),
) -> NewAuthKey:
    return parse_new_auth_key(raw)


def email_header(
    raw: str | None = Header(None, alias="x-email", convert_underscores=False),
) -> Email:
    return parse_email(raw)


def vault_header(
    raw: str | None = Header(None, alias="x-vault", convert_underscores=False),
) -> Vault:
    return parse_vault(raw)


# ─── Request structs ─────────────────────────────────────────────

def auth_request(key: AuthKey = Depends(auth_key_header)) -> AuthRequest:
    return AuthRequest(key=key)


def register_request(
    email: Email = Depends(email_header),
    key: AuthKey = Depends(auth_key_header),
    vault: Vault = Depends(vault_header),
) -> RegisterRequest:
    return RegisterRequest(email=email, key=key, vault=vault)


def vault_update_request(
    key: AuthKey = Depends(auth_key_header),
    vault: Vault = Depends(vault_header),
) -> VaultUpdateRequest:
    return VaultUpdateRequest(key=key, vault=vault)


def key_rotation_request(
    old_key: AuthKey = Depends(auth_key_header),
    new_key: NewAuthKey = Depends(new_auth_key_header),
    vault: Vault = Depends(vault_header),
) -> KeyRotationRequest:
    return KeyRotationRequest(old_key=old_key, new_key=new_key, vault=vault)


# ─── Repository ──────────────────────────────────────────────────

def service_logger(request: Request) -> logging.Logger:
    """Logger configured at startup; module logger when lifespan has not run (tests)."""
    logger = getattr(request.app.state, "vault_logger", None)
    return logger or logging.getLogger(SERVICE_LOGGER_NAME)


def get_user_repository(
    db: AsyncSession = Depends(get_db),
    logger: logging.Logger = Depends(service_logger),
) -> UserRepository:
    return SqlUserRepository(db, logger)
