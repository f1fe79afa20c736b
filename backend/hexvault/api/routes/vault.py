"""Vault Routes — the five GET endpoints of the vault API.

Invariants:
    - All input arrives through headers; guards run before the repository is built
    - Every response is text/plain
    - Routes hold no business logic: one repository call each

Design Decisions:
    - GET for mutations too: existing clients call these routes with GET
"""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from hexvault.api.dependencies import (
    auth_request, register_request, vault_update_request,
    key_rotation_request, get_user_repository,
)
from hexvault.config import get_settings
from hexvault.schemas.requests import (
    AuthRequest, RegisterRequest, VaultUpdateRequest, KeyRotationRequest,
)
from hexvault.core.repository_protocols import UserRepository

SUCCESS = "Success"

router = APIRouter(
    prefix=get_settings().api_prefix,
    tags=["vault"],
    default_response_class=PlainTextResponse,
)


@router.get("/auth")
async def authenticate(
    body: AuthRequest = Depends(auth_request),
    repo: UserRepository = Depends(get_user_repository),
) -> str:
    """Answer "1" when the key belongs to a registered user, "0" otherwise."""
    return "1" if await repo.authenticate(body.key) else "0"


@router.get("/register")
async def register(
    body: RegisterRequest = Depends(register_request),
    repo: UserRepository = Depends(get_user_repository),
) -> str:
    await repo.register(body.email, body.key, body.vault)
    return SUCCESS


@router.get("/get_vault")
async def get_vault(
    body: AuthRequest = Depends(auth_request),
    repo: UserRepository = Depends(get_user_repository),
) -> str:
    return await repo.get_vault(body.key)


@router.get("/update_vault")
async def update_vault(
    body: VaultUpdateRequest = Depends(vault_update_request),
    repo: UserRepository = Depends(get_user_repository),
) -> str:
    await repo.update_vault(body.key, body.vault)
    return SUCCESS


@router.get("/update_key")
async def update_key(
    body: KeyRotationRequest = Depends(key_rotation_request),
    repo: UserRepository = Depends(get_user_repository),
) -> str:
    """Rotate the authentication key and replace the vault in one transaction."""
    await repo.update_key_and_vault(body.old_key, body.new_key, body.vault)
    return SUCCESS
