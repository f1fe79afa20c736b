"""Request Schemas — fully validated per-route inputs.

Invariants:
    - Fields hold guard outputs only (AuthKey, NewAuthKey, Email, Vault)
    - Instances are immutable once built

Design Decisions:
    - InstanceOf for keys: the guard already built them, the schema only checks which role they play
    - Separate from models: schemas are API contracts, models are persistence
"""

from pydantic import BaseModel, ConfigDict, InstanceOf

from hexvault.core.domain_types import AuthKey, NewAuthKey, Email, Vault


class _GuardedRequest(BaseModel):
    model_config = ConfigDict(frozen=True)


class AuthRequest(_GuardedRequest):
    """Key-only routes: /auth and /get_vault."""
    key: InstanceOf[AuthKey]


class RegisterRequest(_GuardedRequest):
    """Inputs of /register."""
    email: Email
    key: InstanceOf[AuthKey]
    vault: Vault


class VaultUpdateRequest(_GuardedRequest):
    """Inputs of /update_vault."""
    key: InstanceOf[AuthKey]
    vault: Vault


class KeyRotationRequest(_GuardedRequest):
    """Inputs of /update_key."""
    old_key: InstanceOf[AuthKey]
    new_key: InstanceOf[NewAuthKey]
    vault: Vault
