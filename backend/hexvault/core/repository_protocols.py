"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Every method raises VaultError subclasses, never storage exceptions
    - More than one row for a key or email is an InternalError, never "pick one"

Design Decisions:
    - Protocol over ABC: structural subtyping, the API layer and tests can swap implementations
    - Async methods: implementations do IO
"""

from typing import Protocol

from hexvault.core.domain_types import AuthKey, NewAuthKey, Email, Vault


class UserLike(Protocol):
    """Structural contract for a stored user row."""
    id: int
    email: str
    key: str
    vault: str


class UserRepository(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def find_by_key(self, key: AuthKey) -> UserLike | None: ...
    async def find_by_email(self, email: Email) -> UserLike | None: ...
    async def key_exists(self, key: AuthKey) -> bool: ...
    async def email_exists(self, email: Email) -> bool: ...
    async def register(self, email: Email, key: AuthKey, vault: Vault) -> None: ...
    async def update_key_and_vault(
        self, old_key: AuthKey, new_key: NewAuthKey, new_vault: Vault,
    ) -> None: ...
    async def update_vault(self, key: AuthKey, new_vault: Vault) -> None: ...
    async def authenticate(self, key: AuthKey) -> bool: ...
    async def get_vault(self, key: AuthKey) -> str: ...
