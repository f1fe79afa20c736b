"""Error Hierarchy — the closed set of failures a vault request can end with.

Invariants:
    - Every error has a code (ErrorKind), category (ErrorCategory), severity (ErrorSeverity)
    - Every error surfaces as HTTP 400 with a fixed plain-text message
    - Messages never carry request data or storage details

Design Decisions:
    - Single hierarchy with VaultError base: one FastAPI handler catches all
    - Kind → message table kept next to the classes so the taxonomy stays closed
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and logging."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTEGRITY = "integrity"


class ErrorKind(str, Enum):
    """Every failure a request can end with."""
    AUTH_KEY_MISSING = "AuthKeyMissing"
    AUTH_KEY_INVALID = "AuthKeyInvalid"
    EMAIL_MISSING = "EmailMissing"
    EMAIL_INVALID = "EmailInvalid"
    VAULT_MISSING = "VaultMissing"
    VAULT_INVALID = "VaultInvalid"
    USER_EXISTS = "UserExists"
    DATABASE_READ = "DatabaseRead"
    DATABASE_WRITE = "DatabaseWrite"
    INTERNAL_ERROR = "InternalError"
    USER_NO_EXISTS = "UserNoExists"


ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.AUTH_KEY_MISSING: "Authentication key missing",
    ErrorKind.AUTH_KEY_INVALID: "Authentication key invalid",
    ErrorKind.EMAIL_MISSING: "Email missing",
    ErrorKind.EMAIL_INVALID: "Email invalid",
    ErrorKind.VAULT_MISSING: "Vault missing",
    ErrorKind.VAULT_INVALID: "Vault invalid",
    ErrorKind.USER_EXISTS: "User already exists in database",
    ErrorKind.DATABASE_READ: "Failed to read database",
    ErrorKind.DATABASE_WRITE: "Failed to write to database",
    ErrorKind.INTERNAL_ERROR: "Internal server error",
    ErrorKind.USER_NO_EXISTS: "User does not exist in database",
}


class VaultError(Exception):
    """Base exception for all HexVault errors."""

    def __init__(
        self,
        kind: ErrorKind,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 400,
    ):
        message = ERROR_MESSAGES[kind]
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.code = kind.value
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> str:
        """Plain-text body sent back to the client."""
        return self.message


# ─── Guard Errors ───────────────────────────────────────────────

class AuthKeyMissingError(VaultError):
    """Authentication key header absent."""
    def __init__(self):
        super().__init__(ErrorKind.AUTH_KEY_MISSING, ErrorCategory.VALIDATION)


class AuthKeyInvalidError(VaultError):
    """Authentication key is not 64 hex characters."""
    def __init__(self):
        super().__init__(ErrorKind.AUTH_KEY_INVALID, ErrorCategory.VALIDATION)


class EmailMissingError(VaultError):
    """Email header absent."""
    def __init__(self):
        super().__init__(ErrorKind.EMAIL_MISSING, ErrorCategory.VALIDATION)


class EmailInvalidError(VaultError):
    """Email fails the local@domain.tld shape check."""
    def __init__(self):
        super().__init__(ErrorKind.EMAIL_INVALID, ErrorCategory.VALIDATION)


class VaultMissingError(VaultError):
    """Vault header absent."""
    def __init__(self):
        super().__init__(ErrorKind.VAULT_MISSING, ErrorCategory.VALIDATION)


class VaultInvalidError(VaultError):
    """Vault is not decodable hex."""
    def __init__(self):
        super().__init__(ErrorKind.VAULT_INVALID, ErrorCategory.VALIDATION)


# ─── Repository Errors ──────────────────────────────────────────

class UserExistsError(VaultError):
    """Registration collides with an existing email or key."""
    def __init__(self):
        super().__init__(
            ErrorKind.USER_EXISTS, ErrorCategory.CONFLICT, ErrorSeverity.WARNING,
        )


class UserNoExistsError(VaultError):
    """No user holds the given authentication key."""
    def __init__(self):
        super().__init__(
            ErrorKind.USER_NO_EXISTS, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING,
        )


class DatabaseReadError(VaultError):
    """Reading the user store failed."""
    def __init__(self, operation: str = "select"):
        super().__init__(
            ErrorKind.DATABASE_READ, ErrorCategory.DATABASE, ErrorSeverity.CRITICAL,
        )
        self.operation = operation


class DatabaseWriteError(VaultError):
    """Writing the user store failed."""
    def __init__(self, operation: str = "commit"):
        super().__init__(
            ErrorKind.DATABASE_WRITE, ErrorCategory.DATABASE, ErrorSeverity.CRITICAL,
        )
        self.operation = operation


class InternalError(VaultError):
    """More than one user matched a column that must be unique."""
    def __init__(self, column: str, match_count: int):
        super().__init__(
            ErrorKind.INTERNAL_ERROR, ErrorCategory.INTEGRITY, ErrorSeverity.CRITICAL,
        )
        self.column = column
        self.match_count = match_count
