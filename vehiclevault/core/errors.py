"""Exception taxonomy shared by services and the HTTP layer.

Declined logins are not exceptions; see ``vehiclevault.schemas.auth.AuthResult``.
Each class carries a user-safe ``message`` and a stable ``code``; the API maps
them to status codes in ``vehiclevault.main``.
"""

GENERIC_UNAVAILABLE_MESSAGE = "Service temporarily unavailable. Please try again."


class VehicleVaultError(Exception):
    """Base for all application errors."""

    code = "error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(VehicleVaultError):
    """Malformed input, detected before (or by) the store round trip."""

    code = "validation_error"

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class DuplicateEmailError(ValidationError):
    code = "duplicate_email"

    def __init__(self, email: str) -> None:
        super().__init__(f'The email "{email}" is already registered.', field="email")


class ReferenceNotFoundError(ValidationError):
    """A referenced brand or model id does not exist."""

    code = "reference_not_found"


class NotFoundError(VehicleVaultError):
    code = "not_found"


class ReferenceInUseError(VehicleVaultError):
    """Delete refused because other records still point at the target."""

    code = "reference_in_use"


class NotAuthenticatedError(VehicleVaultError):
    code = "not_authenticated"

    def __init__(self, message: str = "Please log in to access the dashboard.") -> None:
        super().__init__(message)


class AccessDeniedError(VehicleVaultError):
    """Authenticated principal lacks the profile a page or action requires."""

    code = "access_denied"

    def __init__(self, message: str = "Access denied: you do not have permission to view this page.") -> None:
        super().__init__(message)


class AuthorizationRefusedError(VehicleVaultError):
    """Action refused for the acting principal (self-delete, protected account, last admin)."""

    code = "action_refused"


class StoreUnavailableError(VehicleVaultError):
    """Infrastructure failure talking to the database; the raw error goes to logs only."""

    code = "store_unavailable"

    def __init__(self, message: str = GENERIC_UNAVAILABLE_MESSAGE) -> None:
        super().__init__(message)
