class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class EmptySelectionError(DomainError):
    """Raised when an export selection resolves to no rows.

    Carries the HTTP-ish status the caller should surface (400 for a missing or
    ambiguous selection, 404 when the selection is valid but matched nothing).
    """

    def __init__(self, message: str, *, status: int = 400):
        super().__init__(message)
        self.status = int(status)
