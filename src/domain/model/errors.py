"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers map them to HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""

    kind = 'domain_error'

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Input is missing or malformed."""

    kind = 'validation_error'

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class ConflictError(DomainError):
    """Uniqueness or provider-mismatch violation."""

    kind = 'conflict'


class NotFoundError(DomainError):
    """Requested entity does not exist."""

    kind = 'not_found'


class InternalError(DomainError):
    """A collaborator (store or hasher) failed."""

    kind = 'internal_error'
