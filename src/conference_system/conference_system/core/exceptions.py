class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidCapacityError(ValidationError):
    """Raised when a session capacity is not a positive integer."""


class NotFoundError(DomainError):
    """Raised when a referenced participant, track or session does not exist."""


class DuplicateEmailError(DomainError):
    """Raised when registering with an email that is already on file."""


class AlreadyAdmittedError(DomainError):
    """Raised on a repeat check-in for the same participant and session."""


class CapacityExceededError(DomainError):
    """Raised when a session is full at the moment of admission."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class DependencyFailureError(DomainError):
    """Raised when the store or an external collaborator is unreachable."""
