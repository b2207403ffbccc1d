class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class EmailAlreadyInUse(ValidationError):
    """Raised when an email is already registered to another user."""


class AuthenticationError(DomainError):
    """Raised when credentials or a bearer token are invalid."""


class NotFound(DomainError):
    """Raised when a requested entity does not exist."""


class StateConflict(DomainError):
    """Raised when a clock event is not allowed in the current day state."""


class AlreadyClockedIn(StateConflict):
    pass


class NotYetClockedIn(StateConflict):
    pass


class AlreadyClockedOut(StateConflict):
    pass


class StoreFailure(Exception):
    """Raised when the database fails; the transaction has been rolled back."""
