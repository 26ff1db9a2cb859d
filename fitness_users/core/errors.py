"""Domain-layer error definitions."""


class DomainError(Exception):
    """Base class for domain-layer errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UserNotFoundError(DomainError):
    """Raised when an id does not resolve to a stored user."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User with ID={user_id} was not found.")
        self.user_id = user_id


class DuplicateEmailError(DomainError):
    """Raised when an email is already owned by another user."""

    def __init__(self, email: str) -> None:
        super().__init__(f"Email {email} is already in use.")
        self.email = email


class InvalidInputError(DomainError):
    """Raised when client input cannot be interpreted."""


class InvalidStateError(DomainError):
    """Raised when an operation is attempted on an object in the wrong state."""
