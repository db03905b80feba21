class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(AppError):
    """Raised when a requested resource does not exist."""

    def __init__(self, resource: str = "Resource", id: str = ""):
        super().__init__(f"{resource} not found: {id}" if id else f"{resource} not found")


class ValidationError(AppError):
    """Raised when a request is missing required fields."""

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message)


class DuplicateEmailError(AppError):
    """Raised when an email is already used by another record."""

    def __init__(self, message: str = "Email already exists"):
        super().__init__(message)


class InvalidIdentifierError(AppError):
    """Raised when a record id cannot be parsed."""

    def __init__(self, id: str = ""):
        super().__init__(f"Invalid user id: {id}" if id else "Invalid user id")


class StoreUnavailableError(AppError):
    """Raised when the record store fails."""

    def __init__(self, message: str = "Record store unavailable"):
        super().__init__(message)
