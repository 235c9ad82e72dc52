"""User domain exceptions.

Value objects raise plain ``ValueError`` subclasses; the application
layer turns them into the shared error taxonomy.
"""


class InvalidEmailError(ValueError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
