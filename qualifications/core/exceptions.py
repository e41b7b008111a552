class QualificationsError(Exception):
    """Base class for errors raised by the grading service."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(QualificationsError):
    """A referenced subject, qualification or activity does not exist for the caller."""


class ConflictError(QualificationsError):
    """An entity with the same natural key already exists."""
