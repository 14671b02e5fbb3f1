class TimetableError(Exception):
    """Base class for errors raised by the schedule core."""

    pass


class ValidationError(TimetableError):
    """Raised when a configuration, teacher or subject is rejected before any state changes."""

    pass


class NotFoundError(TimetableError):
    """Raised when an operation names a teacher, subject or slot that does not exist."""

    pass


class DataFileError(TimetableError):
    """Raised when a project data file cannot be read or lacks required content."""
