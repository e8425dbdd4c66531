"""
Error types raised by the service layer.

Routers translate these into HTTP responses: validation problems become
400, missing flocks or records become 404 and storage failures become
500.
"""


class RecordValidationError(ValueError):
    """A required field is missing or has the wrong type."""


class RecordNotFoundError(LookupError):
    """The referenced flock or daily record does not exist.

    ``kind`` is ``"flock"`` or ``"record"`` and only affects the message
    shown to the caller.
    """

    def __init__(self, message: str, kind: str = "record") -> None:
        super().__init__(message)
        self.kind = kind


class StorageError(RuntimeError):
    """The flock document could not be written."""
