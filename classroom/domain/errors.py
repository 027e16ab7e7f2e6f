"""Exceptions raised by the domain and application layers."""


class ValidationError(ValueError):
    """Input rejected before anything is written, e.g. a malformed recipient descriptor."""


class PersistenceError(RuntimeError):
    """The database could not be read or written."""


class DeliveryError(RuntimeError):
    """A single email could not be delivered."""

    def __init__(self, message: str, *, recipient: str | None = None) -> None:
        super().__init__(message)
        self.recipient = recipient


class NotFoundError(LookupError):
    """The requested record does not exist."""


__all__ = ["DeliveryError", "NotFoundError", "PersistenceError", "ValidationError"]
