"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the service facade and the CLI can catch them uniformly and turn them
into user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """An order or record is malformed, or stock cannot satisfy it."""


class EntityNotFoundError(DomainException):
    """A referenced inventory record or order does not exist."""


class StoreUnavailableError(DomainException):
    """The persisted document could not be read, decoded or written."""
