"""Domain-level exceptions.

Every rule violation in the warehouse is reported as an
InvalidArgumentError, raised at the point where the bad value is seen.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class InvalidArgumentError(DomainException, ValueError):
    """An argument broke a precondition or a record invariant."""
