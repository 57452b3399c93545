"""Harness error taxonomy.

Every error raised for a misuse of the harness derives from ``ExacodisError``.
These are never captured as a test outcome: they propagate to the calling
script even when raised inside a test body.
"""


class ExacodisError(Exception):
    """Base class for harness-usage errors."""

    pass


class DuplicateIdError(ExacodisError):
    """Raised when a run id is already defined and locked."""

    pass


class UnknownIdError(ExacodisError):
    """Raised when an explicit run id does not match any recorded run."""

    pass


class NoTestRanError(ExacodisError):
    """Raised when an assertion needs a current test and none has run."""

    pass


class IdentityLockedError(ExacodisError):
    """Raised when setting the id of a test record that already has one."""

    pass


class UnknownHelperError(ExacodisError, AttributeError):
    """Raised when dispatching a helper name that was never registered."""

    pass


class DuplicateResourceError(ExacodisError):
    """Raised when adding a resource under a name already in use."""

    pass


class UnknownResourceError(ExacodisError):
    """Raised when overriding, reading or removing a missing resource."""

    pass


class ConstructionError(ExacodisError):
    """Raised when a class cannot be instantiated without arguments."""

    pass


class InvalidInvocationError(ExacodisError):
    """Raised when a reflective invocation is malformed."""

    pass


class ResolutionError(ExacodisError):
    """Raised when a class or method reference cannot be resolved."""

    pass


class HelperSourceError(ExacodisError):
    """Raised when a helper catalog file cannot be used."""

    pass


class HelperSourceNotFoundError(HelperSourceError):
    """Raised when a helper catalog file does not exist."""

    pass
