"""Error taxonomy shared by the catalogue and ordering contexts.

Field-level validation failures use ``protean.exceptions.ValidationError``
like the rest of the domain model. The errors below describe failures of the
collaborators the storefront talks to.
"""


class StorefrontError(Exception):
    """Base class for recoverable storefront failures."""

    def __init__(self, message: str, **details) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class FetchError(StorefrontError):
    """A feed or remote service could not be reached or returned garbage."""


class NotFoundError(StorefrontError):
    """A lookup completed but the requested record does not exist."""


class SubmissionError(StorefrontError):
    """Order creation failed. No order state exists on our side."""


class EmptyCartError(StorefrontError):
    """Checkout was requested for a cart without items."""
