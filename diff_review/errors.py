"""
Error taxonomy for review sessions.

``LoadError`` is fatal to startup, ``ActionError`` is a dismissible failure
of a single apply/unapply/complete request.  ``AuthorityError`` is raised by
transports and converted to one of the others at the call site.
"""


class ReviewError(Exception):
    """Base class for review session errors."""


class LoadError(ReviewError):
    """The session snapshot could not be loaded."""


class ActionError(ReviewError):
    """An apply, unapply or finalize request failed."""


class ValidationGap(ActionError):
    """A response from the authority was missing or had malformed fields."""


class AuthorityError(ReviewError):
    """Transport-level failure talking to the authority."""
