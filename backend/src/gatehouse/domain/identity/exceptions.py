"""
Domain exceptions for the Identity bounded context.

Expected business failures travel as ``Failure`` results; these exceptions
cover what storage reports back that the application check could not see.
"""


class IdentityError(Exception):
    """Base class for identity domain errors."""

    pass


class DuplicateAccountError(IdentityError):
    """A storage uniqueness constraint rejected the staged account."""

    pass
