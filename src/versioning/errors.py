"""Per-specifier resolution errors.

Each error is scoped to a single specifier: the resolver converts it into a
failed outcome and carries on with the remaining specifiers.
"""

from constants import Constants


class PinupError(Exception):
    """Base class for resolution errors; ``message`` is user facing."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidVersionError(PinupError):
    """A version token in the path or fragment is not a semantic version."""

    def __init__(self, token: str):
        super().__init__(f"{Constants.MSG_INVALID_VERSION}{token}")
        self.token = token


class InvalidFragmentError(PinupError):
    """A fragment does not start with one of = ~ ^ <."""

    def __init__(self, fragment: str):
        super().__init__(f"{Constants.MSG_INVALID_FRAGMENT}{fragment}")
        self.fragment = fragment


class NoCompatibleVersionError(PinupError):
    """The constraint matches none of the available versions."""

    def __init__(self):
        super().__init__(Constants.MSG_NO_COMPATIBLE)


class LookupFailedError(PinupError):
    """The registry could not list versions for a module."""
