"""Exceptions raised by version parsing and repository resolution."""


class FormatError(ValueError):
    """Raised when text does not match the required version pattern."""


class NotFoundError(LookupError):
    """Raised when no repository or reference exists at a location."""
