class TexartError(Exception):
    """Base class for all errors raised by texart."""


class InvalidLocator(TexartError, ValueError):
    """A locator string is not a well-formed ``scheme://host/path`` address.

    Messages always start with ``"URI "`` so callers can tell these apart from
    other parsing failures.
    """


class ResolutionMismatch(TexartError, ValueError):
    """The sampling ratio does not evenly divide the source image."""


class InvalidArgument(TexartError, ValueError):
    """A configuration value is out of range or missing."""
