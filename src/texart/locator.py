"""Locators address pluggable generators and renderers.

A locator is a URI of the form ``scheme://host/path/with/segments`` where the
host names the module that provides a component (for example
``Texart.SomePlugin.dll``) and the path names the component inside it::

    >>> loc = ResourceLocator.parse("file://Texart.SomePlugin.dll/SomeResource")
    >>> loc.host, loc.path, loc.segments
    ('Texart.SomePlugin.dll', 'SomeResource', ('SomeResource',))

Parsing is purely syntactic. The host is never resolved to a file.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from texart.errors import InvalidLocator

ERROR_PREFIX = "URI "

_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*")
_HOST_FORBIDDEN = re.compile(r"[\s/@:?#]")
_PATH_FORBIDDEN = re.compile(r"[\s?#]")


def _fail(text: object, reason: str) -> InvalidLocator:
    return InvalidLocator(f"{ERROR_PREFIX}{text!r} {reason}")


@dataclass(frozen=True)
class ResourceLocator:
    scheme: str
    host: str
    path: str = ""

    def __post_init__(self):
        if not self.scheme:
            raise _fail(str(self), "has an empty scheme")
        if not _SCHEME.fullmatch(self.scheme):
            raise _fail(str(self), "scheme must be a letter followed by letters, digits, '+', '-' or '.'")
        if not self.host:
            raise _fail(str(self), "has an empty host")
        if _HOST_FORBIDDEN.search(self.host):
            raise _fail(str(self), "host must not contain whitespace, '/', credentials, a port, a query or a fragment")
        if _PATH_FORBIDDEN.search(self.path):
            raise _fail(str(self), "path must not contain whitespace, a query or a fragment")
        # Schemes compare case-insensitively, so keep them normalized
        object.__setattr__(self, "scheme", self.scheme.lower())
        if self.path and "" in self.path.split("/"):
            raise _fail(str(self), "has an empty path segment")

    @property
    def segments(self) -> tuple[str, ...]:
        if not self.path:
            return ()
        return tuple(self.path.split("/"))

    @classmethod
    def parse(cls, text: str) -> "ResourceLocator":
        if not isinstance(text, str):
            raise _fail(text, "is not a string")
        if not text or any(c.isspace() for c in text):
            raise _fail(text, "is empty or contains whitespace")
        if "://" not in text:
            raise _fail(text, "is not of the form scheme://host/path")
        try:
            parts = urlsplit(text)
        except ValueError as e:
            raise _fail(text, f"could not be split: {e}") from e

        if not parts.scheme:
            raise _fail(text, "has an empty scheme")
        if not parts.netloc:
            raise _fail(text, "has an empty host")
        if "@" in parts.netloc or ":" in parts.netloc:
            raise _fail(text, "host must not contain credentials or a port")
        if parts.query or parts.fragment or text.endswith(("?", "#")):
            raise _fail(text, "must not contain a query or fragment")

        if parts.path == "/":
            raise _fail(text, "has an empty path segment")
        path = parts.path[1:] if parts.path.startswith("/") else parts.path
        return cls(scheme=parts.scheme, host=parts.netloc, path=path)

    from_uri = parse

    def child(self, *segments: str) -> "ResourceLocator":
        """Return a locator with ``segments`` appended to this one's path."""
        path = "/".join((*self.segments, *segments))
        return ResourceLocator(self.scheme, self.host, path)

    def __str__(self) -> str:
        if self.path:
            return f"{self.scheme}://{self.host}/{self.path}"
        return f"{self.scheme}://{self.host}"
