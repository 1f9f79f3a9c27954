from texart.errors import InvalidArgument, InvalidLocator, ResolutionMismatch, TexartError
from texart.grid import CharacterGrid
from texart.locator import ResourceLocator

__all__ = [
    "CharacterGrid",
    "InvalidArgument",
    "InvalidLocator",
    "ResolutionMismatch",
    "ResourceLocator",
    "TexartError",
]
