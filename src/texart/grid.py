from __future__ import annotations

from collections.abc import Iterable, Sequence

from texart.errors import InvalidArgument


class CharacterGrid:
    """A fixed-size, immutable grid of single characters.

    Cells are addressed as ``grid[x, y]`` with ``x`` the column and ``y`` the
    row. Rows are stored as strings, one per line of text art.
    """

    __slots__ = ("_rows", "_width")

    def __init__(self, rows: Iterable[str]):
        if isinstance(rows, str):
            raise InvalidArgument("CharacterGrid takes a sequence of row strings, not a single string")
        rows = tuple(rows)
        if not rows or not rows[0]:
            raise InvalidArgument("CharacterGrid must have a positive width and height")
        width = len(rows[0])
        for y, row in enumerate(rows):
            if not isinstance(row, str):
                raise InvalidArgument(f"Row {y} is not a string: {row!r}")
            if len(row) != width:
                raise InvalidArgument(f"Row {y} has length {len(row)}, expected {width}")
        self._rows = rows
        self._width = width

    @classmethod
    def filled(cls, width: int, height: int, char: str = " ") -> "CharacterGrid":
        if len(char) != 1:
            raise InvalidArgument(f"Fill must be a single character, got {char!r}")
        if width <= 0 or height <= 0:
            raise InvalidArgument(f"CharacterGrid dimensions must be positive, got {width}x{height}")
        return cls([char * width] * height)

    @classmethod
    def from_cells(cls, cells: Sequence[Sequence[str]]) -> "CharacterGrid":
        """Build a grid from nested rows of single-character cells, e.g. ``[["A", "B"], ["C", "D"]]``."""
        rows = []
        for y, row in enumerate(cells):
            for x, cell in enumerate(row):
                if not isinstance(cell, str) or len(cell) != 1:
                    raise InvalidArgument(f"Cell ({x}, {y}) must be a single character, got {cell!r}")
            rows.append("".join(row))
        return cls(rows)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return len(self._rows)

    @property
    def rows(self) -> tuple[str, ...]:
        return self._rows

    def __getitem__(self, key: tuple[int, int]) -> str:
        x, y = key
        if not (0 <= x < self._width and 0 <= y < len(self._rows)):
            raise IndexError(f"Cell ({x}, {y}) outside {self._width}x{len(self._rows)} grid")
        return self._rows[y][x]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CharacterGrid):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __str__(self) -> str:
        return "\n".join(self._rows)

    def __repr__(self) -> str:
        return f"CharacterGrid(width={self._width}, height={len(self._rows)})"
