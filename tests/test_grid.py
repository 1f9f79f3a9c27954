import pytest

from texart.errors import InvalidArgument
from texart.grid import CharacterGrid


def test_cell_access():
    grid = CharacterGrid.from_cells([["A", "B"], ["C", "D"]])
    assert grid.width == 2
    assert grid.height == 2
    assert grid[0, 0] == "A"
    assert grid[1, 0] == "B"
    assert grid[0, 1] == "C"
    assert grid[1, 1] == "D"


def test_rows_and_str():
    grid = CharacterGrid(["ab", "cd", "ef"])
    assert grid.rows == ("ab", "cd", "ef")
    assert str(grid) == "ab\ncd\nef"
    assert grid.width == 2
    assert grid.height == 3


def test_out_of_range():
    grid = CharacterGrid.filled(3, 2, "#")
    with pytest.raises(IndexError):
        grid[3, 0]
    with pytest.raises(IndexError):
        grid[0, 2]
    with pytest.raises(IndexError):
        grid[-1, 0]


def test_filled():
    grid = CharacterGrid.filled(4, 3, ".")
    assert str(grid) == "....\n....\n...."


def test_equality():
    assert CharacterGrid(["ab"]) == CharacterGrid.from_cells([["a", "b"]])
    assert CharacterGrid(["ab"]) != CharacterGrid(["ba"])
    assert hash(CharacterGrid(["ab"])) == hash(CharacterGrid(["ab"]))


@pytest.mark.parametrize("rows", [[], [""], ["ab", "c"]])
def test_rejects_bad_rows(rows):
    with pytest.raises(InvalidArgument):
        CharacterGrid(rows)


def test_rejects_multi_character_cells():
    with pytest.raises(InvalidArgument):
        CharacterGrid.from_cells([["AB"]])


def test_rejects_bad_fill():
    with pytest.raises(InvalidArgument):
        CharacterGrid.filled(0, 2)
    with pytest.raises(InvalidArgument):
        CharacterGrid.filled(2, 2, "ab")


def test_rejects_single_string():
    with pytest.raises(InvalidArgument, match="sequence of row strings"):
        CharacterGrid("abc")
