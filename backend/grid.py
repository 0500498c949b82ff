# backend/grid.py

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .errors import InvalidDimensions, InvalidMineCount, OutOfBounds

NEIGHBOR_OFFSETS = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),          (0, 1),
    (1, -1), (1, 0), (1, 1)
]

# A board needs this many free cells for the 3x3 opening around the first click.
SAFE_ZONE_SIZE = 9


class CellState(str, Enum):
    HIDDEN = "hidden"
    REVEALED = "revealed"
    FLAGGED = "flagged"
    QUESTIONED = "questioned"


class GameStatus(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


def in_bounds(row: int, col: int, rows: int, cols: int) -> bool:
    return 0 <= row < rows and 0 <= col < cols


def neighbors(row: int, col: int, rows: int, cols: int) -> Iterator[Tuple[int, int]]:
    """Yield the in-bounds 8-neighbors of (row, col) in NEIGHBOR_OFFSETS order."""
    for dr, dc in NEIGHBOR_OFFSETS:
        nr, nc = row + dr, col + dc
        if in_bounds(nr, nc, rows, cols):
            yield nr, nc


@dataclass(frozen=True)
class Cell:
    """
    A single square of the grid.

    neighbor_mines is fixed when mines are placed and is meaningless for mines.
    highlighted only marks the cell a hint points at; the rules never read it.
    """
    row: int
    col: int
    is_mine: bool = False
    state: CellState = CellState.HIDDEN
    neighbor_mines: int = 0
    highlighted: bool = False


@dataclass(frozen=True)
class Board:
    """
    Immutable rows x cols grid of cells.

    Engine operations never modify a Board; they build a new one from
    mutable_rows(), so older snapshots stay valid.
    """
    cells: Tuple[Tuple[Cell, ...], ...]

    def __post_init__(self):
        if not self.cells or not self.cells[0]:
            raise InvalidDimensions("A board needs at least one row and one column.")
        width = len(self.cells[0])
        if any(len(row) != width for row in self.cells):
            raise InvalidDimensions("Every board row must have the same length.")

    @classmethod
    def from_rows(cls, rows: List[List[Cell]]) -> "Board":
        return cls(tuple(tuple(row) for row in rows))

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0])

    def in_bounds(self, row: int, col: int) -> bool:
        return in_bounds(row, col, self.rows, self.cols)

    def check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBounds(row, col, self.rows, self.cols)

    def cell(self, row: int, col: int) -> Cell:
        self.check_bounds(row, col)
        return self.cells[row][col]

    def neighbors(self, row: int, col: int) -> Iterator[Cell]:
        for nr, nc in neighbors(row, col, self.rows, self.cols):
            yield self.cells[nr][nc]

    def __iter__(self) -> Iterator[Cell]:
        # Row-major order; hint tie-breaks depend on it.
        for row in self.cells:
            yield from row

    def count(self, state: CellState) -> int:
        return sum(1 for cell in self if cell.state == state)

    @property
    def mine_count(self) -> int:
        return sum(1 for cell in self if cell.is_mine)

    def mutable_rows(self) -> List[List[Cell]]:
        return [list(row) for row in self.cells]


@dataclass(frozen=True)
class Difficulty:
    name: str
    rows: int
    cols: int
    mine_count: int

    @property
    def safe_cells(self) -> int:
        return self.rows * self.cols - self.mine_count

    def validate(self) -> "Difficulty":
        """
        Check the generation preconditions. Mine placement relies on these and
        has no way to recover from a board that cannot hold the mines.

        Raises:
            InvalidDimensions: rows or cols are not positive.
            InvalidMineCount: mine_count is negative or leaves fewer than nine
                free cells for the first-click safe zone.
        """
        if self.rows <= 0 or self.cols <= 0:
            raise InvalidDimensions(
                f"Board dimensions must be positive, got {self.rows}x{self.cols}."
            )
        if self.mine_count < 0:
            raise InvalidMineCount("mine_count must be non-negative.")
        if self.mine_count >= self.rows * self.cols - SAFE_ZONE_SIZE:
            raise InvalidMineCount(
                f"Cannot fit {self.mine_count} mines on a {self.rows}x{self.cols} board "
                f"while keeping a {SAFE_ZONE_SIZE}-cell safe opening."
            )
        return self

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "rows": self.rows,
            "cols": self.cols,
            "mine_count": self.mine_count,
        }


@dataclass(frozen=True)
class Hint:
    row: int
    col: int
    reasoning: str
    confidence: float

    def to_dict(self) -> dict:
        return {
            "row": self.row,
            "col": self.col,
            "reasoning": self.reasoning,
            "confidence": self.confidence,
        }


def optional_hint_dict(hint: Optional[Hint]) -> Optional[dict]:
    return hint.to_dict() if hint is not None else None
