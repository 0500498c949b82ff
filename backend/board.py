import random
from collections import deque
from dataclasses import replace
from typing import Deque, List, Optional, Set, Tuple

from .errors import InvalidDimensions, InvalidMineCount
from .grid import Board, Cell, CellState, Difficulty, neighbors

# Cell states a reveal is allowed to act on. Flagged cells are protected.
REVEALABLE_STATES = (CellState.HIDDEN, CellState.QUESTIONED)

_FLAG_CYCLE = {
    CellState.HIDDEN: CellState.FLAGGED,
    CellState.FLAGGED: CellState.QUESTIONED,
    CellState.QUESTIONED: CellState.HIDDEN,
}


def create_empty_board(rows: int, cols: int) -> Board:
    """
    Build a board with every cell hidden and no mines.

    Mines are placed later by place_mines(), once the first click is known.
    """
    if rows <= 0 or cols <= 0:
        raise InvalidDimensions(f"Board dimensions must be positive, got {rows}x{cols}.")
    return Board.from_rows([[Cell(row=r, col=c) for c in range(cols)] for r in range(rows)])


def _in_safe_zone(row: int, col: int, first_row: int, first_col: int) -> bool:
    return abs(row - first_row) <= 1 and abs(col - first_col) <= 1


def _with_neighbor_counts(cells: List[List[Cell]]) -> List[List[Cell]]:
    rows, cols = len(cells), len(cells[0])
    counted = []
    for r in range(rows):
        row_cells = []
        for c in range(cols):
            cell = cells[r][c]
            if not cell.is_mine:
                count = sum(1 for nr, nc in neighbors(r, c, rows, cols) if cells[nr][nc].is_mine)
                cell = replace(cell, neighbor_mines=count)
            row_cells.append(cell)
        counted.append(row_cells)
    return counted


def place_mines(
    board: Board,
    mine_count: int,
    first_row: int,
    first_col: int,
    rng: Optional[random.Random] = None
) -> Board:
    """
    Return a copy of board with mine_count mines placed outside the 3x3 block
    centered on (first_row, first_col), then recompute neighbor counts.

    rng:
        Anything with randrange(); pass a seeded random.Random for repeatable
        layouts. Defaults to a fresh unseeded generator.

    Positions are drawn by rejection sampling: a uniformly random cell is kept
    only if it is not already a mine and lies outside the safe zone.
    """
    board.check_bounds(first_row, first_col)
    if mine_count < 0:
        raise InvalidMineCount("mine_count must be non-negative.")

    free_cells = sum(
        1 for cell in board
        if not cell.is_mine and not _in_safe_zone(cell.row, cell.col, first_row, first_col)
    )
    if mine_count > free_cells:
        # Rejection sampling would never finish.
        raise InvalidMineCount(
            f"Cannot place {mine_count} mines: only {free_cells} cells are available "
            f"outside the safe zone."
        )

    rng = rng if rng is not None else random.Random()
    cells = board.mutable_rows()

    placed = 0
    while placed < mine_count:
        r = rng.randrange(board.rows)
        c = rng.randrange(board.cols)
        if cells[r][c].is_mine or _in_safe_zone(r, c, first_row, first_col):
            continue
        cells[r][c] = replace(cells[r][c], is_mine=True)
        placed += 1

    return Board.from_rows(_with_neighbor_counts(cells))


def board_from_layout(layout: List[str]) -> Board:
    """
    Build a hidden board from rows of text, "*" for a mine and anything else
    for a safe cell. Neighbor counts are computed as for a generated board.
    """
    if not layout or not layout[0] or any(len(line) != len(layout[0]) for line in layout):
        raise InvalidDimensions("Layout must be a non-empty rectangle.")
    cells = [
        [Cell(row=r, col=c, is_mine=(ch == "*")) for c, ch in enumerate(line)]
        for r, line in enumerate(layout)
    ]
    return Board.from_rows(_with_neighbor_counts(cells))


def reveal_cell(board: Board, row: int, col: int) -> Tuple[Board, bool]:
    """
    Reveal (row, col) and return (new_board, hit_mine).

    - Revealed or flagged target: nothing changes, the same board comes back.
    - Mine: only that cell is revealed and hit_mine is True.
    - Otherwise a breadth-first flood fill opens the cell and, through every
      zero cell, its hidden or questioned neighbors. Flagged cells stop the
      fill and are never opened.
    """
    target = board.cell(row, col)

    if target.state not in REVEALABLE_STATES:
        return board, False

    cells = board.mutable_rows()

    if target.is_mine:
        cells[row][col] = replace(target, state=CellState.REVEALED)
        return Board.from_rows(cells), True

    queue: Deque[Tuple[int, int]] = deque([(row, col)])
    visited: Set[Tuple[int, int]] = set()

    while queue:
        r, c = queue.popleft()
        if (r, c) in visited or cells[r][c].state == CellState.FLAGGED:
            continue
        visited.add((r, c))

        current = replace(cells[r][c], state=CellState.REVEALED)
        cells[r][c] = current

        if current.neighbor_mines == 0 and not current.is_mine:
            for nr, nc in neighbors(r, c, board.rows, board.cols):
                if cells[nr][nc].state in REVEALABLE_STATES:
                    queue.append((nr, nc))

    return Board.from_rows(cells), False


def toggle_flag(board: Board, row: int, col: int) -> Board:
    """Cycle hidden -> flagged -> questioned -> hidden. Revealed cells are left alone."""
    cell = board.cell(row, col)
    if cell.state == CellState.REVEALED:
        return board

    cells = board.mutable_rows()
    cells[row][col] = replace(cell, state=_FLAG_CYCLE[cell.state])
    return Board.from_rows(cells)


def check_win(board: Board, difficulty: Difficulty) -> bool:
    """All safe cells are revealed. Mines do not need to be flagged."""
    return board.count(CellState.REVEALED) == board.rows * board.cols - difficulty.mine_count


def reveal_all_mines(board: Board) -> Board:
    """Reveal every mine whatever its state; used to show the layout after a loss."""
    return Board.from_rows([
        [replace(cell, state=CellState.REVEALED) if cell.is_mine else cell for cell in row]
        for row in board.cells
    ])


def highlight_cell(board: Board, row: int, col: int) -> Board:
    """Mark (row, col) as the suggested cell and clear any other highlight."""
    board.check_bounds(row, col)
    return Board.from_rows([
        [replace(cell, highlighted=(cell.row == row and cell.col == col)) for cell in r]
        for r in board.cells
    ])


def clear_highlights(board: Board) -> Board:
    if not any(cell.highlighted for cell in board):
        return board
    return Board.from_rows([[replace(cell, highlighted=False) for cell in row] for row in board.cells])
