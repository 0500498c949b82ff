# backend/hint.py

from typing import Optional

from .grid import Board, Cell, CellState, Hint

# Risk assumed for a hidden cell with no revealed neighbors to learn from.
DEFAULT_RISK = 0.1
MIN_CONFIDENCE = 0.1


def _find_saturated_safe_cell(board: Board) -> Optional[Hint]:
    """
    Flag-saturation rule: when a revealed number already has that many flags
    around it, its remaining hidden neighbors cannot be mines.

    Source cells are scanned row-major and the first one that qualifies wins.
    """
    for cell in board:
        if cell.state != CellState.REVEALED or cell.neighbor_mines <= 0:
            continue

        around = list(board.neighbors(cell.row, cell.col))
        flagged_count = sum(1 for n in around if n.state == CellState.FLAGGED)
        if flagged_count != cell.neighbor_mines:
            continue

        for neighbor in around:
            if neighbor.state == CellState.HIDDEN:
                return Hint(
                    row=neighbor.row,
                    col=neighbor.col,
                    reasoning=(
                        f"Cell ({neighbor.row}, {neighbor.col}) is safe because all "
                        f"{cell.neighbor_mines} mines around cell ({cell.row}, {cell.col}) "
                        f"are already flagged."
                    ),
                    confidence=1.0,
                )
    return None


def neighbor_risk(board: Board, cell: Cell) -> float:
    """Average revealed-neighbor number, scaled to [0, 1] by the 8 possible neighbors."""
    total_mines = 0
    revealed = 0
    for neighbor in board.neighbors(cell.row, cell.col):
        if neighbor.state == CellState.REVEALED:
            revealed += 1
            total_mines += neighbor.neighbor_mines
    if revealed == 0:
        return DEFAULT_RISK
    return total_mines / (8 * revealed)


def _find_lowest_risk_cell(board: Board) -> Optional[Hint]:
    safest = None
    safest_risk = None
    for cell in board:
        if cell.state != CellState.HIDDEN:
            continue
        risk = neighbor_risk(board, cell)
        # Strict comparison keeps the first cell found on ties.
        if safest is None or risk < safest_risk:
            safest, safest_risk = cell, risk

    if safest is None:
        return None

    return Hint(
        row=safest.row,
        col=safest.col,
        reasoning=(
            f"Cell ({safest.row}, {safest.col}) appears to be the safest option "
            f"based on neighboring numbers."
        ),
        confidence=max(MIN_CONFIDENCE, 1.0 - safest_risk),
    )


def suggest_move(board: Board, mine_count: Optional[int] = None) -> Optional[Hint]:
    """
    Suggest one cell to reveal next, or None if nothing is hidden.

    A cell proven safe by the flag-saturation rule is returned with confidence
    1.0. Otherwise the hidden cell with the lowest neighbor_risk() is returned.
    Only local information is used: overlapping clues and the remaining mine
    total are not combined, so mine_count is accepted but unused.
    """
    return _find_saturated_safe_cell(board) or _find_lowest_risk_cell(board)
