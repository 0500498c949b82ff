# backend/utils.py

from typing import Any, Dict, List

from .grid import Board, Cell, CellState

_STATE_SYMBOLS = {
    CellState.HIDDEN: ".",
    CellState.FLAGGED: "F",
    CellState.QUESTIONED: "?",
}


def serialize_board(board: Board) -> List[List[Dict[str, Any]]]:
    """
    Convert a board to a JSON-safe list of lists of cell dicts.
    """
    return [
        [
            {
                "row": cell.row,
                "col": cell.col,
                "is_mine": cell.is_mine,
                "state": cell.state.value,
                "neighbor_mines": cell.neighbor_mines,
                "highlighted": cell.highlighted,
            }
            for cell in row
        ]
        for row in board.cells
    ]


def deserialize_board(data: List[List[Dict[str, Any]]]) -> Board:
    """
    Rebuild a Board from serialize_board() output.
    """
    return Board.from_rows([
        [
            Cell(
                row=int(item["row"]),
                col=int(item["col"]),
                is_mine=bool(item["is_mine"]),
                state=CellState(item["state"]),
                neighbor_mines=int(item["neighbor_mines"]),
                highlighted=bool(item.get("highlighted", False)),
            )
            for item in row
        ]
        for row in data
    ])


def visible_board(board: Board) -> List[List[Any]]:
    """
    What the player may see: None for hidden cells, "F" / "?" for marks,
    "*" for a revealed mine and the neighbor count for other revealed cells.
    """
    visible = []
    for row in board.cells:
        row_cells = []
        for cell in row:
            if cell.state == CellState.REVEALED:
                row_cells.append("*" if cell.is_mine else cell.neighbor_mines)
            elif cell.state == CellState.HIDDEN:
                row_cells.append(None)
            else:
                row_cells.append(_STATE_SYMBOLS[cell.state])
        visible.append(row_cells)
    return visible


def format_board(board: Board, reveal_all: bool = False) -> str:
    """
    Render the board for debugging. With reveal_all, mines and numbers are
    shown for every cell regardless of state.
    """
    lines = []
    for row in board.cells:
        row_str = ""
        for cell in row:
            if reveal_all or cell.state == CellState.REVEALED:
                symbol = "*" if cell.is_mine else str(cell.neighbor_mines)
            else:
                symbol = _STATE_SYMBOLS[cell.state]
            row_str += f" {symbol} "
        lines.append(row_str)
    return "\n".join(lines)
