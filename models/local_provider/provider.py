# models/local_provider/provider.py

from typing import Optional

from backend.grid import Board, Hint
from backend.hint import suggest_move
from models.base_provider import HintProvider


class LocalHintProvider(HintProvider):
    """
    The built-in heuristic: flag-saturation deduction first, then the hidden
    cell whose revealed neighbors show the fewest mines.
    """

    name = "local"

    def compute(self, board: Board, mine_count: Optional[int] = None) -> Optional[Hint]:
        return suggest_move(board, mine_count)
