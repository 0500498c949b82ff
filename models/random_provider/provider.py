# models/random_provider/provider.py

import random
from typing import Optional

from backend.grid import Board, CellState, Hint
from models.base_provider import HintProvider


class RandomHintProvider(HintProvider):
    """
    A baseline provider that picks any hidden cell at random.
    Useful as a reference point when evaluating the local heuristic.
    """

    name = "random"
    GUESS_CONFIDENCE = 0.3

    def __init__(self, config=None):
        super().__init__(config)
        self.rng = random.Random(self.config.get("seed"))

    def compute(self, board: Board, mine_count: Optional[int] = None) -> Optional[Hint]:
        candidates = [cell for cell in board if cell.state == CellState.HIDDEN]
        if not candidates:
            return None

        cell = self.rng.choice(candidates)
        return Hint(
            row=cell.row,
            col=cell.col,
            reasoning="No obvious safe moves found. Making a calculated guess on a hidden cell.",
            confidence=self.GUESS_CONFIDENCE,
        )
