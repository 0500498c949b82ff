# backend/game.py

import logging
import random
from typing import Any, Dict, Optional

from .board import (
    check_win,
    clear_highlights,
    create_empty_board,
    highlight_cell,
    place_mines,
    reveal_all_mines,
    reveal_cell,
    toggle_flag,
)
from .grid import Board, CellState, Difficulty, GameStatus, Hint, optional_hint_dict
from .utils import deserialize_board, serialize_board, visible_board

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = (GameStatus.IDLE, GameStatus.PLAYING)


def new_game(difficulty: Difficulty) -> Board:
    """Validate the difficulty and return an empty board. Mines come on the first reveal."""
    difficulty.validate()
    return create_empty_board(difficulty.rows, difficulty.cols)


class GameSession:
    """
    Owns the current board snapshot and drives the status transitions
    idle -> playing -> won / lost.

    provider:
        Any models.base_provider.HintProvider. When None, hints come straight
        from backend.hint.suggest_move through the local provider.
    """

    def __init__(self, difficulty: Difficulty, seed: int = None, provider=None):
        self.difficulty = difficulty.validate()
        self.seed = seed
        self.rng = random.Random(seed)
        self.provider = provider
        self.reset()

    def reset(self):
        """
        Start over with a fresh empty board and the same difficulty.
        """
        self.board = new_game(self.difficulty)
        self.status = GameStatus.IDLE
        self.hint: Optional[Hint] = None
        self.moves_made = 0

    def _get_provider(self):
        if self.provider is None:
            # Imported lazily: models depends on backend.
            from models.local_provider.provider import LocalHintProvider
            self.provider = LocalHintProvider()
        return self.provider

    def _discard_hint(self):
        self.hint = None
        self.board = clear_highlights(self.board)

    def reveal(self, row: int, col: int) -> Dict[str, Any]:
        """
        Reveal (row, col). The first reveal places the mines around it.
        Returns the state dict after the move.
        """
        if self.is_game_over():
            return self.get_state()

        self.board.check_bounds(row, col)
        self._discard_hint()

        if self.status == GameStatus.IDLE:
            self.board = place_mines(self.board, self.difficulty.mine_count, row, col, rng=self.rng)
            self.status = GameStatus.PLAYING
            logger.debug("Mines placed around first click (%d, %d)", row, col)

        board, hit_mine = reveal_cell(self.board, row, col)
        if board is not self.board:
            self.moves_made += 1
        self.board = board

        if hit_mine:
            self.status = GameStatus.LOST
            self.board = reveal_all_mines(self.board)
            logger.info("Game lost: mine at (%d, %d)", row, col)
        elif check_win(self.board, self.difficulty):
            self.status = GameStatus.WON
            logger.info("Game won in %d moves", self.moves_made)

        return self.get_state()

    def toggle_flag(self, row: int, col: int) -> Dict[str, Any]:
        if self.is_game_over():
            return self.get_state()

        self.board.check_bounds(row, col)
        self._discard_hint()

        board = toggle_flag(self.board, row, col)
        if board is not self.board:
            self.moves_made += 1
        self.board = board
        return self.get_state()

    def step(self, action: str, row: int, col: int) -> Dict[str, Any]:
        """
        Apply an action ("reveal" or "flag") at position (row, col).
        """
        if action == "reveal":
            return self.reveal(row, col)
        if action == "flag":
            return self.toggle_flag(row, col)
        raise ValueError(f"Unknown action '{action}'. Expected 'reveal' or 'flag'.")

    def _store_hint(self, hint: Optional[Hint]) -> Optional[Hint]:
        self.hint = hint
        if hint is None:
            self.board = clear_highlights(self.board)
        else:
            self.board = highlight_cell(self.board, hint.row, hint.col)
            logger.debug("Hint (%d, %d) confidence %.2f", hint.row, hint.col, hint.confidence)
        return hint

    def request_hint(self, provider=None) -> Optional[Hint]:
        """
        Ask the provider for a suggestion on the current board.
        A provider passed in is used for this call only. Finished games get no hint.
        """
        if self.is_game_over():
            return None
        snapshot = self.board
        hint = (provider or self._get_provider()).suggest(snapshot, self.difficulty.mine_count)
        return self._store_hint(hint)

    async def request_hint_async(self, provider=None) -> Optional[Hint]:
        """
        Like request_hint(), but through the provider's asynchronous path.
        The hint is dropped if the board changed while it was being computed.
        """
        if self.is_game_over():
            return None
        snapshot = self.board
        hint = await (provider or self._get_provider()).suggest_async(snapshot, self.difficulty.mine_count)
        if self.board is not snapshot:
            logger.debug("Discarding stale hint computed for an older board")
            return None
        return self._store_hint(hint)

    @property
    def flags_used(self) -> int:
        return self.board.count(CellState.FLAGGED)

    @property
    def mines_remaining(self) -> int:
        return self.difficulty.mine_count - self.flags_used

    def is_game_over(self) -> bool:
        return self.status not in ACTIVE_STATUSES

    def is_win(self) -> bool:
        return self.status == GameStatus.WON

    def get_state(self) -> Dict[str, Any]:
        """
        Return the current visible board and game status.
        """
        return {
            "board": visible_board(self.board),
            "status": self.status.value,
            "game_over": self.is_game_over(),
            "won": self.is_win(),
            "moves_made": self.moves_made,
            "dimensions": (self.board.rows, self.board.cols),
            "difficulty": self.difficulty.to_dict(),
            "flags_used": self.flags_used,
            "mines_remaining": self.mines_remaining,
            "hint": optional_hint_dict(self.hint),
        }

    def to_dict(self) -> Dict[str, Any]:
        """
        Full snapshot for saving: difficulty, status and the complete board.
        """
        return {
            "difficulty": self.difficulty.to_dict(),
            "status": self.status.value,
            "moves_made": self.moves_made,
            "board": serialize_board(clear_highlights(self.board)),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], seed: int = None, provider=None) -> "GameSession":
        difficulty = Difficulty(**data["difficulty"])
        session = cls(difficulty, seed=seed, provider=provider)
        session.board = deserialize_board(data["board"])
        session.status = GameStatus(data["status"])
        session.moves_made = int(data.get("moves_made", 0))
        return session
