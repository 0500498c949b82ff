# models/base_provider.py

import asyncio
import logging
from typing import Any, Dict, Optional

from backend.errors import HintProviderError
from backend.grid import Board, Hint

logger = logging.getLogger(__name__)


class HintProvider:
    """
    Base class for every hint backend.
    Providers share one signature so the game session and the API can swap
    a local heuristic for any other backend without changes.
    """

    name = "base"

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize the provider with optional configuration.

        Recognised keys:
            delay_seconds: simulated latency applied by suggest_async().
        """
        self.config = config or {}
        self.delay_seconds = float(self.config.get("delay_seconds", 0.0))

    def compute(self, board: Board, mine_count: Optional[int] = None) -> Optional[Hint]:
        """
        Produce a hint for the given board snapshot.

        Returns:
            A Hint, or None when there is no hidden cell left to suggest.
        """
        raise NotImplementedError("Provider must implement compute().")

    def suggest(self, board: Board, mine_count: Optional[int] = None) -> Optional[Hint]:
        """
        Run compute() and surface any backend failure as HintProviderError,
        which callers treat as recoverable.
        """
        try:
            return self.compute(board, mine_count)
        except HintProviderError:
            raise
        except Exception as error:
            logger.error("Hint provider %s failed: %s", self.name, error)
            raise HintProviderError(f"Hint provider '{self.name}' failed: {error}") from error

    async def suggest_async(self, board: Board, mine_count: Optional[int] = None) -> Optional[Hint]:
        """
        Asynchronous entry point. The delay happens before the scan; once the
        scan starts it runs to completion on the snapshot it was given.
        """
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        return self.suggest(board, mine_count)
