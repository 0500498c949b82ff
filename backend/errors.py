# backend/errors.py


class MinesweeperError(Exception):
    """Base class for every error raised by the game engine."""


class InvalidDimensions(MinesweeperError, ValueError):
    """Rows or columns are not positive."""


class InvalidMineCount(MinesweeperError, ValueError):
    """Mine count does not fit outside the first-click safe zone."""


class OutOfBounds(MinesweeperError, ValueError):
    """A (row, col) coordinate lies outside the board."""

    def __init__(self, row, col, rows, cols):
        super().__init__(f"Cell ({row}, {col}) is outside the {rows}x{cols} board.")
        self.row = row
        self.col = col


class HintProviderError(MinesweeperError, RuntimeError):
    """A hint provider failed to produce a suggestion. The caller may retry."""
