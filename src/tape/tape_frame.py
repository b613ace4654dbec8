"""Tape frames: one tape, cursor and register pair per function invocation."""

from typing import List

from tape.tape_error import TapeEvalError


class TapeFrame:
    """
    A growable tape of integer cells with a cursor and two registers.

    The tape is extended with zero cells whenever the cursor is beyond its end,
    so every cell that has never been touched reads as zero.
    """

    def __init__(self, initial_value: int = 0) -> None:
        """
        Initialize a frame with a single cell.

        Args:
            initial_value: Value of the first cell
        """
        self.tape: List[int] = [initial_value]
        self.current = 0
        self.memory = 0
        self.return_register = 0

    def _ensure_cell(self) -> None:
        """Extend the tape so that the cursor addresses a real cell."""
        missing = self.current - len(self.tape) + 1
        if missing > 0:
            self.tape.extend([0] * missing)

    @property
    def current_cell(self) -> int:
        """Value of the cell under the cursor."""
        self._ensure_cell()
        return self.tape[self.current]

    @current_cell.setter
    def current_cell(self, value: int) -> None:
        self._ensure_cell()
        self.tape[self.current] = value

    def move_pointer(self, delta: int) -> None:
        """
        Move the cursor.

        Args:
            delta: Number of cells to move (negative moves left)

        Raises:
            TapeEvalError: If the cursor would move before the first cell
        """
        target = self.current + delta
        if target < 0:
            raise TapeEvalError(
                message="Cursor moved before the start of the tape",
                received=f"Cursor position {self.current} moved by {delta}",
                expected="Cursor position 0 or greater",
                suggestion="Check the number of '<' moves, or use '$' to return to the first cell"
            )

        self.current = target

    def increment_cell(self, delta: int) -> None:
        """Add `delta` to the current cell."""
        self.current_cell += delta

    def swap(self) -> None:
        """Exchange the current cell and the memory register."""
        self.memory, self.current_cell = self.current_cell, self.memory

    def flush(self) -> None:
        """Reset the frame to a single zero cell with cleared registers."""
        self.tape = [0]
        self.current = 0
        self.memory = 0
        self.return_register = 0

    def return_to_start(self) -> None:
        """Move the cursor to the first cell without changing any values."""
        self.current = 0

    def __repr__(self) -> str:
        return (
            f"TapeFrame(tape={self.tape!r}, current={self.current}, "
            f"memory={self.memory}, return_register={self.return_register})"
        )
