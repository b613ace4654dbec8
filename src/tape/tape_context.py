"""Runtime context for Tape programs: call stack, function table and diagnostics."""

from typing import Dict, List

from tape.tape_ast import TapeASTBlock
from tape.tape_diagnostic import TapeDiagnostic
from tape.tape_error import TapeEvalError
from tape.tape_frame import TapeFrame


class TapeContext:
    """
    Mutable machine state for a single run.

    The call stack always holds at least the root frame.  The function table
    maps identifiers 1-9 to function bodies; the first registration of an
    identifier is permanent.
    """

    def __init__(self, max_call_depth: int = 200) -> None:
        """
        Initialize a context with a single root frame.

        Args:
            max_call_depth: Maximum number of frames above the root frame
        """
        self.max_call_depth = max_call_depth
        self.frames: List[TapeFrame] = [TapeFrame()]
        self.functions: Dict[int, TapeASTBlock] = {}
        self.diagnostics: List[TapeDiagnostic] = []

        # Number of loops currently being evaluated
        self.loop_depth = 0

    @property
    def current_frame(self) -> TapeFrame:
        """The frame at the top of the call stack."""
        return self.frames[-1]

    @property
    def call_depth(self) -> int:
        """Number of frames above the root frame."""
        return len(self.frames) - 1

    def push_frame(self) -> TapeFrame:
        """
        Push a new frame seeded with the caller's current cell value.

        Returns:
            The new frame

        Raises:
            TapeEvalError: If the maximum call depth would be exceeded
        """
        if self.call_depth >= self.max_call_depth:
            raise TapeEvalError(
                message=f"Call stack too deep (max depth: {self.max_call_depth})",
                received=f"Call at depth {self.call_depth + 1}",
                suggestion="Check for a function that calls itself without stopping, "
                           "or increase max_call_depth"
            )

        frame = TapeFrame(self.current_frame.current_cell)
        self.frames.append(frame)
        return frame

    def pop_frame(self) -> TapeFrame:
        """
        Pop the current frame, passing its current cell back to the caller.

        The value under the popped frame's cursor is stored in the return
        register of the frame that becomes current.

        Returns:
            The popped frame

        Raises:
            TapeEvalError: If only the root frame remains
        """
        if len(self.frames) == 1:
            raise TapeEvalError(
                message="Cannot pop the root frame",
                context="The call stack must always contain the frame of the main program"
            )

        frame = self.frames.pop()
        self.current_frame.return_register = frame.current_cell
        return frame

    def register_function(self, function_id: int, body: TapeASTBlock) -> bool:
        """
        Register a function body.

        Args:
            function_id: Function identifier (1-9)
            body: The function body

        Returns:
            True if registered, False if the identifier was already taken
        """
        if function_id in self.functions:
            return False

        self.functions[function_id] = body
        return True

    def lookup_function(self, function_id: int) -> TapeASTBlock | None:
        """Return the body registered for `function_id`, if any."""
        return self.functions.get(function_id)

    def report(self, message: str, line: int | None = None, column: int | None = None) -> TapeDiagnostic:
        """
        Record a soft fault.

        Args:
            message: Description of the problem
            line: Source line, if known
            column: Source column, if known

        Returns:
            The recorded diagnostic
        """
        diagnostic = TapeDiagnostic(message, line, column)
        self.diagnostics.append(diagnostic)
        return diagnostic

    def __repr__(self) -> str:
        return f"TapeContext(depth={self.call_depth}, functions={sorted(self.functions)})"
