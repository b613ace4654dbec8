"""Tape AST node hierarchy.

AST nodes are immutable and carry source location metadata (line, column) for
error reporting.  The location fields are keyword-only and do not take part in
equality, so two trees parsed from differently laid out source compare equal
when their structure matches.

The node set is closed: the evaluator dispatches over exactly the classes
defined here.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class TapeLoopCondition(Enum):
    """Exit conditions that terminate a loop."""
    POSITIVE = "> 0"
    NEGATIVE = "< 0"
    EQUALS_ZERO = "== 0"
    NOT_EQUALS_ZERO = "!= 0"

    def is_met(self, value: int) -> bool:
        """
        Check whether the exit condition holds for a cell value.

        Args:
            value: The cell value under the cursor

        Returns:
            True if the loop should stop
        """
        match self:
            case TapeLoopCondition.POSITIVE:
                return value > 0

            case TapeLoopCondition.NEGATIVE:
                return value < 0

            case TapeLoopCondition.EQUALS_ZERO:
                return value == 0

            case TapeLoopCondition.NOT_EQUALS_ZERO:
                return value != 0


@dataclass(frozen=True)
class TapeASTNode(ABC):
    """
    Abstract base class for all Tape AST nodes.

    Source location fields are keyword-only so subclasses can declare their
    own positional fields.
    """
    line: int | None = field(default=None, kw_only=True, compare=False)
    column: int | None = field(default=None, kw_only=True, compare=False)

    @abstractmethod
    def describe(self) -> str:
        """Describe the node for AST dumps."""


@dataclass(frozen=True)
class TapeASTMovePointer(TapeASTNode):
    """Moves the cursor by `delta` cells."""
    delta: int

    def describe(self) -> str:
        return f"MovePointer {self.delta:+d}"


@dataclass(frozen=True)
class TapeASTIncrementCell(TapeASTNode):
    """Adds `delta` to the current cell."""
    delta: int

    def describe(self) -> str:
        return f"IncrementCell {self.delta:+d}"


@dataclass(frozen=True)
class TapeASTReset(TapeASTNode):
    """Sets the current cell to zero."""

    def describe(self) -> str:
        return "Reset"


@dataclass(frozen=True)
class TapeASTWrite(TapeASTNode):
    """Copies the current cell into the memory register."""

    def describe(self) -> str:
        return "Write"


@dataclass(frozen=True)
class TapeASTRead(TapeASTNode):
    """Copies the memory register into the current cell."""

    def describe(self) -> str:
        return "Read"


@dataclass(frozen=True)
class TapeASTFunctionReadResult(TapeASTNode):
    """Copies the return register into the current cell."""

    def describe(self) -> str:
        return "FunctionReadResult"


@dataclass(frozen=True)
class TapeASTSwap(TapeASTNode):
    """Exchanges the current cell and the memory register."""

    def describe(self) -> str:
        return "Swap"


@dataclass(frozen=True)
class TapeASTFlush(TapeASTNode):
    """Resets the whole frame to a single zero cell."""

    def describe(self) -> str:
        return "Flush"


@dataclass(frozen=True)
class TapeASTReturnToStart(TapeASTNode):
    """Moves the cursor back to the first cell."""

    def describe(self) -> str:
        return "ReturnToStart"


@dataclass(frozen=True)
class TapeASTRandom(TapeASTNode):
    """Stores a random integer in [0, 100) in the current cell."""

    def describe(self) -> str:
        return "Random"


@dataclass(frozen=True)
class TapeASTPrintNumber(TapeASTNode):
    """Outputs the current cell as decimal text."""

    def describe(self) -> str:
        return "PrintNumber"


@dataclass(frozen=True)
class TapeASTPrintChar(TapeASTNode):
    """Outputs the character whose code point is the current cell."""

    def describe(self) -> str:
        return "PrintChar"


@dataclass(frozen=True)
class TapeASTPause(TapeASTNode):
    """Waits for one line of input and discards it."""

    def describe(self) -> str:
        return "Pause"


@dataclass(frozen=True)
class TapeASTNewline(TapeASTNode):
    """Outputs a line break."""

    def describe(self) -> str:
        return "Newline"


@dataclass(frozen=True)
class TapeASTSleep(TapeASTNode):
    """Suspends execution for a duration proportional to the current cell."""

    def describe(self) -> str:
        return "Sleep"


@dataclass(frozen=True)
class TapeASTRecycle(TapeASTNode):
    """
    Reserved opcode with no defined behaviour.

    Evaluates as a no-op.  Kept as a distinct node so a future meaning can be
    given to it without changing the parser.
    """

    def describe(self) -> str:
        return "Recycle"


@dataclass(frozen=True)
class TapeASTNop(TapeASTNode):
    """Structural token found where it has no structural meaning."""

    def describe(self) -> str:
        return "Nop"


@dataclass(frozen=True)
class TapeASTFunctionCall(TapeASTNode):
    """Calls the function registered under `function_id`."""
    function_id: int

    def describe(self) -> str:
        return f"FunctionCall {self.function_id}"


@dataclass(frozen=True)
class TapeASTBlock(TapeASTNode):
    """Ordered sequence of expressions."""
    expressions: Tuple[TapeASTNode, ...] = ()

    def describe(self) -> str:
        return f"Block ({len(self.expressions)} expressions)"


@dataclass(frozen=True)
class TapeASTLoop(TapeASTNode):
    """Repeats `body` until `condition` holds for the current cell."""
    condition: TapeLoopCondition
    body: TapeASTBlock

    def describe(self) -> str:
        return f"Loop until cell {self.condition.value}"


@dataclass(frozen=True)
class TapeASTFunctionDecl(TapeASTNode):
    """Registers `body` under `function_id` when evaluated."""
    function_id: int
    body: TapeASTBlock

    def describe(self) -> str:
        return f"FunctionDecl {self.function_id}"


@dataclass(frozen=True)
class TapeProgram:
    """A parsed program: the ordered top-level expressions."""
    expressions: Tuple[TapeASTNode, ...] = ()

    def __len__(self) -> int:
        return len(self.expressions)
