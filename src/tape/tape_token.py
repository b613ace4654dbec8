"""Opcodes and token representation for Tape programs."""

from dataclasses import dataclass
from enum import Enum


class TapeOpcodeKind(Enum):
    """Opcode kinds for Tape programs."""
    MOVE_RIGHT = "MOVE_RIGHT"
    MOVE_LEFT = "MOVE_LEFT"
    INCREASE = "INCREASE"
    DECREASE = "DECREASE"
    RESET = "RESET"
    WRITE = "WRITE"
    READ = "READ"
    RETURN_VALUE = "RETURN_VALUE"
    SWAP = "SWAP"
    FLUSH = "FLUSH"
    FIRST_INDEX = "FIRST_INDEX"
    RANDOM = "RANDOM"
    PRINT_NUMBER = "PRINT_NUMBER"
    PRINT_CHAR = "PRINT_CHAR"
    PAUSE = "PAUSE"
    NEWLINE = "NEWLINE"
    SLEEP = "SLEEP"
    RECYCLE = "RECYCLE"
    COMMENT = "COMMENT"
    LOOP = "LOOP"
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    EQUALS = "EQUALS"
    NOT_EQUALS = "NOT_EQUALS"
    FUNCTION_DECLARE = "FUNCTION_DECLARE"
    FUNCTION_END = "FUNCTION_END"
    FUNCTION_CALL = "FUNCTION_CALL"


LOOP_CONDITION_KINDS = frozenset({
    TapeOpcodeKind.POSITIVE,
    TapeOpcodeKind.NEGATIVE,
    TapeOpcodeKind.EQUALS,
    TapeOpcodeKind.NOT_EQUALS,
})


@dataclass(frozen=True)
class TapeOpcode:
    """
    A single opcode.

    `function_id` is only set for FUNCTION_CALL opcodes, where it holds the
    digit (1-9) that named the function.
    """
    kind: TapeOpcodeKind
    function_id: int | None = None

    def is_loop_condition(self) -> bool:
        """Return True if this opcode closes a loop."""
        return self.kind in LOOP_CONDITION_KINDS

    def __repr__(self) -> str:
        if self.function_id is not None:
            return f"TapeOpcode({self.kind.name}, {self.function_id})"

        return f"TapeOpcode({self.kind.name})"


@dataclass(frozen=True)
class TapeToken:
    """Represents a single opcode token with its source position."""
    line: int  # Line number (1-indexed)
    column: int  # Column number (1-indexed)
    opcode: TapeOpcode

    def __repr__(self) -> str:
        return f"TapeToken({self.opcode!r}, line={self.line}, col={self.column})"
