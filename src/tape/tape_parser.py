"""Parser for Tape programs with detailed error messages."""

from dataclasses import dataclass, field
import logging
from typing import List

from tape.tape_ast import (
    TapeASTNode, TapeASTMovePointer, TapeASTIncrementCell, TapeASTReset, TapeASTWrite, TapeASTRead,
    TapeASTFunctionReadResult, TapeASTSwap, TapeASTFlush, TapeASTReturnToStart, TapeASTRandom,
    TapeASTPrintNumber, TapeASTPrintChar, TapeASTPause, TapeASTNewline, TapeASTSleep, TapeASTRecycle,
    TapeASTNop, TapeASTFunctionCall, TapeASTBlock, TapeASTLoop, TapeASTFunctionDecl, TapeLoopCondition,
    TapeProgram
)
from tape.tape_error import TapeParseError
from tape.tape_token import TapeOpcodeKind, TapeToken


@dataclass
class LoopStackFrame:
    """Represents an unclosed loop and the body collected for it so far."""
    token: TapeToken
    expressions: List[TapeASTNode] = field(default_factory=list)


class TapeParser:
    """
    Parses tokens into a Tape program.

    Loops and function declarations are resolved independently of each other:
    function declarations may only appear at the top level, and neither
    construct is recognised inside the body of the other.  The first
    structural error aborts the parse.
    """

    CONDITIONS = {
        TapeOpcodeKind.POSITIVE: TapeLoopCondition.POSITIVE,
        TapeOpcodeKind.NEGATIVE: TapeLoopCondition.NEGATIVE,
        TapeOpcodeKind.EQUALS: TapeLoopCondition.EQUALS_ZERO,
        TapeOpcodeKind.NOT_EQUALS: TapeLoopCondition.NOT_EQUALS_ZERO,
    }

    def __init__(
        self,
        tokens: List[TapeToken],
        source: str = "",
        show_context: bool = True,
        max_loop_depth: int = 64
    ):
        """
        Initialize parser with tokens and original source.

        Args:
            tokens: List of tokens to parse
            source: Original source text for error context
            show_context: Whether errors should include a source excerpt
            max_loop_depth: Maximum number of loops that may be open at once
        """
        self.tokens = tokens
        self.pos = 0
        self.current_token: TapeToken | None = tokens[0] if tokens else None
        self.source = source
        self.show_context = show_context
        self.max_loop_depth = max_loop_depth
        self._logger = logging.getLogger("TapeParser")

        # Unclosed loops, innermost last
        self.loop_stack: List[LoopStackFrame] = []

    def parse(self) -> TapeProgram:
        """
        Parse all tokens into a program.

        Returns:
            The parsed program

        Raises:
            TapeParseError: If the token stream is structurally invalid
        """
        expressions: List[TapeASTNode] = []

        while self.current_token is not None:
            token = self.current_token
            kind = token.opcode.kind

            if kind == TapeOpcodeKind.FUNCTION_DECLARE:
                expressions.append(self._parse_function_declaration())
                continue

            if kind == TapeOpcodeKind.LOOP:
                expressions.append(self._parse_loop())
                continue

            if token.opcode.is_loop_condition():
                raise self._error(
                    token,
                    message="Loop condition without matching loop",
                    received=f"Condition: {kind.name}",
                    expected="A loop opened with '?' before its condition",
                    example="Correct: ^^^?v=\nIncorrect: ^^^v=",
                    suggestion="Add '?' where the loop body starts, or remove the condition"
                )

            if kind == TapeOpcodeKind.FUNCTION_END:
                raise self._error(
                    token,
                    message="Function end without matching declaration",
                    received="Function end: E",
                    expected="A function opened with 'F' and an identifier digit",
                    example="Correct: F1^E 1\nIncorrect: ^E",
                    suggestion="Add 'F' and a function number before the body, or remove 'E'"
                )

            self._advance()
            expressions.append(self._to_expression(token))

        self._logger.debug("Parsed %d top-level expressions", len(expressions))
        return TapeProgram(tuple(expressions))

    def _advance(self) -> None:
        """Move to the next token."""
        self.pos += 1
        self.current_token = self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _error(self, token: TapeToken, message: str, **kwargs: str) -> TapeParseError:
        """
        Build a parse error located at a token.

        Args:
            token: The offending token
            message: Core error description
            **kwargs: Additional detail fields

        Returns:
            The error, ready to raise
        """
        return TapeParseError(
            message=message,
            line=token.line,
            column=token.column,
            source=self.source,
            show_context=self.show_context,
            **kwargs
        )

    def _parse_function_declaration(self) -> TapeASTFunctionDecl:
        """
        Parse a function declaration: 'F', an identifier digit, a body and 'E'.

        Returns:
            The function declaration node
        """
        declare_token = self.current_token
        assert declare_token is not None, "Current token must not be None here"
        self._advance()

        id_token = self.current_token
        if id_token is None:
            raise self._error(
                declare_token,
                message="Function declared without identifier",
                received="End of input",
                expected="A digit 1-9 naming the function",
                example="Correct: F1^E\nIncorrect: F",
                suggestion="Follow 'F' with the function number"
            )

        function_id = id_token.opcode.function_id
        if id_token.opcode.kind != TapeOpcodeKind.FUNCTION_CALL or function_id is None:
            raise self._error(
                id_token,
                message="Function declared without a valid identifier",
                received=f"Token: {id_token.opcode.kind.name}",
                expected="A digit 1-9 naming the function",
                example="Correct: F3^E\nIncorrect: F^E",
                suggestion="Put the function number directly after 'F'"
            )

        self._advance()
        body: List[TapeASTNode] = []

        while self.current_token is not None:
            token = self.current_token
            kind = token.opcode.kind

            if kind == TapeOpcodeKind.FUNCTION_DECLARE:
                raise self._error(
                    token,
                    message="Nested function declaration",
                    received="Function declaration inside the body of function "
                             f"{function_id} (line {declare_token.line}, column {declare_token.column})",
                    expected="Function end 'E' before the next declaration",
                    example="Correct: F1^E F2vE\nIncorrect: F1^F2vEE",
                    suggestion="Close the current function with 'E' before declaring another",
                    context="Functions can only be declared at the top level"
                )

            self._advance()

            if kind == TapeOpcodeKind.FUNCTION_END:
                return TapeASTFunctionDecl(
                    function_id,
                    TapeASTBlock(tuple(body), line=declare_token.line, column=declare_token.column),
                    line=declare_token.line,
                    column=declare_token.column
                )

            if kind == TapeOpcodeKind.LOOP or token.opcode.is_loop_condition():
                self._logger.warning(
                    "Loop token %s at line %d, column %d inside function %d is ignored",
                    kind.name, token.line, token.column, function_id
                )

            body.append(self._to_expression(token))

        raise self._error(
            declare_token,
            message="Unterminated function",
            received=f"End of input inside function {function_id}",
            expected="Function end 'E'",
            example="Correct: F1^E\nIncorrect: F1^",
            suggestion="Add 'E' at the end of the function body"
        )

    def _parse_loop(self) -> TapeASTLoop:
        """
        Parse a loop, including any loops nested inside it.

        Returns:
            The outermost loop node
        """
        open_token = self.current_token
        assert open_token is not None, "Current token must not be None here"
        self._open_loop(open_token)
        self._advance()

        while self.current_token is not None:
            token = self.current_token
            self._advance()

            if token.opcode.kind == TapeOpcodeKind.LOOP:
                self._open_loop(token)
                continue

            if not token.opcode.is_loop_condition():
                self.loop_stack[-1].expressions.append(self._to_expression(token))
                continue

            frame = self.loop_stack.pop()
            loop = TapeASTLoop(
                self.CONDITIONS[token.opcode.kind],
                TapeASTBlock(tuple(frame.expressions), line=frame.token.line, column=frame.token.column),
                line=frame.token.line,
                column=frame.token.column
            )

            if not self.loop_stack:
                return loop

            self.loop_stack[-1].expressions.append(loop)

        unclosed = self.loop_stack[-1]
        raise self._error(
            unclosed.token,
            message="Unterminated loop",
            received=f"End of input with {len(self.loop_stack)} unclosed loop(s)",
            expected="A loop condition: '+', '-', '=' or '!'",
            example="Correct: ^^^?v=\nIncorrect: ^^^?v",
            suggestion="Close the loop with the condition that should stop it"
        )

    def _open_loop(self, token: TapeToken) -> None:
        """
        Push a new unclosed loop.

        Raises:
            TapeParseError: If the loop would nest deeper than max_loop_depth
        """
        if len(self.loop_stack) >= self.max_loop_depth:
            raise self._error(
                token,
                message=f"Loops nested too deeply (max depth: {self.max_loop_depth})",
                received=f"Loop at nesting depth {len(self.loop_stack) + 1}",
                expected=f"At most {self.max_loop_depth} loops open at once",
                suggestion="Reduce loop nesting or increase max_loop_depth"
            )

        self.loop_stack.append(LoopStackFrame(token))

    def _to_expression(self, token: TapeToken) -> TapeASTNode:
        """
        Convert a single token into its expression node.

        Structural tokens have no meaning on their own and become no-ops.

        Args:
            token: The token to convert

        Returns:
            The expression node, tagged with the token's position
        """
        line = token.line
        column = token.column

        match token.opcode.kind:
            case TapeOpcodeKind.MOVE_RIGHT:
                return TapeASTMovePointer(1, line=line, column=column)

            case TapeOpcodeKind.MOVE_LEFT:
                return TapeASTMovePointer(-1, line=line, column=column)

            case TapeOpcodeKind.INCREASE:
                return TapeASTIncrementCell(1, line=line, column=column)

            case TapeOpcodeKind.DECREASE:
                return TapeASTIncrementCell(-1, line=line, column=column)

            case TapeOpcodeKind.RESET:
                return TapeASTReset(line=line, column=column)

            case TapeOpcodeKind.WRITE:
                return TapeASTWrite(line=line, column=column)

            case TapeOpcodeKind.READ:
                return TapeASTRead(line=line, column=column)

            case TapeOpcodeKind.RETURN_VALUE:
                return TapeASTFunctionReadResult(line=line, column=column)

            case TapeOpcodeKind.SWAP:
                return TapeASTSwap(line=line, column=column)

            case TapeOpcodeKind.FLUSH:
                return TapeASTFlush(line=line, column=column)

            case TapeOpcodeKind.FIRST_INDEX:
                return TapeASTReturnToStart(line=line, column=column)

            case TapeOpcodeKind.RANDOM:
                return TapeASTRandom(line=line, column=column)

            case TapeOpcodeKind.PRINT_NUMBER:
                return TapeASTPrintNumber(line=line, column=column)

            case TapeOpcodeKind.PRINT_CHAR:
                return TapeASTPrintChar(line=line, column=column)

            case TapeOpcodeKind.PAUSE:
                return TapeASTPause(line=line, column=column)

            case TapeOpcodeKind.NEWLINE:
                return TapeASTNewline(line=line, column=column)

            case TapeOpcodeKind.SLEEP:
                return TapeASTSleep(line=line, column=column)

            case TapeOpcodeKind.RECYCLE:
                return TapeASTRecycle(line=line, column=column)

            case TapeOpcodeKind.FUNCTION_CALL:
                assert token.opcode.function_id is not None, "Function call without identifier"
                return TapeASTFunctionCall(token.opcode.function_id, line=line, column=column)

            case _:
                return TapeASTNop(line=line, column=column)
