"""Tree-walking evaluator for Tape programs."""

from dataclasses import dataclass, field
import logging
from typing import List

from tape.tape_ast import (
    TapeASTNode, TapeASTMovePointer, TapeASTIncrementCell, TapeASTReset, TapeASTWrite, TapeASTRead,
    TapeASTFunctionReadResult, TapeASTSwap, TapeASTFlush, TapeASTReturnToStart, TapeASTRandom,
    TapeASTPrintNumber, TapeASTPrintChar, TapeASTPause, TapeASTNewline, TapeASTSleep, TapeASTRecycle,
    TapeASTNop, TapeASTFunctionCall, TapeASTBlock, TapeASTLoop, TapeASTFunctionDecl, TapeProgram
)
from tape.tape_context import TapeContext
from tape.tape_diagnostic import TapeDiagnostic
from tape.tape_error import TapeEvalError
from tape.tape_frame import TapeFrame
from tape.tape_host import TapeHost


@dataclass
class TapeRunResult:
    """Outcome of a completed run."""
    context: TapeContext
    diagnostics: List[TapeDiagnostic] = field(default_factory=list)

    @property
    def root_frame(self) -> TapeFrame:
        """The main program's frame as it was when the run finished."""
        return self.context.frames[0]


class TapeEvaluator:
    """
    Evaluates Tape programs against a fresh context per run.

    All side effects go through the host.  Fatal faults raise TapeEvalError
    located at the node being evaluated; soft faults are recorded as
    diagnostics and execution continues.
    """

    RANDOM_UPPER_BOUND = 100

    def __init__(
        self,
        host: TapeHost,
        max_call_depth: int = 200,
        max_loop_depth: int = 64,
        sleep_unit_ms: int = 100,
        show_error_context: bool = True
    ) -> None:
        """
        Initialize evaluator.

        Args:
            host: Host providing output, input, randomness and delays
            max_call_depth: Maximum nesting of function calls
            max_loop_depth: Maximum nesting of loops
            sleep_unit_ms: Milliseconds of delay per unit of cell value for sleep
            show_error_context: Whether errors include a source excerpt
        """
        self.host = host
        self.max_call_depth = max_call_depth
        self.max_loop_depth = max_loop_depth
        self.sleep_unit_ms = sleep_unit_ms
        self.show_error_context = show_error_context
        self.current_source = ""
        self._logger = logging.getLogger("TapeEvaluator")

    def set_source_context(self, source: str) -> None:
        """Set the program source used for error context."""
        self.current_source = source

    def run(self, program: TapeProgram) -> TapeRunResult:
        """
        Run a program from a fresh context.

        Args:
            program: The parsed program

        Returns:
            The final context and any soft-fault diagnostics

        Raises:
            TapeEvalError: If a fatal runtime fault occurs
        """
        context = TapeContext(self.max_call_depth)
        self._logger.debug("Running program with %d top-level expressions", len(program.expressions))

        try:
            for expr in program.expressions:
                self.evaluate(expr, context)

        except RecursionError as e:
            # Only reachable when the depth limits are raised past what the Python stack holds
            raise TapeEvalError(
                message="Program nested too deeply to evaluate",
                received=f"Call depth {context.call_depth}",
                suggestion="Lower max_call_depth or max_loop_depth"
            ) from e

        self._logger.debug("Run finished with %d diagnostics", len(context.diagnostics))
        return TapeRunResult(context, list(context.diagnostics))

    def evaluate(self, expr: TapeASTNode, context: TapeContext) -> None:
        """
        Evaluate a single expression.

        Args:
            expr: Expression to evaluate
            context: Runtime context

        Raises:
            TapeEvalError: If a fatal runtime fault occurs
        """
        match expr:
            case TapeASTBlock():
                self._evaluate_block(expr, context)

            case TapeASTLoop():
                self._evaluate_loop(expr, context)

            case TapeASTFunctionDecl():
                self._evaluate_function_decl(expr, context)

            case TapeASTFunctionCall():
                self._evaluate_function_call(expr, context)

            case _:
                try:
                    self._evaluate_primitive(expr, context.current_frame)

                except TapeEvalError as e:
                    if e.line is not None:
                        raise

                    raise self._locate(e, expr) from e

    def _evaluate_block(self, block: TapeASTBlock, context: TapeContext) -> None:
        """Evaluate every expression of a block in order."""
        for expr in block.expressions:
            self.evaluate(expr, context)

    def _evaluate_loop(self, expr: TapeASTLoop, context: TapeContext) -> None:
        """
        Repeat a loop body until its exit condition holds for the current cell.

        Raises:
            TapeEvalError: If loops are nested deeper than max_loop_depth
        """
        if context.loop_depth >= self.max_loop_depth:
            raise self._locate(
                TapeEvalError(
                    message=f"Loops nested too deeply (max depth: {self.max_loop_depth})",
                    received=f"Loop at nesting depth {context.loop_depth + 1}",
                    suggestion="Reduce loop nesting or increase max_loop_depth"
                ),
                expr
            )

        context.loop_depth += 1
        try:
            while not expr.condition.is_met(context.current_frame.current_cell):
                self._evaluate_block(expr.body, context)

        finally:
            context.loop_depth -= 1

    def _evaluate_function_decl(self, expr: TapeASTFunctionDecl, context: TapeContext) -> None:
        """Register a function, keeping any earlier registration of the same id."""
        if context.register_function(expr.function_id, expr.body):
            self._logger.debug("Registered function %d", expr.function_id)
            return

        diagnostic = context.report(
            f"Function {expr.function_id} is already declared; keeping the first declaration",
            expr.line,
            expr.column
        )
        self._logger.warning("%s", diagnostic)

    def _evaluate_function_call(self, expr: TapeASTFunctionCall, context: TapeContext) -> None:
        """
        Call a function in a new frame.

        The frame is pushed and popped even when the function is not declared,
        so the caller's return register is always updated.
        """
        try:
            context.push_frame()

        except TapeEvalError as e:
            raise self._locate(e, expr) from e

        body = context.lookup_function(expr.function_id)
        if body is None:
            diagnostic = context.report(
                f"Function {expr.function_id} is not declared",
                expr.line,
                expr.column
            )
            self._logger.warning("%s", diagnostic)

        else:
            self._evaluate_block(body, context)

        context.pop_frame()

    def _evaluate_primitive(self, expr: TapeASTNode, frame: TapeFrame) -> None:
        """
        Evaluate a primitive expression against the current frame.

        Args:
            expr: Primitive expression
            frame: The current frame

        Raises:
            TapeEvalError: If the operation is invalid for the frame's state
        """
        match expr:
            case TapeASTMovePointer(delta=delta):
                frame.move_pointer(delta)

            case TapeASTIncrementCell(delta=delta):
                frame.increment_cell(delta)

            case TapeASTReset():
                frame.current_cell = 0

            case TapeASTWrite():
                frame.memory = frame.current_cell

            case TapeASTRead():
                frame.current_cell = frame.memory

            case TapeASTFunctionReadResult():
                frame.current_cell = frame.return_register

            case TapeASTSwap():
                frame.swap()

            case TapeASTFlush():
                frame.flush()

            case TapeASTReturnToStart():
                frame.return_to_start()

            case TapeASTRandom():
                frame.current_cell = self.host.random_below(self.RANDOM_UPPER_BOUND)

            case TapeASTPrintNumber():
                self.host.write(str(frame.current_cell))

            case TapeASTPrintChar():
                self.host.write(self._to_character(frame.current_cell))

            case TapeASTNewline():
                self.host.write("\n")

            case TapeASTSleep():
                self._sleep(frame.current_cell)

            case TapeASTPause():
                self.host.read_line()

            case TapeASTRecycle() | TapeASTNop():
                pass

            case _:
                raise TypeError(f"Unknown expression type: {type(expr).__name__}")

    def _to_character(self, value: int) -> str:
        """
        Convert a cell value to a character.

        Raises:
            TapeEvalError: If the value is not a Unicode scalar value
        """
        if value < 0 or value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
            raise TapeEvalError(
                message=f"Cannot print character for cell value {value}",
                received=f"Cell value: {value}",
                expected="A Unicode code point from 0 to 1114111, excluding surrogates (55296-57343)",
                suggestion="Use ',' to print the value as a number"
            )

        return chr(value)

    def _sleep(self, value: int) -> None:
        """
        Delay for `value` sleep units.

        Raises:
            TapeEvalError: If the value is negative
        """
        if value < 0:
            raise TapeEvalError(
                message=f"Cannot sleep for a negative duration ({value})",
                received=f"Cell value: {value}",
                expected="A cell value of 0 or greater",
                suggestion="Reset or increment the cell before sleeping"
            )

        self.host.delay(value * self.sleep_unit_ms / 1000)

    def _locate(self, error: TapeEvalError, expr: TapeASTNode) -> TapeEvalError:
        """
        Copy an error, attaching the location of the expression that caused it.

        Args:
            error: Error raised without location information
            expr: Expression being evaluated

        Returns:
            A located copy of the error
        """
        return TapeEvalError(
            message=error.message,
            context=error.context,
            expected=error.expected,
            received=error.received,
            suggestion=error.suggestion,
            example=error.example,
            line=expr.line,
            column=expr.column,
            source=self.current_source,
            show_context=self.show_error_context
        )
