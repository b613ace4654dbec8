"""Tape language package: a tape-based esoteric language interpreter."""

# Main API
from tape.tape import Tape
from tape.tape_settings import TapeSettings

# Exceptions and diagnostics
from tape.tape_error import TapeError, TapeParseError, TapeEvalError
from tape.tape_diagnostic import TapeDiagnostic

# AST types
from tape.tape_ast import (
    TapeASTNode, TapeASTMovePointer, TapeASTIncrementCell, TapeASTReset, TapeASTWrite, TapeASTRead,
    TapeASTFunctionReadResult, TapeASTSwap, TapeASTFlush, TapeASTReturnToStart, TapeASTRandom,
    TapeASTPrintNumber, TapeASTPrintChar, TapeASTPause, TapeASTNewline, TapeASTSleep, TapeASTRecycle,
    TapeASTNop, TapeASTFunctionCall, TapeASTBlock, TapeASTLoop, TapeASTFunctionDecl, TapeLoopCondition,
    TapeProgram
)

# Lower-level components (for advanced usage)
from tape.tape_token import TapeOpcode, TapeOpcodeKind, TapeToken
from tape.tape_lexer import TapeLexer
from tape.tape_parser import TapeParser
from tape.tape_frame import TapeFrame
from tape.tape_context import TapeContext
from tape.tape_evaluator import TapeEvaluator, TapeRunResult
from tape.tape_ast_printer import TapeASTPrinter

# Hosts
from tape.tape_host import TapeHost, TapeConsoleHost, TapeBufferingHost

__all__ = [
    # Main API
    "Tape", "TapeSettings",

    # Exceptions and diagnostics
    "TapeError", "TapeParseError", "TapeEvalError", "TapeDiagnostic",

    # AST node types
    "TapeASTNode", "TapeASTMovePointer", "TapeASTIncrementCell", "TapeASTReset", "TapeASTWrite",
    "TapeASTRead", "TapeASTFunctionReadResult", "TapeASTSwap", "TapeASTFlush", "TapeASTReturnToStart",
    "TapeASTRandom", "TapeASTPrintNumber", "TapeASTPrintChar", "TapeASTPause", "TapeASTNewline",
    "TapeASTSleep", "TapeASTRecycle", "TapeASTNop", "TapeASTFunctionCall", "TapeASTBlock", "TapeASTLoop",
    "TapeASTFunctionDecl", "TapeLoopCondition", "TapeProgram",

    # Lower-level components
    "TapeOpcode", "TapeOpcodeKind", "TapeToken", "TapeLexer", "TapeParser", "TapeFrame", "TapeContext",
    "TapeEvaluator", "TapeRunResult", "TapeASTPrinter",

    # Hosts
    "TapeHost", "TapeConsoleHost", "TapeBufferingHost",
]
