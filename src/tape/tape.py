"""Main Tape interpreter class."""

from typing import List

from tape.tape_ast import TapeProgram
from tape.tape_ast_printer import TapeASTPrinter
from tape.tape_evaluator import TapeEvaluator, TapeRunResult
from tape.tape_host import TapeConsoleHost, TapeHost
from tape.tape_lexer import TapeLexer
from tape.tape_parser import TapeParser
from tape.tape_settings import TapeSettings
from tape.tape_token import TapeToken


class Tape:
    """
    Tape interpreter: lexes, parses and runs Tape programs.

    Every run starts from a fresh tape; nothing carries over between runs
    except the host.
    """

    def __init__(self, settings: TapeSettings | None = None, host: TapeHost | None = None):
        """
        Initialize the interpreter.

        Args:
            settings: Interpreter settings (defaults used if not given)
            host: Host for program side effects (console if not given)
        """
        self.settings = settings if settings is not None else TapeSettings.create_default()
        self.host = host if host is not None else TapeConsoleHost()

    def lex(self, source: str) -> List[TapeToken]:
        """Lex source text into tokens."""
        return TapeLexer().lex(source)

    def parse(self, source: str) -> TapeProgram:
        """
        Parse source text into a program.

        Args:
            source: Tape source text

        Returns:
            The parsed program

        Raises:
            TapeParseError: If the source is structurally invalid
        """
        tokens = self.lex(source)
        parser = TapeParser(
            tokens,
            source,
            show_context=self.settings.show_error_context,
            max_loop_depth=self.settings.max_loop_depth
        )
        return parser.parse()

    def run(self, source: str) -> TapeRunResult:
        """
        Parse and run source text.

        Args:
            source: Tape source text

        Returns:
            The final context and any soft-fault diagnostics

        Raises:
            TapeParseError: If the source is structurally invalid
            TapeEvalError: If a fatal runtime fault occurs
        """
        program = self.parse(source)
        return self.run_program(program, source)

    def run_program(self, program: TapeProgram, source: str = "") -> TapeRunResult:
        """
        Run an already parsed program.

        Args:
            program: The program to run
            source: Original source text, used for error context

        Returns:
            The final context and any soft-fault diagnostics

        Raises:
            TapeEvalError: If a fatal runtime fault occurs
        """
        evaluator = TapeEvaluator(
            self.host,
            max_call_depth=self.settings.max_call_depth,
            max_loop_depth=self.settings.max_loop_depth,
            sleep_unit_ms=self.settings.sleep_unit_ms,
            show_error_context=self.settings.show_error_context
        )
        evaluator.set_source_context(source)
        return evaluator.run(program)

    def format_ast(self, source: str) -> str:
        """Parse source text and return its AST dump."""
        return TapeASTPrinter().format(self.parse(source))
