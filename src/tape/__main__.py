"""Command-line entry point for the Tape interpreter."""

import argparse
import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys
from typing import List

from tape.tape import Tape
from tape.tape_ast_printer import TapeASTPrinter
from tape.tape_error import TapeParseError, TapeEvalError
from tape.tape_settings import TapeSettings


def setup_logging(level: str, log_file: str | None) -> None:
    """
    Configure logging to stderr, or to a rotating log file.

    Args:
        level: Name of the logging level
        log_file: Path of the log file, or None to log to stderr
    """
    handler: logging.Handler
    if log_file is not None:
        # Keep up to 6 log files, max 1MB each
        handler = RotatingFileHandler(
            log_file,
            maxBytes=1024*1024,
            backupCount=5,
            encoding='utf-8'
        )

    else:
        handler = logging.StreamHandler(sys.stderr)

    logging.basicConfig(
        level=getattr(logging, level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[handler],
        force=True
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog='tape',
        description='Run a Tape program',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run a program
  tape hello.tape

  # Show the parsed program before running it
  tape hello.tape --dump-ast

  # Check a program without running it
  tape hello.tape --parse-only

  # Run from stdin
  echo "^^^," | tape -
"""
    )
    parser.add_argument(
        'source',
        help='Source file (use "-" for stdin)'
    )
    parser.add_argument(
        '--dump-ast',
        action='store_true',
        help='Print the parsed program to stderr before running it'
    )
    parser.add_argument(
        '--parse-only',
        action='store_true',
        help='Parse the program but do not run it'
    )
    parser.add_argument(
        '--settings',
        help='JSON settings file'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='ERROR',
        help='Logging level (default: ERROR)'
    )
    parser.add_argument(
        '--log-file',
        help='Write log messages to this file instead of stderr'
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    """
    Run the Tape interpreter.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Process exit status
    """
    args = create_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    settings = TapeSettings.create_default()
    if args.settings:
        try:
            settings = TapeSettings.load(args.settings)

        except FileNotFoundError:
            print(f"Error: Settings file not found: {args.settings}", file=sys.stderr)
            return 1

        except (json.JSONDecodeError, ValueError) as e:
            print(f"Error: Invalid settings file {args.settings}: {e}", file=sys.stderr)
            return 1

    if args.source == '-':
        source = sys.stdin.read()

    else:
        source_path = Path(args.source)
        if not source_path.is_file():
            print(f"Error: File not found: {args.source}", file=sys.stderr)
            return 1

        source = source_path.read_text(encoding='utf-8')

    tape = Tape(settings)

    try:
        program = tape.parse(source)
        if args.dump_ast:
            print(TapeASTPrinter().format(program), file=sys.stderr)

        if args.parse_only:
            return 0

        result = tape.run_program(program, source)

    except TapeParseError as e:
        print(f"Parse error:\n{e}", file=sys.stderr)
        return 1

    except TapeEvalError as e:
        print(f"\nRuntime error:\n{e}", file=sys.stderr)
        return 1

    for diagnostic in result.diagnostics:
        print(f"Warning: {diagnostic}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
