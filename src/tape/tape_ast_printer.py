"""Formats Tape ASTs as indented text for debugging."""

from typing import List

from tape.tape_ast import TapeASTNode, TapeASTBlock, TapeASTLoop, TapeASTFunctionDecl, TapeProgram


class TapeASTPrinter:
    """Renders a program one node per line, indenting nested blocks."""

    def __init__(self, indent: str = "  ") -> None:
        """
        Initialize the AST printer.

        Args:
            indent: Text used for each level of indentation
        """
        self.indent = indent

    def format(self, program: TapeProgram) -> str:
        """
        Format a whole program.

        Args:
            program: The program to format

        Returns:
            The formatted tree, without a trailing newline
        """
        lines: List[str] = [f"Program ({len(program.expressions)} expressions)"]
        for expr in program.expressions:
            self._format_node(expr, 1, lines)

        return "\n".join(lines)

    def _format_node(self, node: TapeASTNode, level: int, lines: List[str]) -> None:
        location = ""
        if node.line is not None and node.column is not None:
            location = f" (line {node.line}, column {node.column})"

        lines.append(f"{self.indent * level}{node.describe()}{location}")

        match node:
            case TapeASTBlock(expressions=expressions):
                for child in expressions:
                    self._format_node(child, level + 1, lines)

            case TapeASTLoop(body=body) | TapeASTFunctionDecl(body=body):
                for child in body.expressions:
                    self._format_node(child, level + 1, lines)
