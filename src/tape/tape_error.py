"""Exception classes for the Tape language with detailed source context."""


class TapeError(Exception):
    """Base exception for Tape errors with detailed context information."""

    def __init__(
        self,
        message: str,
        context: str | None = None,
        expected: str | None = None,
        received: str | None = None,
        suggestion: str | None = None,
        example: str | None = None,
        line: int | None = None,
        column: int | None = None,
        source: str | None = None,
        show_context: bool = True
    ):
        """
        Initialize detailed error.

        Args:
            message: Core error description
            context: Additional context information
            expected: What was expected
            received: What was actually received
            suggestion: Suggestion for fixing the error
            example: Example of correct usage
            line: Line number (1-indexed)
            column: Column number (1-indexed)
            source: Source code for context display
            show_context: Whether to show source code context
        """
        self.message = message
        self.context = context
        self.expected = expected
        self.received = received
        self.suggestion = suggestion
        self.example = example
        self.line = line
        self.column = column
        self.source = source
        self.show_context = show_context

        super().__init__(self._format_detailed_message())

    def _get_context_lines(
        self,
        source: str,
        line_num: int,
        before: int = 2,
        after: int = 2
    ) -> list[tuple[int, str]]:
        """
        Get lines of context around a specific line.

        Args:
            source: The source code string
            line_num: Line number (1-indexed)
            before: Number of lines before to include
            after: Number of lines after to include

        Returns:
            List of (line_number, line_content) tuples
        """
        lines = source.split('\n')
        total_lines = len(lines)

        start_line = max(1, line_num - before)
        end_line = min(total_lines, line_num + after)

        return [(i, lines[i - 1]) for i in range(start_line, end_line + 1)]

    def _format_context_with_marker(
        self,
        source: str,
        line_num: int,
        column: int,
        before: int = 2,
        after: int = 2,
        marker: str = "^"
    ) -> str:
        """
        Format source context with a marker pointing to the error location.

        Args:
            source: The source code string
            line_num: Line number (1-indexed)
            column: Column number (1-indexed)
            before: Number of lines before to include
            after: Number of lines after to include
            marker: Character to use for marking the position

        Returns:
            Formatted string with context and marker
        """
        context_lines = self._get_context_lines(source, line_num, before, after)
        if not context_lines:
            return "(no context available)"

        max_line_num = max(ln for ln, _ in context_lines)
        line_num_width = len(str(max_line_num))

        result_lines = []
        for ln, content in context_lines:
            indicator = "→" if ln == line_num else " "
            result_lines.append(f"  {indicator} {ln:>{line_num_width}}: {content}")

            if ln == line_num:
                # "  " + indicator + " " + line number + ": " precedes column 1
                padding = 2 + 1 + 1 + line_num_width + 2 + (column - 1)
                result_lines.append(" " * padding + marker)

        return "\n".join(result_lines)

    def _format_detailed_message(self) -> str:
        """Format the error message with all available details."""
        parts = [f"Error: {self.message}"]

        if self.line is not None and self.column is not None:
            parts.append(f"Location: Line {self.line}, Column {self.column}")

            if self.show_context and self.source:
                context_str = self._format_context_with_marker(
                    self.source, self.line, self.column, before=2, after=1
                )
                parts.append(f"\nSource Context:\n{context_str}")

        if self.received:
            parts.append(f"Received: {self.received}")

        if self.expected:
            parts.append(f"Expected: {self.expected}")

        if self.context:
            parts.append(f"Context: {self.context}")

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        if self.example:
            parts.append(f"Example: {self.example}")

        return "\n".join(parts)


class TapeParseError(TapeError):
    """Structural parsing errors with detailed context."""


class TapeEvalError(TapeError):
    """Fatal evaluation errors with detailed context."""
