"""Lexer for Tape programs."""

import logging
from typing import Dict, List

from tape.tape_token import TapeOpcode, TapeOpcodeKind, TapeToken


class TapeLexer:
    """
    Lexes Tape source text into position-tagged opcode tokens.

    Every opcode has one canonical character.  Some opcodes also accept a
    lowercase keyword spelling; both spellings produce identical opcodes.
    Lexing never fails: characters that are not opcodes are skipped.
    """

    CHARACTERS: Dict[str, TapeOpcode] = {
        '>': TapeOpcode(TapeOpcodeKind.MOVE_RIGHT),
        '<': TapeOpcode(TapeOpcodeKind.MOVE_LEFT),
        '^': TapeOpcode(TapeOpcodeKind.INCREASE),
        'v': TapeOpcode(TapeOpcodeKind.DECREASE),
        '0': TapeOpcode(TapeOpcodeKind.RESET),
        'W': TapeOpcode(TapeOpcodeKind.WRITE),
        'R': TapeOpcode(TapeOpcodeKind.READ),
        '@': TapeOpcode(TapeOpcodeKind.RETURN_VALUE),
        'S': TapeOpcode(TapeOpcodeKind.SWAP),
        'L': TapeOpcode(TapeOpcodeKind.FLUSH),
        '$': TapeOpcode(TapeOpcodeKind.FIRST_INDEX),
        '%': TapeOpcode(TapeOpcodeKind.RANDOM),
        ',': TapeOpcode(TapeOpcodeKind.PRINT_NUMBER),
        '.': TapeOpcode(TapeOpcodeKind.PRINT_CHAR),
        'P': TapeOpcode(TapeOpcodeKind.PAUSE),
        'N': TapeOpcode(TapeOpcodeKind.NEWLINE),
        'Z': TapeOpcode(TapeOpcodeKind.SLEEP),
        'C': TapeOpcode(TapeOpcodeKind.RECYCLE),
        '/': TapeOpcode(TapeOpcodeKind.COMMENT),
        '?': TapeOpcode(TapeOpcodeKind.LOOP),
        '+': TapeOpcode(TapeOpcodeKind.POSITIVE),
        '-': TapeOpcode(TapeOpcodeKind.NEGATIVE),
        '=': TapeOpcode(TapeOpcodeKind.EQUALS),
        '!': TapeOpcode(TapeOpcodeKind.NOT_EQUALS),
        'F': TapeOpcode(TapeOpcodeKind.FUNCTION_DECLARE),
        'E': TapeOpcode(TapeOpcodeKind.FUNCTION_END),
        **{str(n): TapeOpcode(TapeOpcodeKind.FUNCTION_CALL, n) for n in range(1, 10)},
    }

    KEYWORDS: Dict[str, TapeOpcode] = {
        'swap': TapeOpcode(TapeOpcodeKind.SWAP),
        'flush': TapeOpcode(TapeOpcodeKind.FLUSH),
        'nprint': TapeOpcode(TapeOpcodeKind.PRINT_NUMBER),
        'cprint': TapeOpcode(TapeOpcodeKind.PRINT_CHAR),
        'pause': TapeOpcode(TapeOpcodeKind.PAUSE),
        'sleep': TapeOpcode(TapeOpcodeKind.SLEEP),
        'clear': TapeOpcode(TapeOpcodeKind.RECYCLE),
        'loop': TapeOpcode(TapeOpcodeKind.LOOP),
        'fn': TapeOpcode(TapeOpcodeKind.FUNCTION_DECLARE),
    }

    def __init__(self) -> None:
        """Initialize the lexer."""
        self._logger = logging.getLogger("TapeLexer")

    def lex(self, source: str) -> List[TapeToken]:
        """
        Lex Tape source text.

        Args:
            source: The full source text

        Returns:
            List of tokens in source order
        """
        tokens: List[TapeToken] = []
        i = 0
        line = 1  # Current line number (1-indexed)
        column = 1  # Current column number (1-indexed)
        in_comment = False

        while i < len(source):
            next_char = source[i]

            # Comments never continue past the end of a line
            if next_char == '\n':
                line += 1
                column = 1
                in_comment = False
                i += 1
                continue

            # Keyword spellings are whole runs of lowercase letters
            if 'a' <= next_char <= 'z':
                end = i
                while end < len(source) and 'a' <= source[end] <= 'z':
                    end += 1

                word = source[i:end]
                keyword_opcode = self.KEYWORDS.get(word)
                if keyword_opcode is not None:
                    if not in_comment:
                        tokens.append(TapeToken(line, column, keyword_opcode))

                    column += len(word)
                    i = end
                    continue

                # Not a keyword, so only single-character opcodes count
                for offset, char in enumerate(word):
                    char_opcode = self.CHARACTERS.get(char)
                    if char_opcode is not None and not in_comment:
                        tokens.append(TapeToken(line, column + offset, char_opcode))

                column += len(word)
                i = end
                continue

            opcode = self.CHARACTERS.get(next_char)
            if opcode is not None:
                if opcode.kind == TapeOpcodeKind.COMMENT:
                    in_comment = not in_comment

                elif not in_comment:
                    tokens.append(TapeToken(line, column, opcode))

            column += 1
            i += 1

        self._logger.debug("Lexed %d tokens from %d lines", len(tokens), line)
        return tokens
