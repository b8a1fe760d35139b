"""Split arithmetic expression text into classified tokens."""
import re
import string
from typing import List, Optional

from expression_compiler.common.errors import LexError
from expression_compiler.common.tokens import CLOSE_PAREN, COMMA, OPEN_PAREN, Token, TokenKind


# Single characters mapped directly to a token
FIXED_TOKENS: dict[str, Token] = {
    "(": OPEN_PAREN,
    ")": CLOSE_PAREN,
    ",": COMMA,
    "^": Token.operator(TokenKind.POWER),
    "*": Token.operator(TokenKind.MULTIPLY),
    "/": Token.operator(TokenKind.DIVIDE),
    "+": Token.operator(TokenKind.ADD),
}

SUBTRACT: Token = Token.operator(TokenKind.SUBTRACT)

# ASCII only: other Unicode digits and letters are unrecognized characters
DIGITS: frozenset[str] = frozenset(string.digits)
LETTERS: frozenset[str] = frozenset(string.ascii_letters)

# Longest prefix of a literal buffer that reads as a float
_FLOAT_PREFIX = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


class Tokenizer:
    """
    Single-pass scanner with one character of lookahead.

    Scanning rules:
        - ``( ) , ^ * / +`` produce fixed tokens
        - ``-`` right after a number, variable or closing bracket is subtraction;
          elsewhere it starts a numeric literal when followed by a digit, ``.`` or ``-``,
          and is subtraction otherwise
        - a run of two or more ASCII letters is a function call, a lone letter is a variable
        - whitespace is skipped

    Examples:
        - ``2-3`` gives ``2``, ``-``, ``3``
        - ``2*-3`` gives ``2``, ``*``, ``-3``
    """

    @staticmethod
    def lenient_float(buffer: str) -> float:
        """
        Convert a literal buffer to a float the way C ``atof`` does.

        The longest valid prefix is converted, anything after it is ignored,
        and a buffer without a valid prefix yields 0.0.

        :param str buffer: Characters of a numeric literal

        :return: Parsed value
        :rtype: float
        """
        match = _FLOAT_PREFIX.match(buffer)
        if match is None:
            return 0.0
        return float(match.group())

    @staticmethod
    def _scan_number(text: str, start: int) -> int:
        """
        Find the end of the numeric literal starting at ``start``.

        Minus signs are only consumed before the first digit or decimal point.

        :param str text: Source expression
        :param int start: Index of the first character of the literal

        :return: Index one past the last character of the literal
        :rtype: int
        """
        end = start
        seen_body = False
        while end < len(text):
            c = text[end]
            if c in DIGITS or c == ".":
                seen_body = True
            elif c != "-" or seen_body:
                break
            end += 1
        return end

    @staticmethod
    def _starts_number(text: str, i: int, previous: Optional[Token]) -> bool:
        """Decide whether the character at ``i`` opens a numeric literal."""
        c = text[i]
        if c in DIGITS or c == ".":
            return True
        if c != "-" or (previous is not None and previous.ends_operand):
            return False
        lookahead = text[i + 1] if i + 1 < len(text) else ""
        return lookahead in DIGITS or lookahead in (".", "-")

    @staticmethod
    def tokenize(text: str) -> List[Token]:
        """
        Split an arithmetic expression into tokens.

        :param str text: Arithmetic expression as a string

        :return: List of tokens in source order
        :rtype: List[Token]
        :raises LexError: If a character cannot be classified
        """
        tokens: List[Token] = []
        i = 0
        while i < len(text):
            c = text[i]
            previous = tokens[-1] if tokens else None

            if c in FIXED_TOKENS:
                tokens.append(FIXED_TOKENS[c])
                i += 1
            elif Tokenizer._starts_number(text, i, previous):
                end = Tokenizer._scan_number(text, i)
                buffer = text[i:end]
                tokens.append(Token.number(buffer, Tokenizer.lenient_float(buffer)))
                i = end
            elif c == "-":
                tokens.append(SUBTRACT)
                i += 1
            elif c.isspace():
                i += 1
            elif c in LETTERS:
                end = i + 1
                while end < len(text) and text[end] in LETTERS:
                    end += 1
                name = text[i:end]
                # Only multi-letter names can be functions
                tokens.append(Token.function(name) if len(name) > 1 else Token.identifier(name))
                i = end
            else:
                raise LexError("unrecognized token", character=c, position=i)

        return tokens
