"""Error kinds raised while compiling or running an expression."""
from typing import Optional


class ExpressionError(ValueError):
    """Base class for every rejection of an expression text or evaluation attempt."""


class LexError(ExpressionError):
    """
    Raised by the tokenizer on a character it cannot classify.

    :param str message: Human readable description
    :param str character: Offending character, if known
    :param int position: Zero-based index of the character in the source text
    """

    def __init__(self, message: str, character: Optional[str] = None, position: Optional[int] = None):
        if character is not None and position is not None:
            message = f"{message}: {character!r} at position {position}"
        super().__init__(message)
        self.character = character
        self.position = position


class ParseError(ExpressionError):
    """Raised by the parser on bracket mismatch or malformed function-call syntax."""


class EvalError(ExpressionError):
    """Raised by the evaluator on unknown functions or an inconsistent value stack."""
