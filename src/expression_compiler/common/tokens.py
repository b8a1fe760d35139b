"""Token model shared by the tokenizer, the parser and the evaluator."""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TokenKind(str, Enum):
    """Lexical class of a token."""

    OPEN = "open"
    CLOSE = "close"
    POWER = "power"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    ADD = "add"
    SUBTRACT = "subtract"
    COMMA = "comma"
    NUMBER = "number"
    IDENTIFIER = "identifier"
    FUNCTION = "function"


class Associativity(str, Enum):
    """Grouping of repeated operators of equal precedence."""

    LEFT = "left"
    RIGHT = "right"


# Precedence ranks; functions rank above every operator
ADDITIVE_PRECEDENCE: int = 1
MULTIPLICATIVE_PRECEDENCE: int = 2
POWER_PRECEDENCE: int = 3
FUNCTION_PRECEDENCE: int = 4

# Operator kinds mapped to (symbol, precedence, associativity)
OPERATORS: dict[TokenKind, tuple[str, int, Associativity]] = {
    TokenKind.POWER: ("^", POWER_PRECEDENCE, Associativity.RIGHT),
    TokenKind.MULTIPLY: ("*", MULTIPLICATIVE_PRECEDENCE, Associativity.LEFT),
    TokenKind.DIVIDE: ("/", MULTIPLICATIVE_PRECEDENCE, Associativity.LEFT),
    TokenKind.ADD: ("+", ADDITIVE_PRECEDENCE, Associativity.LEFT),
    TokenKind.SUBTRACT: ("-", ADDITIVE_PRECEDENCE, Associativity.LEFT),
}


class Token(BaseModel):
    """A classified lexical unit of an arithmetic expression."""

    # Tokens are shared between compiled sequences, never mutated
    model_config = ConfigDict(frozen=True)

    kind: TokenKind = Field(..., description="Lexical class of the token")
    text: str = Field(..., description="Source substring; lookup key for variables and functions")
    value: float = Field(default=0.0, description="Literal value, meaningful for numbers only")
    is_operator: bool = Field(default=False, description="True for the five binary arithmetic operators")
    associativity: Associativity = Field(default=Associativity.LEFT, description="Operator associativity")
    precedence: int = Field(default=0, ge=0, description="Precedence rank of operators and functions")

    def __str__(self) -> str:
        return self.text

    @classmethod
    def operator(cls, kind: TokenKind) -> "Token":
        """
        Build the token of a binary arithmetic operator.

        :param TokenKind kind: One of the operator kinds

        :return: Operator token with its precedence and associativity set
        :rtype: Token
        """
        symbol, precedence, associativity = OPERATORS[kind]
        return cls(kind=kind, text=symbol, is_operator=True, precedence=precedence, associativity=associativity)

    @classmethod
    def number(cls, text: str, value: float) -> "Token":
        """Build a numeric literal token."""
        return cls(kind=TokenKind.NUMBER, text=text, value=value)

    @classmethod
    def identifier(cls, name: str) -> "Token":
        """Build a single-character variable token."""
        return cls(kind=TokenKind.IDENTIFIER, text=name)

    @classmethod
    def function(cls, name: str) -> "Token":
        """Build a function-call token, resolved by name at evaluation time."""
        return cls(kind=TokenKind.FUNCTION, text=name, precedence=FUNCTION_PRECEDENCE)

    @property
    def is_paren(self) -> bool:
        return self.kind in (TokenKind.OPEN, TokenKind.CLOSE)

    @property
    def ends_operand(self) -> bool:
        """True when the token closes a value, so a following minus must be binary."""
        return self.kind in (TokenKind.NUMBER, TokenKind.IDENTIFIER, TokenKind.CLOSE)


OPEN_PAREN: Token = Token(kind=TokenKind.OPEN, text="(")
CLOSE_PAREN: Token = Token(kind=TokenKind.CLOSE, text=")")
COMMA: Token = Token(kind=TokenKind.COMMA, text=",")
