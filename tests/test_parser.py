"""Test class ExpressionParser."""
import pytest

from expression_compiler.common.errors import ParseError
from expression_compiler.common.parser import ExpressionParser
from expression_compiler.common.tokenizer import Tokenizer


def rpn(text: str) -> list[str]:
    return [str(token) for token in ExpressionParser.to_rpn(Tokenizer.tokenize(text))]


def test_to_rpn_basic():
    """to_rpn converts tokens to correct Reverse Polish Notation."""
    # Numbers in order, operators according to precedence
    assert rpn("3 + 4 * 2") == ["3", "4", "2", "*", "+"]


@pytest.mark.parametrize("expr,expected", [
    ("3 + 4", ["3", "4", "+"]),
    ("10 / 2 - 1", ["10", "2", "/", "1", "-"]),
    ("(2 + 3) * 4", ["2", "3", "+", "4", "*"]),
    ("2 - 3 - 4", ["2", "3", "-", "4", "-"]),
    ("2 ^ 3 ^ 2", ["2", "3", "2", "^", "^"]),
    ("2 * 3 ^ 2", ["2", "3", "2", "^", "*"]),
    ("x * y + z", ["x", "y", "*", "z", "+"]),
])
def test_to_rpn_various(expr, expected):
    """to_rpn honours precedence, associativity and brackets."""
    assert rpn(expr) == expected


@pytest.mark.parametrize("expr,expected", [
    ("max(1, 2)", ["1", "2", "max"]),
    ("max(1, 2 ^ 3)", ["1", "2", "3", "^", "max"]),
    ("sub(10, 3) * 2", ["10", "3", "sub", "2", "*"]),
    ("pi()", ["pi"]),
    ("max(min(1, 2), 3)", ["1", "2", "min", "3", "max"]),
    ("sqrt(x + 1) + 2", ["x", "1", "+", "sqrt", "2", "+"]),
])
def test_to_rpn_function_calls(expr, expected):
    """A function is emitted right after the bracket closing its arguments."""
    assert rpn(expr) == expected


def test_to_rpn_empty():
    """No tokens compile to an empty sequence."""
    assert ExpressionParser.to_rpn([]) == ()


@pytest.mark.parametrize("expr", [
    "(2 + 3",
    "2 + 3)",
    ")",
    "((1)",
    "max(1, 2",
])
def test_bracket_mismatch(expr):
    """Unbalanced brackets raise ParseError."""
    with pytest.raises(ParseError, match="bracket mismatch"):
        rpn(expr)


@pytest.mark.parametrize("expr", [
    "1, 2",
    "max 1, 2",
])
def test_comma_outside_brackets(expr):
    """An argument separator without an open bracket raises ParseError."""
    with pytest.raises(ParseError, match="malformed function call"):
        rpn(expr)
