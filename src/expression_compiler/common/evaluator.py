"""Stack machine running postfix token sequences."""
import math
import operator
from typing import Callable, Dict, List, MutableMapping, Sequence

from expression_compiler.common.errors import EvalError
from expression_compiler.common.functions import FunctionDefinition
from expression_compiler.common.tokens import Token, TokenKind


def _is_odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and int(x) % 2 == 1


def ieee_div(a: float, b: float) -> float:
    """Divide with floating-point semantics: ``x/0`` gives a signed infinity, ``0/0`` gives nan."""
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def ieee_pow(a: float, b: float) -> float:
    """
    Raise ``a`` to ``b`` like C ``pow``.

    Out-of-domain results are returned as nan or infinity instead of raised.

    :param float a: Base
    :param float b: Exponent

    :return: ``a`` raised to ``b``
    :rtype: float
    """
    try:
        return math.pow(a, b)
    except OverflowError:
        return -math.inf if a < 0 and _is_odd_integer(b) else math.inf
    except ValueError:
        if a == 0:
            # Zero to a negative power
            return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
        # Negative base to a non-integer power
        return math.nan


# Mapping of operator kinds to their binary function
BINARY_OPERATIONS: Dict[TokenKind, Callable[[float, float], float]] = {
    TokenKind.POWER: ieee_pow,
    TokenKind.MULTIPLY: operator.mul,
    TokenKind.DIVIDE: ieee_div,
    TokenKind.ADD: operator.add,
    TokenKind.SUBTRACT: operator.sub,
}


class PostfixEvaluator:
    """
    Evaluate compiled postfix sequences with a value stack.

    Each run reads the variable store and the function registry as they are at call time,
    so the same compiled sequence can be evaluated any number of times.
    """

    @staticmethod
    def _call_function(token: Token, stack: List[float], functions: Dict[str, FunctionDefinition]) -> float:
        """
        Pop the arguments of a function call and invoke the registered callable.

        The most recently pushed value becomes the last argument.

        :param Token token: Function-call token
        :param List[float] stack: Value stack, modified in place
        :param dict functions: Function registry

        :return: Result of the call
        :rtype: float
        :raises EvalError: If the function is unknown or the stack holds too few values
        """
        definition = functions.get(token.text)
        if definition is None:
            raise EvalError(f"unknown function: {token.text!r}")

        args: List[float] = [0.0] * definition.arity
        for i in reversed(range(definition.arity)):
            if not stack:
                raise EvalError(
                    f"not enough arguments: {token.text!r} expects {definition.arity}"
                )
            args[i] = stack.pop()
        return definition(args)

    @staticmethod
    def evaluate(
        compiled: Sequence[Token],
        variables: MutableMapping[str, float],
        functions: Dict[str, FunctionDefinition],
    ) -> float:
        """
        Run a postfix token sequence.

        :param Sequence[Token] compiled: Tokens in RPN order
        :param MutableMapping variables: Variable store; absent names read as 0.0 and are inserted
        :param dict functions: Function registry keyed by name

        :return: Computed result as float, 0.0 for an empty sequence
        :rtype: float
        :raises EvalError: On unknown functions, stack underflow or leftover operands
        """
        stack: List[float] = []
        for token in compiled:
            if token.kind is TokenKind.NUMBER:
                stack.append(token.value)
            elif token.kind is TokenKind.IDENTIFIER:
                stack.append(variables.setdefault(token.text, 0.0))
            elif token.kind is TokenKind.FUNCTION:
                stack.append(PostfixEvaluator._call_function(token, stack, functions))
            elif token.is_operator:
                # Operator requires two operands
                if len(stack) < 2:
                    raise EvalError(f"malformed expression: not enough operands for {token.text!r}")
                b: float = stack.pop()
                a: float = stack.pop()
                stack.append(BINARY_OPERATIONS[token.kind](a, b))
            else:
                raise EvalError(f"malformed expression: unexpected token {token.text!r}")

        if not stack:
            return 0.0
        if len(stack) > 1:
            raise EvalError(f"malformed expression: {len(stack)} operands left without operator")
        return stack[0]
