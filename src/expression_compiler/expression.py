"""Compile an arithmetic formula once and evaluate it many times."""
from collections import defaultdict
from typing import Annotated, DefaultDict, Dict, Tuple

from pydantic import Field, StringConstraints, validate_call

from expression_compiler.common.errors import ExpressionError
from expression_compiler.common.evaluator import PostfixEvaluator
from expression_compiler.common.functions import ExpressionFn, FunctionDefinition
from expression_compiler.common.logger import logger
from expression_compiler.common.parser import ExpressionParser
from expression_compiler.common.tokenizer import Tokenizer
from expression_compiler.common.tokens import Token


VariableName = Annotated[str, StringConstraints(min_length=1, max_length=1)]
FunctionName = Annotated[str, StringConstraints(min_length=1)]


class Expression:
    """
    Arithmetic expression compiled to postfix order, bound to its own variables and functions.

    Lifecycle:
        - ``compile`` tokenizes and parses a formula, replacing the previous compiled sequence
        - ``run`` evaluates the compiled sequence against the current variables and functions
        - variables and functions may change freely between runs, without recompiling

    Functions are resolved by name on every run, so registering a function after ``compile``
    is enough for the next ``run`` to use it.

    The instance holds no lock; callers sharing it between threads must serialize access.

    Examples:
        >>> expr = Expression()
        >>> expr.compile("x * 2 + 1")
        >>> expr.set_variable("x", 7)
        >>> expr.run()
        15.0
    """

    def __init__(self, text: str = "") -> None:
        self._compiled: Tuple[Token, ...] = ()
        self._source: str = ""
        self._variables: DefaultDict[str, float] = defaultdict(float)
        self._functions: Dict[str, FunctionDefinition] = {}
        if text:
            self.compile(text)

    @property
    def source(self) -> str:
        """Text of the last successful compilation."""
        return self._source

    @property
    def postfix(self) -> Tuple[Token, ...]:
        """Compiled tokens in Reverse Polish Notation order."""
        return self._compiled

    def rpn(self) -> str:
        """
        Render the compiled sequence as space-separated Reverse Polish Notation.

        :return: e.g. ``"3 4 2 * +"`` for ``3+4*2``
        :rtype: str
        """
        return " ".join(str(token) for token in self._compiled)

    def compile(self, text: str) -> None:
        """
        Tokenize and parse ``text``, replacing any previously compiled sequence.

        On failure the previous compiled sequence is kept.

        :param str text: Arithmetic expression in infix notation

        :return: None
        :raises LexError: If a character cannot be classified
        :raises ParseError: On bracket mismatch or malformed function-call syntax
        """
        try:
            compiled = ExpressionParser.to_rpn(Tokenizer.tokenize(text))
        except ExpressionError as exc:
            logger.warning(f"🧮❌ Could not compile {text!r}: {exc}")
            raise

        self._compiled = compiled
        self._source = text
        logger.debug(f"🧮✅ Compiled {text!r} into {len(compiled)} postfix tokens: {self.rpn()}")

    def run(self) -> float:
        """
        Evaluate the compiled sequence against the current variables and functions.

        An expression that was never compiled evaluates to 0.0.

        :return: Computed result as float
        :rtype: float
        :raises EvalError: On unknown functions, stack underflow or leftover operands
        """
        try:
            result = PostfixEvaluator.evaluate(self._compiled, self._variables, self._functions)
        except ExpressionError as exc:
            logger.warning(f"🧮❌ Could not evaluate {self._source!r}: {exc}")
            raise

        logger.debug(f"🧮 {self._source!r} = {result}")
        return result

    @validate_call
    def set_variable(self, name: VariableName, value: float) -> None:
        """
        Bind a single-character variable, creating it if needed.

        :param str name: Variable name, exactly one character
        :param float value: New value
        """
        self._variables[name] = value

    @validate_call
    def get_variable(self, name: VariableName) -> float:
        """
        Read a variable; unknown variables are created with value 0.0.

        :param str name: Variable name, exactly one character

        :return: Current value
        :rtype: float
        """
        return self._variables[name]

    @validate_call
    def register_function(self, name: FunctionName, arity: Annotated[int, Field(ge=0)], func: ExpressionFn) -> None:
        """
        Register or replace a function callable from expressions.

        The callable receives a list of exactly ``arity`` floats, the first written argument at index 0.

        :param str name: Name used in expressions, e.g. ``"max"``
        :param int arity: Number of arguments
        :param Callable func: Callable taking the argument list and returning a number
        """
        self._functions[name] = FunctionDefinition(func=func, arity=arity)
        logger.debug(f"🧮 Registered function {name!r} with {arity} argument(s)")
