"""Convert infix token sequences to postfix order."""
from typing import List, Tuple

from expression_compiler.common.errors import ParseError
from expression_compiler.common.tokens import Associativity, Token, TokenKind


class ExpressionParser:
    """
    Reorder tokens from infix to Reverse Polish Notation (RPN).

    The Shunting-yard algorithm converts an infix expression into Reverse Polish Notation (RPN), allowing
    stack-based evaluation without parentheses or precedence lookups.
    It handles operator precedence by temporarily storing operators on a stack and outputting them in the correct order.
    Function calls wait on the stack until the bracket closing their argument list is read.

    Examples:
        - Infix expression (standard notation): 3 + 4 * 2
        - Corresponding Reverse Polish Notation (RPN): 3 4 2 * +
        - Infix expression with a call: max(1, 2 ^ 3)
        - Corresponding Reverse Polish Notation (RPN): 1 2 3 ^ max
    """

    @staticmethod
    def _should_pop(incoming: Token, top: Token) -> bool:
        """
        Decide whether the operator on top of the stack binds tighter than the incoming one.

        Left-associative operators pop equal precedence, right-associative ones keep it.

        :param Token incoming: Operator being read
        :param Token top: Operator on top of the stack

        :return: True if ``top`` must be moved to the output first
        :rtype: bool
        """
        if incoming.associativity is Associativity.LEFT:
            return incoming.precedence <= top.precedence
        return incoming.precedence < top.precedence

    @staticmethod
    def _pop_until_open(stack: List[Token], output: List[Token]) -> bool:
        """
        Move operators from the stack to the output down to the nearest open bracket.

        The open bracket itself stays on the stack.

        :return: True if an open bracket was found
        :rtype: bool
        """
        while stack and stack[-1].kind is not TokenKind.OPEN:
            output.append(stack.pop())
        return bool(stack)

    @staticmethod
    def to_rpn(tokens: List[Token]) -> Tuple[Token, ...]:
        """
        Convert a list of tokens into Reverse Polish Notation (RPN) using the Shunting-yard algorithm.

        :param List[Token] tokens: Tokens in source order

        :return: Tokens in RPN order
        :rtype: Tuple[Token, ...]
        :raises ParseError: On bracket mismatch or malformed function-call syntax
        """
        output: List[Token] = []
        stack: List[Token] = []

        for token in tokens:
            if token.kind in (TokenKind.NUMBER, TokenKind.IDENTIFIER):
                # Operands are added directly to the output
                output.append(token)
            elif token.kind is TokenKind.FUNCTION:
                # Emitted once its argument list closes
                stack.append(token)
            elif token.kind is TokenKind.COMMA:
                if not ExpressionParser._pop_until_open(stack, output):
                    raise ParseError("malformed function call: argument separator outside brackets")
            elif token.is_operator:
                while stack and stack[-1].is_operator and ExpressionParser._should_pop(token, stack[-1]):
                    output.append(stack.pop())
                stack.append(token)
            elif token.kind is TokenKind.OPEN:
                stack.append(token)
            elif token.kind is TokenKind.CLOSE:
                if not ExpressionParser._pop_until_open(stack, output):
                    raise ParseError("bracket mismatch: closing bracket without opening bracket")
                stack.pop()
                # Attach a function to its closed argument list
                if stack and stack[-1].kind is TokenKind.FUNCTION:
                    output.append(stack.pop())

        # Append remaining operators in reverse order (stack top first)
        while stack:
            token = stack.pop()
            if token.is_paren:
                raise ParseError("bracket mismatch: unclosed opening bracket")
            output.append(token)

        return tuple(output)
