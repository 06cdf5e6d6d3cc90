# solver.py

"""
Evaluates infix expressions of fraction literals and the four binary operators.

Evaluation happens in two passes:

1. to_postfix: operator-precedence (shunting-yard) conversion to postfix.
   Values and operators must strictly alternate, starting and ending with a
   value; anything else is a MalformedExpressionError.
2. evaluate_postfix: a value stack; each operator pops its right operand, then
   its left, and pushes the result.

Equal precedence is left associative: "8 / 2 / 2" is 2.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fraccalc.errors import MalformedExpressionError, NullInputError
from fraccalc.lexer import Operator, Token, Value, format_tokens, process_line
from fraccalc.rational import Rational, RenderMode, add, divide, multiply, subtract

logger = logging.getLogger(__name__)


def to_postfix(infix: List[Token]) -> List[Token]:
    """Convert an infix token sequence to postfix, validating its shape."""
    out: List[Token] = []
    stack: List[Operator] = []
    value_count = 0
    operator_count = 0
    # Values and operators alternate, starting with a value.
    expect_value = True
    prev: Optional[Token] = None
    for tok in infix:
        match tok:
            case Value() if expect_value:
                out.append(tok)
                value_count += 1
            case Operator() if not expect_value:
                while stack and stack[-1].rank >= tok.rank:
                    out.append(stack.pop())
                stack.append(tok)
                operator_count += 1
            case _:
                where = "at start" if prev is None else f"after {prev}"
                raise MalformedExpressionError(
                    f"Line does not parse as a valid expression: unexpected {tok} {where}"
                )
        expect_value = not expect_value
        prev = tok
    while stack:
        out.append(stack.pop())
    if value_count != operator_count + 1:
        raise MalformedExpressionError(
            f"Line does not parse as a valid expression: {value_count} values for {operator_count} operators"
        )
    return out


def _apply(op: Operator, left: Rational, right: Rational) -> Rational:
    match op:
        case Operator.ADD:
            return add(left, right)
        case Operator.SUBTRACT:
            return subtract(left, right)
        case Operator.MULTIPLY:
            return multiply(left, right)
        case Operator.DIVIDE:
            return divide(left, right)


def evaluate_postfix(postfix: List[Token]) -> Rational:
    """Evaluate a postfix sequence produced by to_postfix."""
    stack: List[Rational] = []
    for tok in postfix:
        match tok:
            case Value(value=value):
                stack.append(value)
            case Operator():
                right = stack.pop()
                left = stack.pop()
                stack.append(_apply(tok, left, right))
    return stack.pop()


def evaluate(infix: List[Token]) -> Rational:
    postfix = to_postfix(infix)
    logger.debug(f"Postfix: {format_tokens(postfix)}")
    result = evaluate_postfix(postfix)
    logger.debug(f"Result: {result!r}")
    return result


def solve(expression: Optional[str], mode: RenderMode = RenderMode.RATIO) -> str:
    """Evaluate an expression string and render the result.

    Raises NullInputError, MalformedLiteralError or MalformedExpressionError.
    """
    if expression is None:
        raise NullInputError("Cannot solve None")
    result = evaluate(process_line(expression))
    return Value.of(result, mode).text
