# -*- coding: utf-8 -*-
"""
Safe evaluation of calculator expressions

Only numbers, + - * / ** and parentheses are accepted; the expression is parsed
with the ast module and walked over a whitelist of nodes, nothing is exec'd.
"""

import ast
import logging
import math
import operator
import re
from decimal import Decimal

from verbalcalc import config
from verbalcalc.errors import EvaluationError

logger = logging.getLogger(__name__)

BINARY_OPERATORS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Pow: operator.pow,
}

UNARY_OPERATORS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

PERCENT_RE = re.compile(r'([0-9]*\.?[0-9]+)%')
DISALLOWED_RE = re.compile(r'[^0-9.+\-*/()\s]')
TRAILING_OPERATOR_RE = re.compile(r'[+\-*/]\s*$')
# "08" is 8, but the zero in "1.05" stays
LEADING_ZEROS_RE = re.compile(r'(?<![0-9.])0+(?=[0-9])')


def normalize_expression(expression: str) -> str:
    """Replace display operators with Python ones and expand percentages"""
    expr = (expression or '').replace('×', '*').replace('−', '-').replace(',', '').strip()
    # n% -> (n/100)
    return PERCENT_RE.sub(r'(\1/100)', expr)


def _evaluate_node(node):
    if isinstance(node, ast.Expression):
        return _evaluate_node(node.body)

    if isinstance(node, ast.Constant) and type(node.value) in (int, float):
        return float(node.value)

    if isinstance(node, ast.BinOp) and type(node.op) in BINARY_OPERATORS:
        left = _evaluate_node(node.left)
        right = _evaluate_node(node.right)
        value = BINARY_OPERATORS[type(node.op)](left, right)
        if isinstance(value, complex):
            raise EvaluationError('Result is not a real number')
        return value

    if isinstance(node, ast.UnaryOp) and type(node.op) in UNARY_OPERATORS:
        return UNARY_OPERATORS[type(node.op)](_evaluate_node(node.operand))

    raise EvaluationError(f'Unsupported element: {type(node).__name__}')


def format_result(value, precision=None) -> str:
    """
    Render a number the way the calculator shows it

    Rounded to `precision` significant digits, plain decimal notation
    (no exponent), no trailing zeros: 0.1 + 0.2 -> "0.3", 1e21 -> "1000000000000000000000"
    """
    precision = precision or config.RESULT_PRECISION
    if value == 0:
        return '0'
    rounded = Decimal(f'{value:.{precision}g}').normalize()
    return format(rounded, 'f')


def evaluate(expression: str) -> str:
    """
    Evaluate a calculator expression

    Args:
        expression: e.g. "12+7", "1,200×5%", "10−2/4"

    Returns:
        str: the result formatted by format_result

    Raises:
        EvaluationError: malformed expression, disallowed characters,
            division by zero or a non-finite result
    """
    expr = normalize_expression(expression)

    if not expr:
        raise EvaluationError('Empty expression')
    if TRAILING_OPERATOR_RE.search(expr):
        raise EvaluationError('Expression ends with an operator')
    if DISALLOWED_RE.search(expr):
        raise EvaluationError('Invalid characters in expression')

    expr = LEADING_ZEROS_RE.sub('', expr)

    try:
        tree = ast.parse(expr, mode='eval')
        value = _evaluate_node(tree)
    except EvaluationError:
        logger.debug("Rejected expression %r", expression)
        raise
    except (SyntaxError, ZeroDivisionError, OverflowError, RecursionError, ValueError) as e:
        logger.debug("Cannot evaluate %r: %s", expression, e)
        raise EvaluationError(f'Invalid calculation: {e}') from e

    if not math.isfinite(value):
        raise EvaluationError('Invalid calculation: result is not finite')

    return format_result(value)
