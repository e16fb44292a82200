"""
Expression tree and equation model.

An Expression is either a Number or a BinaryOp owning two sub-expressions.
An Equation pairs the parsed left-hand expression with the expected value
from the right-hand side. Evaluation uses float64 semantics and never raises.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np


class Operator(Enum):
    ADD = '+'
    SUBTRACT = '-'
    MULTIPLY = '*'
    DIVIDE = '/'
    EXPONENT = '^'

    @classmethod
    def from_token(cls, token):
        """Map an infix token ('+', '-', ...) to its Operator."""
        return cls(str(token))


# NumPy ufuncs give IEEE results (inf/nan) where Python floats would raise
_UFUNCS = {
    Operator.ADD: np.add,
    Operator.SUBTRACT: np.subtract,
    Operator.MULTIPLY: np.multiply,
    Operator.DIVIDE: np.divide,
    Operator.EXPONENT: np.power,
}

CORRECT_MARK = '✔'
INCORRECT_MARK = '❌'


def format_number(value: float) -> str:
    """Shortest positional text for value: 4.0 -> '4', 1e20 -> '100000000000000000000'."""
    return np.format_float_positional(np.float64(value), trim='-')


@dataclass(frozen=True)
class Number:
    value: float

    def evaluate(self) -> float:
        return self.value

    def __str__(self):
        return format_number(self.value)


@dataclass(frozen=True)
class BinaryOp:
    operator: Operator
    left: 'Expression'
    right: 'Expression'

    def evaluate(self) -> float:
        return evaluate(self)

    def __str__(self):
        return render(self)


Expression = Union[Number, BinaryOp]


def _apply(operator, left_value, right_value):
    with np.errstate(all='ignore'):
        return float(_UFUNCS[operator](np.float64(left_value), np.float64(right_value)))


def evaluate(expression: Expression) -> float:
    """Evaluate an expression tree to a float (possibly inf or nan).

    Uses an explicit stack; left-folded sums are as deep as they are long.
    """
    values = []
    stack = [(expression, False)]
    while stack:
        node, operands_done = stack.pop()
        if isinstance(node, Number):
            values.append(node.value)
        elif operands_done:
            right_value = values.pop()
            left_value = values.pop()
            values.append(_apply(node.operator, left_value, right_value))
        else:
            stack.append((node, True))
            stack.append((node.right, False))
            stack.append((node.left, False))
    return values[0]


def render(expression: Expression) -> str:
    """Infix text of the tree, operators between operands, no parentheses added."""
    parts = []
    stack = [expression]
    while stack:
        node = stack.pop()
        if isinstance(node, str):
            parts.append(node)
        elif isinstance(node, Number):
            parts.append(format_number(node.value))
        else:
            if node.operator is Operator.EXPONENT:
                separator = '^'
            else:
                separator = f" {node.operator.value} "
            stack.extend((node.right, separator, node.left))
    return ''.join(parts)


@dataclass(frozen=True)
class Equation:
    """An arithmetic expression with its expected right-hand value."""
    expression: Expression
    expected: float

    @classmethod
    def from_string(cls, text: str, strict: bool = False) -> 'Equation':
        """Parse an equation, ignoring trailing input unless strict.

        Raises equation_engine.ParseError on malformed input.
        """
        from equation_engine import default_grammar
        return default_grammar().parse(text, strict=strict)

    def eval(self) -> float:
        return evaluate(self.expression)

    def is_correct(self) -> bool:
        # Exact comparison; equations are checked against literal answers
        return self.eval() == self.expected

    def __str__(self):
        mark = CORRECT_MARK if self.is_correct() else INCORRECT_MARK
        return f"{self.expression} = {format_number(self.expected)} {mark}"
