from lark import Lark, Transformer
from lark.exceptions import UnexpectedInput, UnexpectedCharacters
import logging

from expression import Number, BinaryOp, Operator, Equation

logger = logging.getLogger(__name__)

# Equation grammar: precedence is encoded by which level calls which.
# The contextual lexer only offers NUMBER where an operand is expected, so a
# '-' after an operand always lexes as MINUS ("10-10") and before one as a sign ("5 + -2").
EQUATION_GRAMMAR = r"""
// Terminals
NUMBER: /-?\d+(\.\d+)?/
REST: /[^ \t].*/s

PLUS: "+"
MINUS: "-"
MUL: "*"
DIV: "/"
POW: "^"
_EQUALS: "="
_LP: "("
_RP: ")"

SPACES: /[ \t]+/
%ignore SPACES

// Entry points; REST is whatever follows a complete parse
equation: additive _EQUALS NUMBER [REST]
number: NUMBER [REST]

?additive: multiplicative ((PLUS | MINUS) multiplicative)*
?multiplicative: exponent ((MUL | DIV) exponent)*
?exponent: primary (POW exponent)?
?primary: literal
        | _LP additive _RP

literal: NUMBER
"""


class ParseError(SyntaxError):
    """Input does not match the equation grammar.

    The message is the parser's diagnostic: the offending token or character,
    its line/column, the terminals that were expected there, and a context
    snippet. It is meant for people, not for branching on.
    """

    def __init__(self, message, source='', column=None):
        super().__init__(message)
        self.message = message
        self.source = source
        self.column = column

    @classmethod
    def from_lark(cls, source, exc):
        message = str(exc)
        if not isinstance(exc, UnexpectedCharacters):
            # UnexpectedCharacters already embeds the context snippet
            message = f"{message}\n{exc.get_context(source)}"
        return cls(message, source=source, column=getattr(exc, 'column', None))


class EquationTransformer(Transformer):
    def __init__(self):
        super().__init__(visit_tokens=True)

    def NUMBER(self, token):
        return float(token)

    def REST(self, token):
        return str(token)

    def literal(self, children):
        return Number(children[0])

    def additive(self, children):
        return self._fold_left(children)

    def multiplicative(self, children):
        return self._fold_left(children)

    def exponent(self, children):
        # Right operand was parsed by recursing into this level: right-associative
        base, _, power = children
        return BinaryOp(Operator.EXPONENT, base, power)

    def _fold_left(self, children):
        left = children[0]
        i = 1
        while i < len(children):
            op = Operator.from_token(children[i])
            right = children[i + 1]
            left = BinaryOp(op, left, right)
            i += 2
        return left

    def equation(self, children):
        expression, expected, rest = children
        return Equation(expression, expected), rest or ''

    def number(self, children):
        value, rest = children
        return value, rest or ''


class EquationGrammar:
    def __init__(self, strict=False):
        self.strict = strict
        self.parser = Lark(EQUATION_GRAMMAR, start=['equation', 'number'], parser='lalr')
        self.transformer = EquationTransformer()

    def _parse(self, text, start):
        try:
            tree = self.parser.parse(text, start=start)
        except UnexpectedInput as e:
            logger.warning(f"Parse failed for {text!r} at column {getattr(e, 'column', '?')}")
            raise ParseError.from_lark(text, e) from e
        logger.debug("Parser tree: %s", tree)
        return self.transformer.transform(tree)

    def parse_prefix(self, text):
        """Parse an equation from the start of text.

        Returns (equation, rest) where rest is the unconsumed input with
        leading spaces removed. Raises ParseError if no equation is found.
        """
        equation, rest = self._parse(text, 'equation')
        logger.debug("Parsed equation, expected=%r, rest=%r", equation.expected, rest)
        return equation, rest

    def parse(self, text, strict=None):
        """Parse an equation; in strict mode trailing input is an error."""
        if strict is None:
            strict = self.strict
        equation, rest = self.parse_prefix(text)
        if strict and rest:
            column = len(text) - len(rest) + 1
            logger.warning(f"Trailing input {rest!r} in strict mode")
            raise ParseError(f"Unexpected trailing input {rest!r} at column {column}",
                             source=text, column=column)
        return equation

    def parse_number(self, text):
        """Parse one optionally '-'-signed number; returns (value, rest)."""
        return self._parse(text, 'number')


_default_grammar = None


def default_grammar():
    """Shared non-strict grammar; building the LALR tables happens once."""
    global _default_grammar
    if _default_grammar is None:
        _default_grammar = EquationGrammar()
    return _default_grammar


def parse_equation(text):
    """Parse an equation prefix of text; returns (equation, rest)."""
    return default_grammar().parse_prefix(text)


def parse_number(text):
    return default_grammar().parse_number(text)


if __name__ == "__main__":
    # Example usage
    for line in ["5 + -2 = 3", "(1 + 1) * 5 = 10", "2^3^2 = 64"]:
        equation, _ = parse_equation(line)
        print(equation)
