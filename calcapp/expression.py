"""
Safe arithmetic evaluation.

A tokenizer and recursive-descent parser restricted to numeric literals and
``+ - * / ^ ( )``. Nothing here ever executes user text as code.

Grammar:
    expr    : term ((PLUS|MINUS) term)*
    term    : unary ((MUL|DIV) unary)*
    unary   : (PLUS|MINUS) unary | power
    power   : primary (POW unary)?
    primary : NUMBER | LPAREN expr RPAREN
"""
import math
import re
from dataclasses import dataclass
from typing import List

from .errors import ExpressionError

MAX_EXPRESSION_LENGTH = 1000

_TOKEN_SPEC = [
    ("NUMBER", r"\d+(?:\.\d*)?|\.\d+"),
    ("PLUS", r"\+"),
    ("MINUS", r"-"),
    ("MUL", r"\*"),
    ("DIV", r"/"),
    ("POW", r"\^"),
    ("LPAREN", r"\("),
    ("RPAREN", r"\)"),
    ("SKIP", r"\s+"),
    ("MISMATCH", r"."),
]
_TOKEN_RE = re.compile("|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_SPEC))


@dataclass(frozen=True)
class Token:
    type: str
    text: str
    pos: int


def tokenize(text: str) -> List[Token]:
    tokens = []
    for mo in _TOKEN_RE.finditer(text):
        kind = mo.lastgroup
        if kind == "SKIP":
            continue
        if kind == "MISMATCH":
            raise ExpressionError(f"Unexpected character '{mo.group()}' at position {mo.start()}")
        tokens.append(Token(kind, mo.group(), mo.start()))
    tokens.append(Token("EOF", "", len(text)))
    return tokens


class _Parser:
    """Evaluates while parsing; the grammar is small enough to skip an AST."""

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.current = 0

    def peek(self) -> Token:
        return self.tokens[self.current]

    def next(self) -> Token:
        token = self.tokens[self.current]
        self.current += 1
        return token

    def expect(self, type_: str) -> Token:
        token = self.peek()
        if token.type != type_:
            raise ExpressionError(f"Expected {type_}, got '{token.text or 'end of input'}' at position {token.pos}")
        return self.next()

    def parse(self) -> float:
        value = self.expr()
        token = self.peek()
        if token.type != "EOF":
            raise ExpressionError(f"Unexpected token '{token.text}' at position {token.pos}")
        return value

    def expr(self) -> float:
        value = self.term()
        while self.peek().type in ("PLUS", "MINUS"):
            op = self.next().type
            right = self.term()
            value = value + right if op == "PLUS" else value - right
        return value

    def term(self) -> float:
        value = self.unary()
        while self.peek().type in ("MUL", "DIV"):
            op = self.next().type
            right = self.unary()
            if op == "MUL":
                value = value * right
            else:
                if right == 0:
                    raise ExpressionError("Division by zero")
                value = value / right
        return value

    def unary(self) -> float:
        token = self.peek()
        if token.type == "MINUS":
            self.next()
            return -self.unary()
        if token.type == "PLUS":
            self.next()
            return self.unary()
        return self.power()

    def power(self) -> float:
        base = self.primary()
        if self.peek().type == "POW":
            self.next()
            exponent = self.unary()
            try:
                return math.pow(base, exponent)
            except (OverflowError, ValueError) as e:
                raise ExpressionError(f"Cannot raise {base} to {exponent}") from e
        return base

    def primary(self) -> float:
        token = self.peek()
        if token.type == "NUMBER":
            self.next()
            return float(token.text)
        if token.type == "LPAREN":
            self.next()
            value = self.expr()
            self.expect("RPAREN")
            return value
        raise ExpressionError(f"Expected number or '(', got '{token.text or 'end of input'}' at position {token.pos}")


def evaluate_expression(text: str) -> float:
    """Evaluate an arithmetic expression such as ``"2 * (3 + 4) ^ 2"``.

    Raises ExpressionError on malformed input, division by zero, or a result
    that is not a finite real number.
    """
    if not text or not text.strip():
        raise ExpressionError("Empty expression")
    if len(text) > MAX_EXPRESSION_LENGTH:
        raise ExpressionError(f"Expression too long (limit: {MAX_EXPRESSION_LENGTH} chars)")
    try:
        value = _Parser(tokenize(text)).parse()
    except RecursionError as e:
        raise ExpressionError("Expression nested too deeply") from e
    if not math.isfinite(value):
        raise ExpressionError("Result is not a finite number")
    return value
