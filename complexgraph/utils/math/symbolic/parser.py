import re

from typing import List, Optional, Tuple

from .tokens import Assign, Identifier, Number, Operation, Operator, Program, Token, XRef
from ..complex import Complex
from ....errors import ParseError
from ....logger import LOGGER


IMAGINARY_UNITS = ("i", "I", "j", "J")

_DIGITS = r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
_TERM = rf"(?:{_DIGITS}[iIjJ]?|[iIjJ])"

# A full numeric literal such as "4-3i", "-i" or "2.5e-3J"
LITERAL_RE = re.compile(rf"[+-]?{_TERM}(?:[+-]{_TERM})*")
TERM_RE = re.compile(rf"([+-]?)({_DIGITS})?([iIjJ]?)")

NAME_RE = re.compile(r"[A-Za-z_][A-Za-z_0-9]*")


def _normalize_literal(text: str) -> str:
    # Spaces are allowed around signs only, "4 - 3i" but not "4 3"
    return re.sub(r"\s*([+-])\s*", r"\1", text.strip()).replace(",", ".")


def is_number(text: str) -> bool:
    text = _normalize_literal(text)
    return bool(text) and LITERAL_RE.fullmatch(text) is not None


def parse_number(text: str, line: int = 0) -> Complex:
    """
    Parse a complex literal like "4 - 3i", "i", "-J" or "1,5".
    Commas are decimal separators, spaces may surround the signs.
    """
    num = _normalize_literal(text)
    if not num or LITERAL_RE.fullmatch(num) is None:
        raise ParseError(line, 0, f"'{text.strip()}' is not a number")

    re_part = 0.0
    im_part = 0.0
    for m in TERM_RE.finditer(num):
        sign, digits, suffix = m.groups()
        if not (digits or suffix):
            continue
        value = float(digits) if digits else 1.0
        if sign == "-":
            value = -value
        if suffix:
            im_part += value
        else:
            re_part += value
    return Complex(re_part, im_part)


class Parser:
    """
    Recursive descent parser emitting Reverse-Polish tokens.

    Each non-empty line of a function text is one of:
      - a comment starting with '#'
      - an assignment '=name' that pops the stack into a calculated variable
      - an operator or function name applied to the stack ('+', 'ln', ...)
      - an expression, from a bare number or name to infix like '2+3*x'
    """

    TOKEN_RE = re.compile(
        r"\s*(?:(\d+(?:[.,]\d*)?(?:[eE][+-]?\d+)?|[.,]\d+(?:[eE][+-]?\d+)?)([iIjJ](?![A-Za-z_0-9]))?"
        r"|([A-Za-z_][A-Za-z_0-9]*)|(\*\*|[()+\-*/^]))"
    )

    additive = {"+": Operation.ADD, "-": Operation.SUB}
    multiplicative = {"*": Operation.MUL, "/": Operation.DIV}

    def __init__(self):
        self.functions = {
            op.symbol: op for op in Operation if op.arity == 1 and op.is_function
        }

    # Whole programs

    def parse(self, text: str) -> Program:
        tokens: List[Token] = []
        for lineno, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("="):
                tokens.append(self.parse_assignment(raw, lineno))
                continue
            tokens.extend(self.parse_line(raw, lineno))
        LOGGER.debug(f"Parsed {len(tokens)} token(s) from function text")
        return Program(tokens, source=text)

    def parse_assignment(self, raw: str, lineno: int = 1) -> Assign:
        start = raw.index("=") + 1
        name = raw[start:].strip()
        column = start + len(raw[start:]) - len(raw[start:].lstrip())
        if not NAME_RE.fullmatch(name):
            raise ParseError(lineno, column, f"invalid assignment target '{name}'")
        if self.is_reserved(name):
            raise ParseError(lineno, column, f"cannot assign to reserved name '{name}'")
        return Assign(name, line=lineno)

    def is_reserved(self, name: str) -> bool:
        return (
            name == "x"
            or name in IMAGINARY_UNITS
            or name in Operation.symbols()
        )

    # Single lines

    def parse_line(self, text: str, lineno: int = 1) -> List[Token]:
        line = text.strip()
        if not line:
            return []

        # Fast paths: bare literal, bare operator, x
        if is_number(line):
            return [Number(parse_number(line, lineno), line=lineno)]
        if line in Operation.symbols():
            return [Operator(Operation.from_symbol(line), line=lineno)]
        if line == "x":
            return [XRef(line=lineno)]

        self.line = lineno
        self.text = text
        self.tokens = list(self.tokenize(text, lineno))
        self.pos = 0
        self.output: List[Token] = []
        self.expr()
        kind, val, col = self.peek()
        if kind != "EOF":
            if val == ")":
                raise ParseError(lineno, col, "unmatched ')'")
            raise ParseError(lineno, col, f"unexpected token '{val}'")
        return self.output

    def tokenize(self, text: str, lineno: int = 1):
        pos = 0
        end = len(text.rstrip())
        while pos < end:
            m = self.TOKEN_RE.match(text, pos)
            if m is None or m.end() == pos:
                col = pos + len(text[pos:]) - len(text[pos:].lstrip())
                raise ParseError(lineno, col, f"unexpected character '{text[col]}'")
            number, imag, name, op = m.groups()
            col = m.start() + len(m.group(0)) - len(m.group(0).lstrip())
            if number:
                value = float(number.replace(",", "."))
                if imag:
                    yield ("NUMBER", Complex(0, value), col)
                else:
                    yield ("NUMBER", Complex(value), col)
            elif name:
                yield ("NAME", name, col)
            else:
                yield ("OP", op, col)
            pos = m.end()

    def peek(self) -> Tuple[str, object, int]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return ("EOF", None, len(self.text.rstrip()))

    def consume(self) -> Tuple[str, object, int]:
        tok = self.peek()
        self.pos += 1
        return tok

    def emit(self, token: Token):
        self.output.append(token)

    def emit_op(self, op: Operation):
        self.emit(Operator(op, line=self.line))

    # Grammar, lowest precedence first

    def expr(self):
        self.term()
        while self.peek()[0] == "OP" and self.peek()[1] in self.additive:
            op = self.additive[self.consume()[1]]
            self.term()
            self.emit_op(op)

    def term(self):
        self.unary()
        while self.peek()[0] == "OP" and self.peek()[1] in self.multiplicative:
            op = self.multiplicative[self.consume()[1]]
            self.unary()
            self.emit_op(op)

    def unary(self):
        kind, val, _ = self.peek()
        if kind == "OP" and val in ("+", "-"):
            self.consume()
            self.unary()
            if val == "-":
                self.negate_last()
            return
        self.power()

    def power(self):
        self.atom()
        kind, val, _ = self.peek()
        if kind == "OP" and val in ("^", "**"):
            self.consume()
            # Right associative, and allows 2^-1
            self.unary()
            self.emit_op(Operation.POW)

    def negate_last(self):
        last: Optional[Token] = self.output[-1] if self.output else None
        if isinstance(last, Number):
            self.output[-1] = Number(Complex.negate(last.value), line=self.line)
        else:
            self.emit_op(Operation.NEG)

    def atom(self):
        kind, val, col = self.consume()

        if kind == "EOF":
            raise ParseError(self.line, col, "expected an operand")

        # Numbers
        if kind == "NUMBER":
            self.emit(Number(val, line=self.line))
            return

        # Parenthesized subexpression
        if val == "(":
            self.expr()
            if self.peek()[1] != ")":
                raise ParseError(self.line, col, "unmatched '('")
            self.consume()
            return

        # Function call, imaginary unit, x or variable
        if kind == "NAME":
            name = val

            # Function call f(...) or prefix unary function: sin x
            if name in self.functions:
                self.atom()
                self.emit_op(self.functions[name])
                return

            if self.peek()[1] == "(":
                raise ParseError(self.line, col, f"unknown function '{name}'")

            if name == "x":
                self.emit(XRef(line=self.line))
            elif name in IMAGINARY_UNITS:
                self.emit(Number(Complex(0, 1), line=self.line))
            else:
                self.emit(Identifier(name, line=self.line))
            return

        raise ParseError(self.line, col, f"expected an operand, found '{val}'")


def parse_program(text: str) -> Program:
    return Parser().parse(text)


def parse_line(text: str, lineno: int = 1) -> List[Token]:
    return Parser().parse_line(text, lineno)
