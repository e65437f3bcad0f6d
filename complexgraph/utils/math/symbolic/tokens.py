from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Tuple

from ..complex import Complex
from ....errors import InvalidOperator


class Operation(Enum):
    ADD = ("+", 2)
    SUB = ("-", 2)
    MUL = ("*", 2)
    DIV = ("/", 2)
    POW = ("^", 2)
    NEG = ("neg", 1)
    LN = ("ln", 1)
    EXP = ("exp", 1)
    SQRT = ("sqrt", 1)
    ABS = ("abs", 1)
    SIN = ("sin", 1)
    COS = ("cos", 1)
    TAN = ("tan", 1)
    ASIN = ("asin", 1)
    ACOS = ("acos", 1)
    ATAN = ("atan", 1)

    def __init__(self, symbol: str, arity: int):
        self.symbol = symbol
        self.arity = arity

    @property
    def is_function(self) -> bool:
        return self.symbol.isalpha()

    @classmethod
    def from_symbol(cls, symbol: str) -> "Operation":
        op = _BY_SYMBOL.get(symbol)
        if op is None:
            raise InvalidOperator(symbol)
        return op

    @classmethod
    def symbols(cls) -> Tuple[str, ...]:
        return tuple(_BY_SYMBOL)

    def apply(self, *args: Complex) -> Complex:
        if len(args) != self.arity:
            raise TypeError(f"{self.symbol} takes {self.arity} argument(s)")
        return _IMPLEMENTATIONS[self](*args)


_BY_SYMBOL: Dict[str, Operation] = {op.symbol: op for op in Operation}
_BY_SYMBOL["**"] = Operation.POW

_IMPLEMENTATIONS: Dict[Operation, Callable[..., Complex]] = {
    Operation.ADD: Complex.add,
    Operation.SUB: Complex.subtract,
    Operation.MUL: Complex.multiply,
    Operation.DIV: Complex.divide,
    Operation.POW: Complex.raise_,
    Operation.NEG: Complex.negate,
    Operation.LN: Complex.ln,
    Operation.EXP: Complex.exp,
    Operation.SQRT: Complex.sqrt,
    Operation.ABS: Complex.abs,
    Operation.SIN: Complex.sin,
    Operation.COS: Complex.cos,
    Operation.TAN: Complex.tan,
    Operation.ASIN: Complex.asin,
    Operation.ACOS: Complex.acos,
    Operation.ATAN: Complex.atan,
}

_missing = set(Operation) - set(_IMPLEMENTATIONS)
if _missing:
    raise RuntimeError(f"Operations without implementation: {_missing}")


@dataclass(frozen=True)
class Token:
    line: int = field(default=0, compare=False, kw_only=True)


@dataclass(frozen=True)
class Number(Token):
    value: Complex


@dataclass(frozen=True)
class Identifier(Token):
    name: str


@dataclass(frozen=True)
class Operator(Token):
    op: Operation


@dataclass(frozen=True)
class Assign(Token):
    name: str


@dataclass(frozen=True)
class XRef(Token):
    pass


class Program:
    """Flat Reverse-Polish token sequence built from one function text."""

    def __init__(self, tokens=(), source: str = ""):
        self.tokens: Tuple[Token, ...] = tuple(tokens)
        self.source = source

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __getitem__(self, idx):
        return self.tokens[idx]

    def __eq__(self, other):
        if not isinstance(other, Program):
            return NotImplemented
        return self.tokens == other.tokens

    def __hash__(self):
        return hash(self.tokens)

    def __repr__(self):
        return f"Program({list(self.tokens)!r})"

    def identifiers(self) -> List[str]:
        """Names read from the registry, i.e. not bound earlier by an assignment."""
        assigned = set()
        names = []
        for tok in self.tokens:
            if isinstance(tok, Assign):
                assigned.add(tok.name)
            elif isinstance(tok, Identifier):
                if tok.name not in assigned and tok.name not in names:
                    names.append(tok.name)
        return names
