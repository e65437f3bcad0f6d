from typing import Callable, Dict, Iterable, List, Mapping, Optional, Union

from .tokens import Assign, Identifier, Number, Operation, Operator, Program, XRef
from ..complex import Complex, ComplexLike
from ....errors import InvalidOperator, StackUnderflow, UnknownIdentifier


Resolver = Callable[[str], Optional[Complex]]


def make_resolver(registry) -> Resolver:
    """Accept a VariableRegistry (anything with resolve) or a plain mapping."""
    if registry is None:
        return lambda name: None
    if hasattr(registry, "resolve"):
        return registry.resolve
    if isinstance(registry, Mapping):
        return lambda name: (
            Complex.coerce(registry[name]) if name in registry else None
        )
    raise TypeError(f"Unsupported variable registry: {type(registry).__name__}")


class EvaluationStack:
    """Value stack owned by a single evaluation call."""

    def __init__(self):
        self._items: List[Complex] = []

    def __len__(self) -> int:
        return len(self._items)

    def push(self, value: ComplexLike):
        self._items.append(Complex.coerce(value))

    def pop(self, line: int = 0) -> Complex:
        if not self._items:
            raise StackUnderflow(line, 1, 0)
        return self._items.pop()

    def pop_many(self, k: int, line: int = 0) -> List[Complex]:
        """Pop the top k values, returned in call order (deepest first)."""
        if len(self._items) < k:
            raise StackUnderflow(line, k, len(self._items))
        if k == 0:
            return []
        values = self._items[-k:]
        del self._items[-k:]
        return values

    def values(self) -> List[Complex]:
        return list(self._items)


class Interpreter:
    """
    Runs a Program for one real input at a time.

    Lookups go to the calculated variables of the current call first, then
    to the registry. Nothing is kept between calls.
    """

    def __init__(self, program: Program, registry=None):
        self.program = program
        self.resolve = make_resolver(registry)

    def run(self, x: Union[float, Complex]) -> List[Complex]:
        stack = EvaluationStack()
        calculated: Dict[str, Complex] = {}
        x = Complex.coerce(x)

        for tok in self.program:
            if isinstance(tok, XRef):
                stack.push(x)
            elif isinstance(tok, Number):
                stack.push(tok.value)
            elif isinstance(tok, Assign):
                calculated[tok.name] = stack.pop(tok.line)
            elif isinstance(tok, Operator):
                op = tok.op
                if not isinstance(op, Operation):
                    raise InvalidOperator(op)
                args = stack.pop_many(op.arity, tok.line)
                stack.push(op.apply(*args))
            elif isinstance(tok, Identifier):
                if tok.name in calculated:
                    stack.push(calculated[tok.name])
                    continue
                value = self.resolve(tok.name)
                if value is None:
                    raise UnknownIdentifier(tok.name, tok.line)
                stack.push(value)
            else:
                raise InvalidOperator(tok)

        return stack.values()

    def run_batch(self, samples: Iterable[float]) -> List[List[Complex]]:
        return [self.run(x) for x in samples]


def evaluate(program: Program, registry, x: Union[float, Complex]) -> List[Complex]:
    return Interpreter(program, registry).run(x)


def evaluate_batch(
    program: Program, registry, samples: Iterable[float]
) -> List[List[Complex]]:
    return Interpreter(program, registry).run_batch(samples)
