import math

from enum import Enum
from typing import Dict, Iterator, List, Optional

from ..logger import LOGGER
from ..utils.math.complex import Complex, ComplexLike


class VariableKind(Enum):
    CONSTANT = "constant"
    RANGE = "range"
    TIME = "time"


class Variable:
    """
    A named value edited from the UI.

    Range variables map a slider fraction in [0, 1] onto [min, max], time
    variables step from min to max by `step` and wrap around.
    """

    def __init__(
        self,
        name: str,
        kind: VariableKind = VariableKind.CONSTANT,
        value: ComplexLike = 0,
        min: float = 0.0,
        max: float = 1.0,
        step: float = 0.1,
    ):
        self.name = name
        self.kind = kind
        self.value = Complex.coerce(value)
        self.min = float(min)
        self.max = float(max)
        self.step = float(step)

    def __repr__(self):
        return f"Variable({self.name!r}, {self.kind.name}, {self.value.print()})"

    @property
    def fraction(self) -> float:
        span = self.max - self.min
        if span == 0:
            return 0.0
        return (self.value.re - self.min) / span

    def set_fraction(self, fraction: float):
        if self.kind == VariableKind.CONSTANT:
            raise ValueError(f"Constant '{self.name}' has no slider range.")
        self.value = Complex(self.min + (self.max - self.min) * float(fraction))

    def advance(self):
        if self.kind != VariableKind.TIME:
            return
        nxt = self.value.re + self.step
        lo, hi = sorted((self.min, self.max))
        if nxt > hi or not math.isfinite(nxt):
            nxt = lo
        self.value = Complex(nxt)


class VariableRegistry:
    """
    Ordered name to value bindings read by the interpreter.

    Lookup takes the first variable with a matching name, so a duplicate
    added later is shadowed by the earlier one.
    """

    def __init__(self, defaults: bool = True):
        self._vars: List[Variable] = []
        if defaults:
            self.reset()

    def reset(self):
        self._vars = [
            Variable("pi", VariableKind.CONSTANT, math.pi),
            Variable("e", VariableKind.CONSTANT, math.e),
        ]

    def __iter__(self) -> Iterator[Variable]:
        return iter(list(self._vars))

    def __len__(self) -> int:
        return len(self._vars)

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def __getitem__(self, name: str) -> Complex:
        value = self.resolve(name)
        if value is None:
            raise KeyError(name)
        return value

    def names(self) -> List[str]:
        return [var.name for var in self._vars]

    def find(self, name: str) -> Optional[Variable]:
        for var in self._vars:
            if var.name == name:
                return var
        return None

    def resolve(self, name: str) -> Optional[Complex]:
        var = self.find(name)
        return var.value if var is not None else None

    def add(self, var: Variable) -> Variable:
        if var.name in self:
            LOGGER.warn(f"Variable '{var.name}' already exists, the new one is shadowed.")
        self._vars.append(var)
        return var

    def add_constant(self, name: str, value: ComplexLike) -> Variable:
        return self.add(Variable(name, VariableKind.CONSTANT, value))

    def add_range(
        self, name: str, min: float, max: float, fraction: float = 0.0
    ) -> Variable:
        var = Variable(name, VariableKind.RANGE, 0, min=min, max=max)
        var.set_fraction(fraction)
        return self.add(var)

    def add_time(self, name: str, min: float, max: float, step: float) -> Variable:
        return self.add(Variable(name, VariableKind.TIME, min, min=min, max=max, step=step))

    def set_value(self, name: str, value: ComplexLike):
        self._require(name).value = Complex.coerce(value)

    def set_fraction(self, name: str, fraction: float):
        self._require(name).set_fraction(fraction)

    def remove(self, name: str) -> Variable:
        var = self._require(name)
        self._vars.remove(var)
        return var

    def tick(self):
        for var in self._vars:
            var.advance()

    def snapshot(self) -> Dict[str, Complex]:
        """Frozen first-match view, so a batch sees one set of values."""
        values: Dict[str, Complex] = {}
        for var in self._vars:
            values.setdefault(var.name, var.value)
        return values

    def _require(self, name: str) -> Variable:
        var = self.find(name)
        if var is None:
            raise KeyError(name)
        return var
