import math
import numpy as np
import torch

from typing import Dict, List, Optional

from .interpreter import make_resolver
from .tokens import Assign, Identifier, Number, Operation, Operator, Program, XRef
from ..complex import Complex
from ....errors import InvalidOperator, StackUnderflow, UnknownIdentifier


DTYPE = torch.complex128


def _nan_like(z: torch.Tensor) -> torch.Tensor:
    return torch.full_like(z, complex(math.nan, math.nan))


def _const(z: torch.Tensor, value: complex) -> torch.Tensor:
    return torch.full_like(z, value)


def t_from_polar(r: torch.Tensor, theta: torch.Tensor) -> torch.Tensor:
    return torch.complex(r * torch.cos(theta), r * torch.sin(theta))


def t_multiply(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    return torch.complex(
        a.real * b.real - a.imag * b.imag, a.imag * b.real + a.real * b.imag
    )


def t_raise(base: torch.Tensor, exponent: torch.Tensor) -> torch.Tensor:
    r = base.abs()
    theta = torch.where(r == 0, torch.zeros_like(r), base.angle())
    ln_r = torch.log(r)
    mag = torch.exp(exponent.real * ln_r - exponent.imag * theta)
    arg = exponent.imag * ln_r + exponent.real * theta
    out = t_from_polar(mag, arg)
    zero = (r == 0) & (exponent.abs() != 0)
    return torch.where(zero, torch.zeros_like(out), out)


def t_divide(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    out = t_multiply(a, t_raise(b, torch.full_like(b, -1)))
    return torch.where(b.abs() == 0, _nan_like(out), out)


def t_ln(z: torch.Tensor) -> torch.Tensor:
    r = z.abs()
    theta = torch.where(r == 0, torch.zeros_like(r), z.angle())
    return torch.complex(torch.log(r), theta)


def t_exp(z: torch.Tensor) -> torch.Tensor:
    return t_from_polar(torch.exp(z.real), z.imag)


def t_sqrt(z: torch.Tensor) -> torch.Tensor:
    return t_raise(z, torch.full_like(z, 0.5))


def t_abs(z: torch.Tensor) -> torch.Tensor:
    return torch.complex(z.abs(), torch.zeros_like(z.real))


# Trigonometry through t_exp and t_ln, same identities as Complex


def t_sin(z: torch.Tensor) -> torch.Tensor:
    iz = t_multiply(_const(z, 1j), z)
    return t_multiply(t_exp(iz) - t_exp(-iz), _const(z, -0.5j))


def t_cos(z: torch.Tensor) -> torch.Tensor:
    iz = t_multiply(_const(z, 1j), z)
    return t_multiply(t_exp(iz) + t_exp(-iz), _const(z, 0.5))


def t_tan(z: torch.Tensor) -> torch.Tensor:
    return t_divide(t_sin(z), t_cos(z))


def t_asin(z: torch.Tensor) -> torch.Tensor:
    root = t_sqrt(_const(z, 1) - t_multiply(z, z))
    inner = t_multiply(_const(z, 1j), z) + root
    return t_multiply(_const(z, -1j), t_ln(inner))


def t_acos(z: torch.Tensor) -> torch.Tensor:
    root = t_sqrt(_const(z, 1) - t_multiply(z, z))
    inner = z + t_multiply(_const(z, 1j), root)
    return t_multiply(_const(z, -1j), t_ln(inner))


def t_atan(z: torch.Tensor) -> torch.Tensor:
    iz = t_multiply(_const(z, 1j), z)
    diff = t_ln(_const(z, 1) - iz) - t_ln(_const(z, 1) + iz)
    return t_multiply(_const(z, 0.5j), diff)


class TorchInterpreter:
    """
    Runs a Program over every sample at once with complex128 tensors.

    Control flow never depends on values, so the stack holds one tensor of
    shape (samples,) per entry and errors are raised once for the batch.
    """

    _torch_functions = {
        Operation.ADD: torch.add,
        Operation.SUB: torch.sub,
        Operation.MUL: t_multiply,
        Operation.DIV: t_divide,
        Operation.POW: t_raise,
        Operation.NEG: torch.neg,
        Operation.LN: t_ln,
        Operation.EXP: t_exp,
        Operation.SQRT: t_sqrt,
        Operation.ABS: t_abs,
        Operation.SIN: t_sin,
        Operation.COS: t_cos,
        Operation.TAN: t_tan,
        Operation.ASIN: t_asin,
        Operation.ACOS: t_acos,
        Operation.ATAN: t_atan,
    }

    def __init__(
        self,
        program: Program,
        registry=None,
        device: Optional[torch.device] = None,
    ):
        self.program = program
        self.resolve = make_resolver(registry)
        self.device = device if device is not None else torch.device("cpu")

    def constant(self, value: Complex, like: torch.Tensor) -> torch.Tensor:
        return torch.full_like(like, complex(value.re, value.im))

    def run(self, xs) -> torch.Tensor:
        if not isinstance(xs, torch.Tensor):
            xs = torch.as_tensor(np.asarray(xs, dtype=np.complex128))
        xs = xs.to(device=self.device, dtype=DTYPE).reshape(-1)
        stack: List[torch.Tensor] = []
        calculated: Dict[str, torch.Tensor] = {}

        for tok in self.program:
            if isinstance(tok, XRef):
                stack.append(xs)
            elif isinstance(tok, Number):
                stack.append(self.constant(tok.value, xs))
            elif isinstance(tok, Assign):
                if not stack:
                    raise StackUnderflow(tok.line, 1, 0)
                calculated[tok.name] = stack.pop()
            elif isinstance(tok, Operator):
                fn = self._torch_functions.get(tok.op)
                if fn is None:
                    raise InvalidOperator(tok.op)
                k = tok.op.arity
                if len(stack) < k:
                    raise StackUnderflow(tok.line, k, len(stack))
                args = stack[len(stack) - k :]
                del stack[len(stack) - k :]
                stack.append(fn(*args))
            elif isinstance(tok, Identifier):
                if tok.name in calculated:
                    stack.append(calculated[tok.name])
                    continue
                value = self.resolve(tok.name)
                if value is None:
                    raise UnknownIdentifier(tok.name, tok.line)
                stack.append(self.constant(value, xs))
            else:
                raise InvalidOperator(tok)

        if not stack:
            return torch.empty((0, xs.shape[0]), dtype=DTYPE, device=self.device)
        return torch.stack(stack)


def to_complex_lists(values: torch.Tensor) -> List[List[Complex]]:
    """(outputs, samples) tensor to one list of Complex per sample."""
    values = values.detach().cpu()
    return [
        [Complex(v.real.item(), v.imag.item()) for v in column]
        for column in values.T
    ]
