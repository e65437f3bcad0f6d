import numpy as np

from typing import NamedTuple, Union


class Polar(NamedTuple):
    r: float
    theta: float


def _real(v) -> float:
    return float(v)


class Complex:
    """
    Immutable complex number used by the function interpreter.

    Every operation returns a new value and accepts plain reals (or builtin
    complex numbers) wherever a Complex is expected. NaN and infinities are
    propagated following IEEE-754; no operation raises.
    """

    __slots__ = ("_re", "_im")

    def __init__(self, re=0.0, im=0.0):
        object.__setattr__(self, "_re", _real(re))
        object.__setattr__(self, "_im", _real(im))

    def __setattr__(self, name, value):
        raise AttributeError("Complex is immutable")

    @property
    def re(self) -> float:
        return self._re

    @property
    def im(self) -> float:
        return self._im

    @staticmethod
    def coerce(value: "ComplexLike") -> "Complex":
        if isinstance(value, Complex):
            return value
        if isinstance(value, complex):
            return Complex(value.real, value.imag)
        return Complex(value)

    # Polar form

    @staticmethod
    def to_polar(num: "ComplexLike") -> Polar:
        num = Complex.coerce(num)
        with np.errstate(all="ignore"):
            r = _real(np.hypot(num.re, num.im))
            if num.re == 0 and num.im == 0:
                # atan2(0, -0.0) is pi, the origin is taken at angle 0
                theta = 0.0
            else:
                theta = _real(np.arctan2(num.im, num.re))
        return Polar(r, theta)

    @staticmethod
    def from_polar(r: float, theta: float) -> "Complex":
        with np.errstate(all="ignore"):
            return Complex(r * np.cos(theta), r * np.sin(theta))

    # Arithmetic

    @staticmethod
    def add(num1: "ComplexLike", num2: "ComplexLike") -> "Complex":
        num1, num2 = Complex.coerce(num1), Complex.coerce(num2)
        return Complex(num1.re + num2.re, num1.im + num2.im)

    @staticmethod
    def subtract(num1: "ComplexLike", num2: "ComplexLike") -> "Complex":
        num1, num2 = Complex.coerce(num1), Complex.coerce(num2)
        return Complex(num1.re - num2.re, num1.im - num2.im)

    @staticmethod
    def multiply(num1: "ComplexLike", num2: "ComplexLike") -> "Complex":
        num1, num2 = Complex.coerce(num1), Complex.coerce(num2)
        re = num1.re * num2.re - num1.im * num2.im
        im = num1.im * num2.re + num1.re * num2.im
        return Complex(re, im)

    @staticmethod
    def divide(num1: "ComplexLike", num2: "ComplexLike") -> "Complex":
        num2 = Complex.coerce(num2)
        if Complex.abs(num2).re == 0:
            return Complex(np.nan, np.nan)
        return Complex.multiply(num1, Complex.raise_(num2, -1))

    @staticmethod
    def negate(num: "ComplexLike") -> "Complex":
        num = Complex.coerce(num)
        return Complex(-num.re, -num.im)

    @staticmethod
    def raise_(base: "ComplexLike", exponent: "ComplexLike") -> "Complex":
        base, exponent = Complex.coerce(base), Complex.coerce(exponent)

        # 0^z would otherwise go through log(0)
        if Complex.abs(base).re == 0 and Complex.abs(exponent).re != 0:
            return Complex(0)

        r, theta = Complex.to_polar(base)
        with np.errstate(all="ignore"):
            ln_r = np.log(np.float64(r))
            mag = np.exp(exponent.re * ln_r - exponent.im * theta)
            arg = exponent.im * ln_r + exponent.re * theta
        return Complex.from_polar(mag, arg)

    @staticmethod
    def ln(num: "ComplexLike") -> "Complex":
        r, theta = Complex.to_polar(num)
        with np.errstate(all="ignore"):
            return Complex(np.log(np.float64(r)), theta)

    @staticmethod
    def exp(num: "ComplexLike") -> "Complex":
        num = Complex.coerce(num)
        with np.errstate(all="ignore"):
            return Complex.from_polar(np.exp(np.float64(num.re)), num.im)

    @staticmethod
    def sqrt(num: "ComplexLike") -> "Complex":
        return Complex.raise_(num, 0.5)

    @staticmethod
    def abs(num: "ComplexLike") -> "Complex":
        return Complex(Complex.to_polar(num).r)

    # Trigonometry, all through exp and the principal ln

    @staticmethod
    def sin(num: "ComplexLike") -> "Complex":
        iz = Complex.multiply(I, num)
        diff = Complex.subtract(Complex.exp(iz), Complex.exp(Complex.negate(iz)))
        return Complex.multiply(diff, Complex(0, -0.5))

    @staticmethod
    def cos(num: "ComplexLike") -> "Complex":
        iz = Complex.multiply(I, num)
        total = Complex.add(Complex.exp(iz), Complex.exp(Complex.negate(iz)))
        return Complex.multiply(total, 0.5)

    @staticmethod
    def tan(num: "ComplexLike") -> "Complex":
        return Complex.divide(Complex.sin(num), Complex.cos(num))

    @staticmethod
    def asin(num: "ComplexLike") -> "Complex":
        # -i ln(iz + sqrt(1 - z^2))
        root = Complex.sqrt(Complex.subtract(1, Complex.multiply(num, num)))
        inner = Complex.add(Complex.multiply(I, num), root)
        return Complex.multiply(Complex(0, -1), Complex.ln(inner))

    @staticmethod
    def acos(num: "ComplexLike") -> "Complex":
        # -i ln(z + i sqrt(1 - z^2))
        root = Complex.sqrt(Complex.subtract(1, Complex.multiply(num, num)))
        inner = Complex.add(num, Complex.multiply(I, root))
        return Complex.multiply(Complex(0, -1), Complex.ln(inner))

    @staticmethod
    def atan(num: "ComplexLike") -> "Complex":
        # i/2 (ln(1 - iz) - ln(1 + iz))
        iz = Complex.multiply(I, num)
        diff = Complex.subtract(
            Complex.ln(Complex.subtract(1, iz)), Complex.ln(Complex.add(1, iz))
        )
        return Complex.multiply(Complex(0, 0.5), diff)

    # Formatting and comparison

    def print(self, precision: int = 6) -> str:
        re = _format_part(self.re, precision)
        im = _format_part(abs(self.im), precision)
        sign = "-" if self.im < 0 and im != "0" else "+"
        return f"{re} {sign} {im}i"

    def isclose(self, other: "ComplexLike", abs_tol: float = 1e-9) -> bool:
        other = Complex.coerce(other)
        return (
            abs(self.re - other.re) <= abs_tol and abs(self.im - other.im) <= abs_tol
        )

    def to_builtin(self) -> complex:
        return complex(self.re, self.im)

    def __eq__(self, other):
        if isinstance(other, (Complex, complex, int, float)):
            other = Complex.coerce(other)
            return self.re == other.re and self.im == other.im
        return NotImplemented

    def __hash__(self):
        return hash(complex(self.re, self.im))

    def __repr__(self):
        return f"Complex({self.re!r}, {self.im!r})"

    def __str__(self):
        return self.print()

    def __add__(self, other):
        return Complex.add(self, other)

    def __radd__(self, other):
        return Complex.add(other, self)

    def __sub__(self, other):
        return Complex.subtract(self, other)

    def __rsub__(self, other):
        return Complex.subtract(other, self)

    def __mul__(self, other):
        return Complex.multiply(self, other)

    def __rmul__(self, other):
        return Complex.multiply(other, self)

    def __truediv__(self, other):
        return Complex.divide(self, other)

    def __rtruediv__(self, other):
        return Complex.divide(other, self)

    def __pow__(self, other):
        return Complex.raise_(self, other)

    def __rpow__(self, other):
        return Complex.raise_(other, self)

    def __neg__(self):
        return Complex.negate(self)

    def __abs__(self):
        return Complex.abs(self).re

    def __reduce__(self):
        return (Complex, (self.re, self.im))


def _format_part(value: float, precision: int) -> str:
    if np.isnan(value) or np.isinf(value):
        return str(value)
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


ComplexLike = Union[Complex, complex, float, int]

I = Complex(0, 1)
