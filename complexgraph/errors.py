"""Typed failures raised while parsing or evaluating a function text."""


class EvalError(Exception):
    """Base exception for function parsing and evaluation errors."""

    pass


class ParseError(EvalError):
    """Raised when a line of function text cannot be tokenized."""

    def __init__(self, line: int, column: int, reason: str):
        self.line = line
        self.column = column
        self.reason = reason
        super().__init__(f"line {line}, column {column}: {reason}")


class StackUnderflow(EvalError):
    """Raised when an operator or assignment finds too few values."""

    def __init__(self, line: int, needed: int = 1, available: int = 0):
        self.line = line
        self.needed = needed
        self.available = available
        super().__init__(
            f"line {line}: needs {needed} value(s) on the stack, found {available}"
        )


class UnknownIdentifier(EvalError):
    def __init__(self, name: str, line: int = 0):
        self.name = name
        self.line = line
        super().__init__(f"line {line}: unknown identifier '{name}'")


class InvalidOperator(EvalError):
    def __init__(self, symbol):
        self.symbol = symbol
        super().__init__(f"'{symbol}' is not a valid operator")


class ResultShapeError(EvalError):
    """Raised when samples of one function disagree on their output count."""

    def __init__(self, expected: int, found: int, index: int):
        self.expected = expected
        self.found = found
        self.index = index
        super().__init__(
            f"sample {index} produced {found} value(s), expected {expected}"
        )
