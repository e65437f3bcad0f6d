"""Complex-valued functions of a real variable, from stack text to 3D curves."""

from .errors import (
    EvalError,
    ParseError,
    StackUnderflow,
    UnknownIdentifier,
    InvalidOperator,
    ResultShapeError,
)
from .logger import LOGGER
from .utils.math import Complex, Polar
from .utils.math.symbolic import (
    Operation,
    Number,
    Identifier,
    Operator,
    Assign,
    XRef,
    Program,
    Parser,
    parse_number,
    parse_line,
    parse_program,
    Interpreter,
    EvaluationStack,
    evaluate,
    evaluate_batch,
    TorchInterpreter,
)
from .properties import (
    GlobalSettings,
    Variable,
    VariableKind,
    VariableRegistry,
    Domain,
    View,
)
from .operators import FunctionPlot
