from .tokens import (
    Operation,
    Token,
    Number,
    Identifier,
    Operator,
    Assign,
    XRef,
    Program,
)
from .parser import Parser, parse_number, parse_line, parse_program, is_number
from .interpreter import EvaluationStack, Interpreter, evaluate, evaluate_batch
from .torch_interpreter import TorchInterpreter, to_complex_lists
