from typing import List, Optional, Set

import numpy as np

from ..errors import EvalError, ResultShapeError
from ..logger import LOGGER
from ..properties.settings import GlobalSettings
from ..properties.view import curve_points
from ..utils.math.complex import Complex
from ..utils.math.symbolic import (
    Interpreter,
    Parser,
    Program,
    TorchInterpreter,
    to_complex_lists,
)


class FunctionPlot:
    """
    Keeps the parsed function and the last good results for a renderer.

    A failed parse or evaluation is reported through LOGGER and leaves the
    previous program and results in place.
    """

    def __init__(self, settings: Optional[GlobalSettings] = None):
        self.settings = settings if settings is not None else GlobalSettings()
        self.parser = Parser()
        self.program = Program()
        self.text = ""
        self.samples = np.empty(0)
        self.results: List[List[Complex]] = []

    def set_function(self, text: str) -> Program:
        """Parse text and cache its program. Raises ParseError."""
        program = self.parser.parse(text)
        self.program = program
        self.text = text
        LOGGER.debug(f"Function set, {len(program)} token(s)")
        return program

    def evaluate(self) -> List[List[Complex]]:
        """Run the cached program over the domain. Raises EvalError."""
        domain = self.settings.domain
        samples = domain.samples()
        if self.settings.batched:
            device = self.settings.device.get_device()
            interpreter = TorchInterpreter(self.program, self.settings.registry, device)
            results = to_complex_lists(interpreter.run(domain.to_tensor(device)))
        else:
            results = Interpreter(self.program, self.settings.registry).run_batch(samples)
        self.reconcile(results)
        self.samples = samples
        self.results = results
        return results

    @staticmethod
    def reconcile(results: List[List[Complex]]):
        if not results:
            return
        expected = len(results[0])
        for i, values in enumerate(results):
            if len(values) != expected:
                raise ResultShapeError(expected, len(values), i)

    def execute(self, text: Optional[str] = None) -> Set[str]:
        try:
            if text is not None and text != self.text:
                self.set_function(text)
            self.evaluate()
        except EvalError as e:
            LOGGER.error("Could not plot function", e)
            return {"CANCELLED"}
        LOGGER.info(
            f"Evaluated {len(self.results)} sample(s), "
            f"{self.output_count} curve(s)"
        )
        return {"FINISHED"}

    @property
    def output_count(self) -> int:
        return len(self.results[0]) if self.results else 0

    def curves(self) -> np.ndarray:
        """Points (outputs, samples, 3) as (x, real, imaginary)."""
        return curve_points(self.samples, self.results)

    def project(self, width: float, height: float) -> np.ndarray:
        """Curves in canvas pixels, shape (outputs, samples, 2)."""
        points = self.curves()
        if len(points) == 0:
            return np.empty((0, len(self.samples), 2))
        view = self.settings.view
        return np.stack([view.to_screen(curve, width, height) for curve in points])

    def describe(self, index: int) -> List[str]:
        """Printed values of one sample, rounded to the configured precision."""
        return [v.print(self.settings.precision) for v in self.results[index]]
