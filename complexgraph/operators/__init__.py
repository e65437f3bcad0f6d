from .plot import FunctionPlot
