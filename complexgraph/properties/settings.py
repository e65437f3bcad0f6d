from typing import Optional

from .device import TorchDevice
from .domain import Domain
from .variables import VariableRegistry
from .view import View


class GlobalSettings:
    """Everything the plot operator reads between two evaluation batches."""

    def __init__(
        self,
        domain: Optional[Domain] = None,
        registry: Optional[VariableRegistry] = None,
        view: Optional[View] = None,
        device: str = "cpu",
        batched: bool = False,
        precision: int = 6,
    ):
        self.domain = domain if domain is not None else Domain()
        self.registry = registry if registry is not None else VariableRegistry()
        self.view = view if view is not None else View()
        self.device = TorchDevice(device)
        self.batched = batched
        self.precision = precision
