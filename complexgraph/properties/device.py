import torch

from typing import List, Tuple

from ..logger import LOGGER


def get_torch_devices() -> List[Tuple[str]]:
    """Dynamically list available torch devices."""
    devices = [("cpu", "CPU", "Use the CPU for computation.")]
    if torch.cuda.is_available():
        for i in range(torch.cuda.device_count()):
            name = torch.cuda.get_device_name(i)
            devices.append((f"cuda:{i}", f"GPU", f"GPU {i}: {name}"))
    return devices


class TorchDevice:
    def __init__(self, device: str = "cpu"):
        self.device = device

    def get_device(self) -> torch.device:
        available = [d[0] for d in get_torch_devices()]
        if self.device not in available:
            LOGGER.debug(f"Torch device '{self.device}' unavailable, defaulting to CPU")
            return torch.device("cpu")
        try:
            return torch.device(self.device)
        except RuntimeError as e:
            LOGGER.debug(f"Error getting torch device, defaulting to CPU:\n{e}")
            return torch.device("cpu")
