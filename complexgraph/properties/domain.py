import math
import numpy as np
import torch

from typing import Iterator, Optional


DEFAULT_STEP = 0.05


class Domain:
    """
    Sampled real interval the function is evaluated on.

    Bounds may be given in either order and a negative step is taken by its
    absolute value. A zero step falls back to DEFAULT_STEP.
    """

    def __init__(self, minimum: float = -2.0, maximum: float = 2.0, step: float = DEFAULT_STEP):
        minimum, maximum, step = float(minimum), float(maximum), float(step)
        if not (math.isfinite(minimum) and math.isfinite(maximum)):
            raise ValueError(f"Domain bounds must be finite, got [{minimum}, {maximum}].")
        if not math.isfinite(step):
            raise ValueError(f"Domain step must be finite, got {step}.")
        self.begin = min(minimum, maximum)
        self.end = max(minimum, maximum)
        self.step = abs(step) or DEFAULT_STEP

    def __repr__(self):
        return f"Domain({self.begin}, {self.end}, step={self.step})"

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[float]:
        return (float(x) for x in self.samples())

    @property
    def count(self) -> int:
        return int(math.floor((self.end - self.begin) / self.step)) + 1

    def samples(self) -> np.ndarray:
        return self.begin + np.arange(self.count, dtype=np.float64) * self.step

    def to_tensor(self, device: Optional[torch.device] = None) -> torch.Tensor:
        return torch.as_tensor(self.samples(), device=device)
