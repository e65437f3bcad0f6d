import math
import numpy as np

from typing import Iterable, List, Sequence

from ..utils.math.complex import Complex


class View:
    """
    Camera looking at the (x, real, imaginary) space.

    Longitude turns around the real axis, latitude tilts the view up or down,
    both in degrees. Zoom is the number of pixels per unit.
    """

    def __init__(
        self,
        longitude: float = 40.0,
        latitude: float = 30.0,
        offset: Sequence[float] = (0.0, 0.0, 0.0),
        zoom: float = 100.0,
    ):
        self.longitude = float(longitude)
        self.latitude = float(latitude)
        self.offset = np.asarray(offset, dtype=np.float64)
        self.zoom = float(zoom)

    def project(self, points) -> np.ndarray:
        """Map (n, 3) points to (n, 2) offsets from the canvas centre."""
        p = np.atleast_2d(np.asarray(points, dtype=np.float64)) - self.offset
        lon = math.radians(self.longitude)
        lat = math.radians(self.latitude)

        x = p[:, 0] * math.cos(lon) - p[:, 2] * math.sin(lon)
        y = (
            p[:, 1] * math.cos(lat)
            - math.sin(lat) * math.sin(lon) * p[:, 0]
            - math.sin(lat) * math.cos(lon) * p[:, 2]
        )
        return np.stack([x, y], axis=-1) * self.zoom

    def to_screen(self, points, width: float, height: float) -> np.ndarray:
        """Project and move to canvas pixels, y growing downwards."""
        flat = self.project(points)
        return np.stack([flat[:, 0] + width * 0.5, height * 0.5 - flat[:, 1]], axis=-1)

    def rotate(self, dx: float, dy: float):
        """Drag by (dx, dy) pixels, half a degree per pixel."""
        self.longitude -= dx * 0.5
        self.latitude += dy * 0.5

    def zoom_wheel(self, delta_y: float):
        self.zoom = 10 ** (math.log10(self.zoom) - delta_y * 0.001)

    def pinch(self, start_zoom: float, distance_ratio: float):
        self.zoom = start_zoom * distance_ratio


def curve_points(samples: Iterable[float], results: List[List[Complex]]) -> np.ndarray:
    """
    Stack evaluation results into (outputs, samples, 3) points (x, re, im).
    Every sample must produce the same number of values.
    """
    xs = np.asarray(list(samples), dtype=np.float64)
    if len(results) != len(xs):
        raise ValueError(f"Got {len(results)} results for {len(xs)} samples.")
    outputs = len(results[0]) if results else 0
    points = np.empty((outputs, len(xs), 3), dtype=np.float64)
    for i, (x, values) in enumerate(zip(xs, results)):
        if len(values) != outputs:
            raise ValueError(f"Sample {i} has {len(values)} values, expected {outputs}.")
        for j, value in enumerate(values):
            points[j, i] = (x, value.re, value.im)
    return points
