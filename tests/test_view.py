"""Tests for projecting curves onto the canvas."""

import numpy as np
import pytest

from complexgraph import Complex, View
from complexgraph.properties import curve_points


class TestView:
    def test_front_view(self):
        view = View(longitude=0, latitude=0, zoom=1)
        assert np.allclose(view.project([[1, 2, 3]]), [[1, 2]])

    def test_quarter_turn(self):
        view = View(longitude=90, latitude=0, zoom=1)
        assert np.allclose(view.project([[1, 2, 3]]), [[-3, 2]])

    def test_tilt(self):
        view = View(longitude=0, latitude=90, zoom=1)
        assert np.allclose(view.project([[1, 2, 3]]), [[1, -3]])

    def test_offset_and_zoom(self):
        view = View(longitude=0, latitude=0, offset=(1, 1, 0), zoom=10)
        assert np.allclose(view.project([[1, 2, 0]]), [[0, 10]])

    def test_to_screen_centres_and_flips(self):
        view = View(longitude=0, latitude=0, zoom=1)
        assert np.allclose(view.to_screen([[0, 0, 0], [10, 5, 0]], 200, 100), [[100, 50], [110, 45]])

    def test_rotate(self):
        view = View()
        view.rotate(10, -4)
        assert (view.longitude, view.latitude) == (35, 28)

    def test_zoom_wheel(self):
        view = View(zoom=100)
        view.zoom_wheel(1000)
        assert view.zoom == pytest.approx(10)
        view.zoom_wheel(-2000)
        assert view.zoom == pytest.approx(1000)

    def test_pinch(self):
        view = View()
        view.pinch(50, 1.5)
        assert view.zoom == 75


class TestCurvePoints:
    def test_shape(self):
        results = [[Complex(0, 1), Complex(2)], [Complex(1, -1), Complex(3)]]
        points = curve_points([0.0, 0.5], results)
        assert points.shape == (2, 2, 3)
        assert np.allclose(points[0], [[0, 0, 1], [0.5, 1, -1]])
        assert np.allclose(points[1], [[0, 2, 0], [0.5, 3, 0]])

    def test_inconsistent_lengths(self):
        with pytest.raises(ValueError):
            curve_points([0, 1], [[Complex(1)], []])

    def test_sample_count_mismatch(self):
        with pytest.raises(ValueError):
            curve_points([0, 1, 2], [[Complex(1)]])
