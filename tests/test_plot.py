"""Tests for the plot operator that drives parsing, evaluation and reporting."""

import numpy as np
import pytest

from complexgraph import (
    Complex,
    Domain,
    FunctionPlot,
    GlobalSettings,
    ResultShapeError,
    View,
)


@pytest.fixture
def settings():
    return GlobalSettings(domain=Domain(0, 1, 0.5), view=View(0, 0, zoom=1))


@pytest.fixture
def plot(settings):
    return FunctionPlot(settings)


class TestExecute:
    def test_finished(self, plot, messages):
        assert plot.execute("x\n2\n*") == {"FINISHED"}
        assert plot.results == [[Complex(0)], [Complex(1)], [Complex(2)]]
        assert plot.output_count == 1
        assert messages()[0][0] == "INFO"

    def test_parse_error_keeps_previous_results(self, plot, messages):
        plot.execute("x")
        program, results = plot.program, plot.results
        assert plot.execute("(x") == {"CANCELLED"}
        assert plot.program is program
        assert plot.results == results
        levels = [lvl for lvl, _ in messages()]
        assert levels[0] == "ERROR"

    def test_eval_error_keeps_previous_results(self, plot, messages):
        plot.execute("x")
        assert plot.execute("x\nfoo") == {"CANCELLED"}
        assert plot.results == [[Complex(0)], [Complex(0.5)], [Complex(1)]]
        assert "unknown identifier 'foo'" in messages()[0][1]

    def test_same_text_is_not_reparsed(self, plot):
        plot.execute("x")
        program = plot.program
        plot.settings.registry.add_constant("k", 1)
        plot.execute("x")
        assert plot.program is program

    def test_variable_change_reevaluates(self, plot):
        plot.settings.registry.add_constant("k", 1)
        plot.execute("x\nk\n+")
        plot.settings.registry.set_value("k", Complex(0, 1))
        plot.execute()
        assert plot.results[2] == [Complex(1, 1)]

    def test_batched_backend_matches(self, settings):
        text = "x\n=a\na\nsin\na\ni\n*\nexp"
        scalar = FunctionPlot(settings)
        scalar.execute(text)
        settings_batched = GlobalSettings(domain=settings.domain, batched=True)
        batched = FunctionPlot(settings_batched)
        assert batched.execute(text) == {"FINISHED"}
        for got, want in zip(batched.results, scalar.results):
            assert all(g.isclose(w) for g, w in zip(got, want))


class TestOutputs:
    def test_reconcile(self):
        FunctionPlot.reconcile([[Complex(1)], [Complex(2)]])
        with pytest.raises(ResultShapeError) as exc:
            FunctionPlot.reconcile([[Complex(1)], [Complex(1), Complex(2)]])
        assert (exc.value.expected, exc.value.found, exc.value.index) == (1, 2, 1)

    def test_curves_and_projection(self, plot):
        plot.execute("x\nx\ni\n*")
        curves = plot.curves()
        assert curves.shape == (2, 3, 3)
        assert np.allclose(curves[1][:, 2], [0, 0.5, 1])
        screen = plot.project(200, 100)
        assert screen.shape == (2, 3, 2)
        assert np.allclose(screen[0][0], [100, 50])

    def test_describe(self, plot):
        plot.settings.precision = 2
        plot.execute("x\n3\n/\nx\ni\n*")
        assert plot.describe(1) == ["0.17 + 0i", "0 + 0.5i"]
