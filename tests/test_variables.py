"""Tests for variables and the registry."""

import math
import pytest

from complexgraph import Complex, Variable, VariableKind, VariableRegistry


class TestRegistry:
    def test_defaults(self, registry):
        assert registry.names() == ["pi", "e"]
        assert registry.resolve("pi") == Complex(math.pi)
        assert registry["e"] == Complex(math.e)

    def test_empty_registry(self):
        assert len(VariableRegistry(defaults=False)) == 0

    def test_missing(self, registry):
        assert registry.resolve("nope") is None
        assert "nope" not in registry
        with pytest.raises(KeyError):
            registry["nope"]

    def test_defaults_can_be_removed_and_reset(self, registry):
        registry.remove("pi")
        assert "pi" not in registry
        registry.reset()
        assert "pi" in registry

    def test_first_match_wins(self, registry, messages):
        registry.add_constant("a", 1)
        registry.add_constant("a", 2)
        assert registry.resolve("a") == Complex(1)
        assert ("WARNING", "Variable 'a' already exists, the new one is shadowed.") in messages()
        registry.remove("a")
        assert registry.resolve("a") == Complex(2)

    def test_set_value(self, registry):
        registry.add_constant("c", 0)
        registry.set_value("c", 1 - 2j)
        assert registry["c"] == Complex(1, -2)
        with pytest.raises(KeyError):
            registry.set_value("missing", 1)

    def test_snapshot_is_first_match(self, registry):
        registry.add_constant("a", 1)
        registry.add_constant("a", 2)
        snap = registry.snapshot()
        assert snap["a"] == Complex(1)
        registry.set_value("a", 5)
        assert snap["a"] == Complex(1)


class TestRangeAndTime:
    def test_range_from_fraction(self, registry):
        var = registry.add_range("k", 0, 10, 0.5)
        assert var.kind == VariableKind.RANGE
        assert registry["k"] == Complex(5)
        registry.set_fraction("k", 0.25)
        assert registry["k"] == Complex(2.5)
        assert var.fraction == pytest.approx(0.25)

    def test_constant_has_no_slider(self):
        var = Variable("c", VariableKind.CONSTANT, 1)
        with pytest.raises(ValueError):
            var.set_fraction(0.5)

    def test_degenerate_range(self):
        var = Variable("r", VariableKind.RANGE, 3, min=3, max=3)
        assert var.fraction == 0.0

    def test_time_wraps(self, registry):
        registry.add_time("t", 0, 1, 0.5)
        seen = []
        for _ in range(4):
            seen.append(registry["t"].re)
            registry.tick()
        assert seen == [0.0, 0.5, 1.0, 0.0]

    def test_tick_ignores_other_kinds(self, registry):
        registry.add_range("k", 0, 1, 0.5)
        registry.tick()
        assert registry["k"] == Complex(0.5)
