import pytest

from complexgraph import LOGGER, Parser, VariableRegistry


@pytest.fixture
def registry():
    return VariableRegistry()


@pytest.fixture
def parser():
    return Parser()


@pytest.fixture
def messages():
    """Drains LOGGER the way a UI would and returns (level, text) pairs."""
    LOGGER.clear()
    collected = []

    def drain():
        LOGGER.coalesce(lambda lvl, msg: collected.append((lvl, msg)))
        return collected

    yield drain
    LOGGER.clear()
