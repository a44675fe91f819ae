"""
Shared pytest fixtures for rootseek tests.
"""

import logging

import pytest

from rootseek.logging_config import LOGGER_NAME


class CountingFunction:
    """Wraps a function and records every input it is called with."""

    def __init__(self, f):
        self._f = f
        self.inputs: list[float] = []

    def __call__(self, x: float) -> float:
        self.inputs.append(x)
        return self._f(x)

    @property
    def calls(self) -> int:
        return len(self.inputs)


@pytest.fixture
def counting():
    """Factory wrapping a function in a CountingFunction.

    Example usage:
        def test_single_evaluation(counting):
            f = counting(lambda x: x)
            Solver().solve(f, 0.0)
            assert f.calls == 1
    """
    return CountingFunction


@pytest.fixture(autouse=True)
def reset_rootseek_logging():
    """Reset logging state before and after each test.

    Removes all handlers except NullHandler and resets levels to NOTSET so
    logging configuration from one test cannot leak into another.
    """

    def _reset() -> None:
        logger = logging.getLogger(LOGGER_NAME)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)
        for name in list(logging.root.manager.loggerDict):
            if name.startswith(f"{LOGGER_NAME}."):
                logging.getLogger(name).setLevel(logging.NOTSET)

    _reset()
    yield
    _reset()
