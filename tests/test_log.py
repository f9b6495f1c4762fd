"""
Logging tests

Tests that LOG() output follows the connected state's verbosity.
"""

import contextvars

import pytest
from loguru import logger

from wikislides.lib.log import LOG, state_connectToLogger, verbosity_get
from wikislides.models import ProgramState


@pytest.fixture
def captured():
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record), level="TRACE", format="{message}")
    yield messages
    logger.remove(handler_id)


def in_context(fn):
    """Run fn in a fresh context so connected states do not leak between tests"""
    return contextvars.copy_context().run(fn)


class TestLog:
    """Test verbosity gating"""

    def test_silent_without_state(self, captured):
        def run():
            state_connectToLogger(None)
            LOG("nobody listens", level=1)
            return verbosity_get()

        assert in_context(run) == 0
        assert captured == []

    def test_levels(self, captured):
        def run():
            state_connectToLogger(ProgramState(verbosity=2))
            LOG("normal", level=1)
            LOG("verbose", level=2)
            LOG("trace", level=3)

        in_context(run)
        assert [(r["message"], r["level"].name) for r in captured] == [
            ("normal", "INFO"),
            ("verbose", "DEBUG"),
        ]

    def test_braces_kept(self, captured):
        def run():
            state_connectToLogger(ProgramState(verbosity=3))
            LOG(".slide { color: red }", level=3)

        in_context(run)
        assert captured[0]["message"] == ".slide { color: red }"
        assert captured[0]["level"].name == "TRACE"
