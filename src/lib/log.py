"""
Verbosity-gated logging on top of Loguru.

The CLI pipeline connects its ProgramState once; from then on every LOG()
call anywhere in wikislides is shown only if the state's verbosity
reaches the message level. Library use without a connected state
(embedding SlideShow in another program) stays silent.

    state_connectToLogger(state)            # verbosity 2 (-v)
    LOG("Loaded 12 slides", level=1)        # shown, INFO
    LOG("Slide heading: Intro", level=2)    # shown, DEBUG
    LOG("Absorbed TextNode", level=3)       # hidden, TRACE
"""

from loguru import logger
from typing import Any, Dict, Optional
from contextvars import ContextVar
import sys

_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

# Message level -> loguru level name
LEVEL_NAMES: Dict[int, str] = {
    1: "INFO",
    2: "DEBUG",
    3: "TRACE",
}

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <12}</cyan> "
    "<cyan>{function: <20}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="TRACE")


def state_connectToLogger(state: Any) -> None:
    """
    Make a ProgramState's verbosity govern LOG() in the current context.

    Args:
        state: Object with a verbosity attribute (ProgramState)
    """
    _program_state.set(state)


def verbosity_get() -> int:
    """Verbosity of the connected state, 0 when none is connected"""
    state = _program_state.get()
    if state is None:
        return 0
    return getattr(state, 'verbosity', 0)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the connected state's verbosity allows.

    Args:
        message: Log message to display
        level: 1 normal, 2 verbose (-v), 3 trace (-vv and more)
        **kwargs: Formatting arguments passed on to loguru
    """
    if verbosity_get() < level:
        return
    name = LEVEL_NAMES.get(min(max(level, 1), 3), "INFO")
    logger.opt(depth=1).log(name, message, **kwargs)
