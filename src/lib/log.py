"""
Centralized logging using Loguru with context-aware verbosity.

LOG() respects the verbosity of the ProgramState connected to the current
context. Library callers that never connect a state get no output, so the
parser stays silent when embedded in a chat UI.

Usage:
    from chattags.lib.log import LOG, logger_configure, state_connectToLogger

    logger_configure()          # CLI only; installs the stderr sink
    state_connectToLogger(state)

    LOG("Parsed 3 segments", level=2)
    LOG("Tag at 42..97: <component ...", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <10}</cyan>.<cyan>{function: <20}</cyan> ║ "
    "<level>{message}</level>"
)

# Sink installed by logger_configure(); None until the CLI asks for one
_sink_id: Optional[int] = None


def logger_configure(sink: Any = sys.stderr) -> int:
    """
    Install the chattags log format as the only loguru sink.

    Called by the command line entry point, which owns the process. Library
    callers never call it, so sinks set up by a host application survive
    importing chattags. Repeated calls reuse the installed sink.

    Args:
        sink: Any loguru sink (stream, path, callable)

    Returns:
        The loguru handler id
    """
    global _sink_id
    if _sink_id is None:
        logger.remove()
        _sink_id = logger.add(sink, format=logger_format, level="DEBUG")
    return _sink_id


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Args:
        state: Object with a verbosity attribute (normally ProgramState)
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=trace)
        **kwargs: Additional loguru metadata

    Verbosity levels:
        1 = Normal output (default)
        2 = Verbose (-v)
        3 = Parser trace (-vv or higher)
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)
