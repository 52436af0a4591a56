"""
Step-wise trace events for the converter, solver and pipeline.

Each engine owns a ``traceback_info`` list; one event is appended per
scan/stack step:

    PostfixConverter : convert_start, push, pop, bracket, truncate, convert_done
    PostfixSolver    : solve_start, operand, apply, skip, solve_done
"""
import traceback
import time
from typing import Any, Dict, List, Optional


def add_traceback(obj, step: str, info: str, *, with_stack: bool = False) -> None:
    """
    Record *step* on *obj* as ``{engine, step, info, timestamp[, stack]}``.

    ``engine`` is the owner's class name, so merged pipeline traces still
    tell converter events from solver events. Raises AttributeError when
    *obj* keeps no ``traceback_info`` list.
    """
    events = getattr(obj, "traceback_info", None)
    if events is None:
        raise AttributeError(f"{obj!r} has no attribute 'traceback_info'")

    event: Dict[str, Any] = {
        "engine":     type(obj).__name__,
        "step":       step,
        "info":       info,
        "timestamp":  time.time(),
    }
    if with_stack:
        # caller frames only
        event["stack"] = traceback.format_stack()[:-1]
    events.append(event)


def tail(events: List[Any], last: Optional[int] = None) -> List[Any]:
    """All of *events*, or only the final *last* of them (``last=0`` -> [])."""
    if last is None:
        return list(events)
    return list(events[max(len(events) - last, 0):])


def trace_lines(obj, last: Optional[int] = None) -> List[str]:
    """Render ``obj.traceback_info`` as 'step: info' lines."""
    return [f"{e['step']}: {e['info']}" for e in tail(obj.traceback_info, last)]
