"""Opt-in DEBUG tracing for the growth engine.

``apply_debug_logging(globals(), logger=logger)`` at the bottom of a module
wraps its functions and class methods so that, with DEBUG enabled, every call
logs compact arguments, the result and the time spent. With DEBUG off the
wrapper costs one ``isEnabledFor`` check.
"""

from __future__ import annotations

import inspect
import logging
import reprlib
import time
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Sequence, Set, TypeVar, cast

import numpy as np

from .geometry import Point
from .model import Edge, Node, NodeId

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 120
_repr.maxlist = 6
_repr.maxtuple = 6
_repr.maxset = 6
_repr.maxdict = 6


def _point_repr(point: Point) -> str:
    return f"({point.x:.4g}, {point.y:.4g})"


def _safe_repr(value: Any, *, max_items: int = 4, max_length: int = 240) -> str:
    if isinstance(value, Point):
        return _point_repr(value)
    if isinstance(value, Node):
        return f"{value.id!r}@{_point_repr(value.point)}"
    if isinstance(value, Edge):
        return f"{value.u!r}-{value.v!r}"
    if isinstance(value, NodeId):
        return repr(value)
    if isinstance(value, np.ndarray):
        return f"ndarray(shape={tuple(value.shape)}, dtype={value.dtype})"
    if isinstance(value, (set, frozenset)):
        return f"{type(value).__name__}(<{len(value)} items>)"
    if isinstance(value, (list, tuple)):
        shown = ", ".join(_safe_repr(item) for item in value[:max_items])
        if len(value) > max_items:
            shown += f", ... +{len(value) - max_items}"
        return f"[{shown}]"

    rendered = _repr.repr(value)
    if len(rendered) > max_length:
        return rendered[:max_length] + "..."
    return rendered


def _describe_call(args: Sequence[Any], kwargs: MutableMapping[str, Any]) -> str:
    parts = [_safe_repr(arg) for arg in args]
    parts.extend(f"{key}={_safe_repr(value)}" for key, value in kwargs.items())
    return ", ".join(parts)


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Decorator logging entry, exit (with elapsed milliseconds) and failures at DEBUG."""

    def decorator(func: F) -> F:
        if getattr(func, "_debug_logging_wrapped", False):
            return func

        label = name or getattr(func, "__qualname__", getattr(func, "__name__", "<callable>"))

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)
            logger.debug("-> %s(%s)", label, _describe_call(args, kwargs))
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                logger.exception("!! %s failed", label)
                raise
            elapsed_ms = (time.perf_counter() - started) * 1000.0
            if log_result:
                logger.debug("<- %s = %s [%.2f ms]", label, _safe_repr(result), elapsed_ms)
            else:
                logger.debug("<- %s [%.2f ms]", label, elapsed_ms)
            return result

        setattr(wrapper, "_debug_logging_wrapped", True)
        return cast(F, wrapper)

    return decorator


def _trace_methods(cls: type, logger: logging.Logger, skip: Set[str]) -> None:
    for attr, member in list(vars(cls).items()):
        label = f"{cls.__name__}.{attr}"
        if attr.startswith("__") or attr in skip or label in skip:
            continue
        if inspect.isfunction(member) and member.__module__ == cls.__module__:
            setattr(cls, attr, debug_log_call(logger, name=label)(member))


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: Optional[logging.Logger] = None,
    skip: Optional[Iterable[str]] = None,
) -> None:
    """Trace the module's own functions and plain methods of its own classes.

    ``skip`` holds bare names or ``Class.method`` labels for hot paths.
    """

    module_name = namespace.get("__name__")
    logger = logger or logging.getLogger(str(module_name))
    skip_set: Set[str] = set(skip or ())

    for name, value in list(namespace.items()):
        if name in skip_set or getattr(value, "__module__", None) != module_name:
            continue
        if inspect.isfunction(value):
            namespace[name] = debug_log_call(logger, name=name)(value)
        elif inspect.isclass(value):
            _trace_methods(value, logger, skip_set)


__all__ = ["apply_debug_logging", "debug_log_call"]
