from __future__ import annotations

import inspect
import logging
import reprlib
from functools import wraps
from typing import Any, Callable, Iterable, MutableMapping, Optional, Sequence, TypeVar, cast

from .model import Card

F = TypeVar("F", bound=Callable[..., Any])

_repr = reprlib.Repr()
_repr.maxother = 120
_repr.maxstring = 60
_repr.maxlist = 6
_repr.maxdict = 6


def _card_summary(card: Card) -> str:
    return f"Card({card.id!r}, {card.kind}, x={card.x:.1f}, y={card.y:.1f}, v=({card.vx:.3f}, {card.vy:.3f}))"


def safe_repr(value: Any, *, max_items: int = 4, max_length: int = 300) -> str:
    """Compact repr for log lines: card collections are summarised, not dumped."""

    if isinstance(value, Card):
        return _card_summary(value)

    if isinstance(value, (list, tuple)) and value and all(isinstance(item, Card) for item in value):
        head = ", ".join(_card_summary(card) for card in value[:max_items])
        more = f", ... (+{len(value) - max_items})" if len(value) > max_items else ""
        return f"[{len(value)} card(s): {head}{more}]"

    rendered = _repr.repr(value)
    if len(rendered) > max_length:
        return rendered[:max_length] + "... (truncated)"
    return rendered


def _format_arguments(args: Sequence[Any], kwargs: MutableMapping[str, Any]) -> str:
    parts = ["args=[" + ", ".join(safe_repr(arg) for arg in args) + "]"]
    if kwargs:
        parts.append("kwargs={" + ", ".join(f"{k}={safe_repr(v)}" for k, v in kwargs.items()) + "}")
    return ", ".join(parts)


def debug_log_call(
    logger: logging.Logger, *, name: Optional[str] = None, log_result: bool = True
) -> Callable[[F], F]:
    """Return a decorator that logs entry, exit and failures at DEBUG level."""

    def decorator(func: F) -> F:
        qualname = name or func.__qualname__

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any):
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Entering %s (%s)", qualname, _format_arguments(args, kwargs))
            try:
                result = func(*args, **kwargs)
            except Exception:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.exception("Exception in %s", qualname)
                raise
            if logger.isEnabledFor(logging.DEBUG):
                if log_result:
                    logger.debug("Exiting %s -> %s", qualname, safe_repr(result))
                else:
                    logger.debug("Exiting %s", qualname)
            return result

        return cast(F, wrapper)

    return decorator


def apply_debug_logging(
    namespace: MutableMapping[str, Any],
    *,
    logger: logging.Logger,
    skip: Iterable[str] = (),
) -> None:
    """Wrap the public functions and class methods defined in a module namespace."""

    module_name = namespace["__name__"]
    skip_set = set(skip)

    for attr, value in list(namespace.items()):
        if attr.startswith("_") or attr in skip_set:
            continue
        if inspect.isfunction(value) and value.__module__ == module_name:
            namespace[attr] = debug_log_call(logger, name=attr)(value)
        elif inspect.isclass(value) and value.__module__ == module_name:
            for method_name, method in list(vars(value).items()):
                if method_name.startswith("_") or not inspect.isfunction(method):
                    continue
                qualified = f"{value.__name__}.{method_name}"
                setattr(value, method_name, debug_log_call(logger, name=qualified)(method))
