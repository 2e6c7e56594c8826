"""
Predefined template values

A predefined value backs a ``%name`` placeholder. It is either a literal
or computed from the message being rendered.
"""

import inspect
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Union

from pipelogger.core.message import Message

Converter = Callable[[Any], str]


@dataclass(frozen=True)
class Literal:
    """Fixed placeholder value."""

    value: Any

    def resolve(self, message: Message, convert: Converter) -> str:
        """Convert the stored value to its string form."""
        return convert(self.value)


@dataclass(frozen=True)
class Computed:
    """
    Placeholder value produced at render time.

    The producer may take no arguments or one argument, the message.
    Only a required positional parameter (or ``*args``) receives the
    message; optional parameters keep their defaults.

    Example:
        Computed(lambda: datetime.now().isoformat())
        Computed(lambda msg: msg.source_logger)
    """

    fn: Callable[..., Any]
    takes_message: bool = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not callable(self.fn):
            raise TypeError("fn must be callable")
        object.__setattr__(self, "takes_message", _accepts_argument(self.fn))

    def resolve(self, message: Message, convert: Converter) -> str:
        """Call the producer and convert its result."""
        result = self.fn(message) if self.takes_message else self.fn()
        return convert(result)


PredefinedValue = Union[Literal, Computed]


def as_predefined(value: Any) -> PredefinedValue:
    """
    Wrap a raw value.

    Callables become Computed, everything else Literal. Values that are
    already wrapped are returned unchanged.
    """
    if isinstance(value, (Literal, Computed)):
        return value
    if callable(value):
        return Computed(value)
    return Literal(value)


def placeholder_key(name: str) -> str:
    """Template token for a value name ("date" -> "%date")."""
    return name if name.startswith("%") else "%" + name


def resolve_all(
    values: Mapping[str, Any],
    message: Message,
    convert: Converter,
) -> dict:
    """Resolve every value to a string keyed by its template token."""
    return {
        placeholder_key(name): as_predefined(value).resolve(message, convert)
        for name, value in values.items()
    }


def _accepts_argument(fn: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures are called bare
        return False

    for param in signature.parameters.values():
        if param.kind == inspect.Parameter.VAR_POSITIONAL:
            return True
        if (
            param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
            and param.default is inspect.Parameter.empty
        ):
            return True
    return False


def iso_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
