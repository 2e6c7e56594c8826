"""
Main Logger class

Formats messages from a template, tags them against a bitmask level filter
and fans them out to pipes and transports. Everything runs synchronously in
the calling thread.
"""

from __future__ import annotations
import copy
import dataclasses
import logging
import threading
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple, Union

from pipelogger.core.levels import ALL, LevelSet
from pipelogger.core.logger_config import DEFAULT_FORMAT, LoggerConfig, as_level_args
from pipelogger.core.message import Message, MessageContent
from pipelogger.core.registry import Registry, default_registry
from pipelogger.formatters.predefined import (
    Computed,
    PredefinedValue,
    as_predefined,
    iso_timestamp,
)
from pipelogger.formatters.reducer import default_reducer
from pipelogger.formatters.template_formatter import TemplateFormatter, build_values
from pipelogger.routing.pipe import Pipe

if TYPE_CHECKING:
    from pipelogger.transports.transport import Transport

logger = logging.getLogger(__name__)


def _value_name(key: str) -> str:
    return key[1:] if key.startswith("%") else key


class Logger:
    """
    Logger with template formatting and logger-to-logger pipes.

    Example:
        logger = Logger({"console": ConsoleTransport()})
        logger.set_format("%symbol %msg")
        logger.info("server started on port", 8080)
        logger.set_level("WARNING", "ERROR")
        logger.info("dropped")    # muted: INFO is not in the filter
    """

    DEFAULT_FORMAT = DEFAULT_FORMAT

    def __init__(
        self,
        transports: Mapping[str, "Transport"],
        config: Optional[LoggerConfig] = None,
        registry: Optional[Registry] = None,
    ):
        """
        Initialize logger.

        Args:
            transports: Transport key to transport
            config: Logger configuration (default: LoggerConfig.default())
            registry: Id and pipe registry (default: the process-wide registry)
        """
        if transports is None:
            raise TypeError("transports mapping is required")

        self._config = config or LoggerConfig.default()
        self._registry = registry or default_registry
        self._lock = threading.RLock()

        self.levels = LevelSet(custom=self._config.custom_levels)
        self._format = self._config.format or DEFAULT_FORMAT
        self._level: Optional[int] = None
        self._muted = False

        self._reducer = self._config.reducer or default_reducer
        self._join_char = self._config.join_char
        self._formatter = self._config.formatter or TemplateFormatter(
            colored=self._config.colored_output
        )

        self._transports: Dict[str, "Transport"] = dict(transports)
        self._pipes: List[Pipe] = []

        self._builtin_values: Dict[str, PredefinedValue] = {
            "date": Computed(iso_timestamp),
            "symbol": Computed(self._symbol),
        }
        self._predefined_values: Dict[str, PredefinedValue] = dict(self._builtin_values)
        for key, value in self._config.predefined_values.items():
            self.set_predefined_value(key, value)

        self._id = self._registry.register_logger(self, self._config.id)
        self.set_level(*self._config.level_spec())

    @property
    def id(self) -> str:
        """Logger id, unique within its registry."""
        return self._id

    @property
    def registry(self) -> Registry:
        return self._registry

    # helpers

    def convert_to_string(self, segments: Any, join_char: Optional[str] = None) -> str:
        """
        Join log arguments into one line with the logger's reducer.

        Args:
            segments: A list/tuple of segments, or a single bare value
            join_char: Separator override for this call
        """
        if not isinstance(segments, (list, tuple)):
            segments = [segments]
        return self._reducer(list(segments), self._join_char if join_char is None else join_char)

    def format_message(
        self,
        msg: Message,
        fmt: Optional[str] = None,
        local_values: Optional[Mapping[str, Any]] = None,
        join_char: Optional[str] = None,
    ) -> str:
        """
        Render msg with a template.

        Args:
            msg: Message to render
            fmt: Template (default: the logger's format)
            local_values: Per-call predefined values, override the logger's
            join_char: Separator used to convert predefined values

        Returns:
            Display string, without the end-of-line
        """
        with self._lock:
            persistent = dict(self._predefined_values)
            template = fmt or self._format

        values = build_values(
            msg.content.joined_segments,
            persistent,
            local_values,
            msg,
            lambda value: self.convert_to_string(value, join_char),
        )
        return self._formatter.render(template, values)

    # core logic

    def emit(
        self,
        segments: Any,
        level: Union[None, int, str] = None,
        endl: bool = True,
        format: Optional[str] = None,
        predefined_values: Optional[Mapping[str, Any]] = None,
        join_char: Optional[str] = None,
    ) -> "Logger":
        """
        Build a message from segments and dispatch it.

        Args:
            segments: Log arguments (a bare value is wrapped)
            level: Level mask or name (default: INFO)
            endl: Append a newline to the formatted text
            format: Template override for this message
            predefined_values: Placeholder values for this message only
            join_char: Separator override for this message

        Returns:
            Self for method chaining
        """
        if not isinstance(segments, (list, tuple)):
            segments = [segments]
        segments = list(segments)

        if level is None:
            level = self.levels.get("INFO")
        elif isinstance(level, str):
            level = self.levels.get(level)

        msg = Message(
            content=MessageContent(
                passed_segments=segments,
                joined_segments=self.convert_to_string(segments, join_char),
            ),
            level=level,
            source_logger=self._id,
            endl=endl,
            format=format or self._format,
            predefined_values=dict(predefined_values or {}),
        )

        if msg.format:
            formatted = self.format_message(msg, msg.format, msg.predefined_values, join_char)
            if endl:
                formatted += "\n"
            msg.content.formatted = formatted
            msg.content.plain = self._formatter.strip(formatted)

        return self.post_message(msg)

    def log(self, *segments: Any) -> "Logger":
        """Alias of info."""
        return self.info(*segments)

    def info(self, *segments: Any) -> "Logger":
        """Log info message."""
        return self.emit(segments, level=self.levels.get("INFO"))

    def success(self, *segments: Any) -> "Logger":
        """Log success message."""
        return self.emit(segments, level=self.levels.get("SUCCESS"))

    def warn(self, *segments: Any) -> "Logger":
        """Log warning message."""
        return self.emit(segments, level=self.levels.get("WARNING"))

    warning = warn

    def error(self, *segments: Any) -> "Logger":
        """Log error message."""
        return self.emit(segments, level=self.levels.get("ERROR"))

    def post_message(self, msg: Message) -> "Logger":
        """
        Tag msg against the level filter and fan it out.

        A message outside the filter, or any message while the logger is
        muted, is marked muted. An already muted message stays muted. Every
        pipe gets its own copy in attach order; transports share msg and are
        called in registration order.
        """
        if not (msg.level & self.get_level()) or self._muted:
            msg.muted = True

        with self._lock:
            pipes = list(self._pipes)
            transports = list(self._transports.values())

        for pipe in pipes:
            pipe.write(msg.clone())
        for transport in transports:
            transport.post(msg)
        return self

    # copy

    def create_copy(self, **overrides: Any) -> "Logger":
        """
        Create a logger derived from this one.

        The copy shares the reducer and (unless ``transports`` is given) the
        transports, inherits format, level, levels and predefined values, and
        gets a muted pipe into this logger. Unmute that pipe to let the
        origin see what the copy logs.

        Args:
            overrides: ``transports``, ``registry`` or any LoggerConfig field
        """
        transports = overrides.pop("transports", None)
        registry = overrides.pop("registry", self._registry)

        with self._lock:
            if transports is None:
                transports = dict(self._transports)
            inherited_values = {
                key: copy.copy(value)
                for key, value in self._predefined_values.items()
                if value is not self._builtin_values.get(key)
            }
            inherited_values.update(overrides.pop("predefined_values", {}))

            fields: Dict[str, Any] = {
                "id": None,
                "format": self._format,
                "log_level": self._level,
                "reducer": self._reducer,
                "join_char": self._join_char,
            }
            fields.update(overrides)
            fields["predefined_values"] = inherited_values
            config = dataclasses.replace(self._config, **fields)

        clone = Logger(transports, config, registry)
        clone.levels = self.levels.copy()
        for name in config.custom_levels:
            clone.levels.add(name)
        clone.set_level(*config.level_spec())

        clone.pipe(self).mute()
        return clone

    # pipes

    def pipe(self, receiver: "Logger") -> Pipe:
        """
        Forward this logger's messages to receiver.

        Piping to the same receiver again returns the existing pipe.
        Pipes must not form a cycle (a -> b -> a): forwarding is
        synchronous, so a cycle recurses until RecursionError.
        """
        pipe = self._registry.get_or_create_pipe(self, receiver)
        with self._lock:
            if pipe not in self._pipes:
                self._pipes.append(pipe)
        return pipe

    def get_pipes(self) -> List[Pipe]:
        with self._lock:
            return list(self._pipes)

    def get_pipe(self, pipe_id: str) -> Optional[Pipe]:
        with self._lock:
            for pipe in self._pipes:
                if pipe.id == pipe_id:
                    return pipe
            return None

    def remove_pipe(self, pipe_id: str) -> Optional[Pipe]:
        """
        Detach an outgoing pipe without destroying it.

        Returns:
            The detached pipe, or None if no pipe has this id
        """
        with self._lock:
            for i, pipe in enumerate(self._pipes):
                if pipe.id == pipe_id:
                    return self._pipes.pop(i)
            return None

    # format

    def set_format(self, fmt: Optional[str] = None) -> "Logger":
        """Set the template; an empty value restores DEFAULT_FORMAT."""
        with self._lock:
            self._format = fmt or DEFAULT_FORMAT
        return self

    def get_format(self) -> str:
        return self._format

    # level

    def set_level(self, *levels: Union[int, str]) -> "Logger":
        """
        Set the acceptance filter.

        The filter is an exact mask, not a threshold: a message is accepted
        when it shares at least one bit with it. Masks and level names can be
        mixed. Passing "ALL" makes the filter follow levels added later.

        Example:
            logger.set_level("INFO", "ERROR")
            logger.set_level(logger.levels.get("WARNING") | 0b1)
        """
        if any(isinstance(level, str) and level.upper() == ALL for level in levels):
            mask = None
        else:
            mask = 0
            for level in levels:
                mask |= self.levels.get(level) if isinstance(level, str) else int(level)

        with self._lock:
            self._level = mask
        return self

    def get_level(self) -> int:
        level = self._level
        return self.levels.get(ALL) if level is None else level

    # transports

    def add_transport(self, key: str, transport: "Transport") -> "Logger":
        """
        Register a transport under key.

        Raises:
            ValueError: If key is already registered
        """
        with self._lock:
            if key in self._transports:
                raise ValueError(f"Transport '{key}' is already registered")
            self._transports[key] = transport
        logger.debug("%s: added transport %r", self._id, key)
        return self

    def get_transports(self) -> List[Tuple[str, "Transport"]]:
        """(key, transport) pairs in registration order."""
        with self._lock:
            return list(self._transports.items())

    def get_transport(self, key: str) -> Optional["Transport"]:
        with self._lock:
            return self._transports.get(key)

    def remove_transport(self, key: str) -> "Logger":
        with self._lock:
            self._transports.pop(key, None)
        return self

    # muting messages

    def mute_messages(self) -> "Logger":
        self._muted = True
        return self

    def unmute_messages(self) -> "Logger":
        self._muted = False
        return self

    def is_muted(self) -> bool:
        return self._muted

    # predefined values

    def set_predefined_value(self, key: str, value: Any) -> "Logger":
        """
        Bind a template placeholder.

        Args:
            key: Placeholder name, with or without the leading "%"
            value: Literal value, or a callable taking nothing or the message
        """
        with self._lock:
            self._predefined_values[_value_name(key)] = as_predefined(value)
        return self

    def get_predefined_value(self, key: str) -> Optional[PredefinedValue]:
        with self._lock:
            return self._predefined_values.get(_value_name(key))

    def remove_predefined_value(self, key: str) -> "Logger":
        with self._lock:
            self._predefined_values.pop(_value_name(key), None)
        return self

    def _symbol(self, msg: Message) -> str:
        name = self.levels.name_of(msg.level)
        return f"[{name}]" if name else ""

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"Logger(id={self._id!r}, "
            f"level={self.get_level()}, "
            f"transports={list(self._transports)}, "
            f"pipes={len(self._pipes)})"
        )
