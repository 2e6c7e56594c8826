"""
Identity registry for loggers, transports and pipes

A Registry scopes ids and pipe edges to one application context. Loggers and
transports are held weakly, so an id becomes free again once its owner is
garbage collected. Pipes are owned by their sender logger and only
looked up here, so a logger and its outgoing pipes are collected together.
"""

from __future__ import annotations
import itertools
import logging
import threading
import weakref
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from pipelogger.routing.pipe import Pipe

if TYPE_CHECKING:
    from pipelogger.core.logger import Logger
    from pipelogger.transports.transport import Transport

logger = logging.getLogger(__name__)


class Registry:
    """
    Process-local registry of ids and pipes.

    Thread Safety:
        All methods are thread-safe for concurrent access.

    Example:
        registry = Registry()
        a = Logger({"console": ConsoleTransport(registry=registry)}, registry=registry)
        b = Logger({}, registry=registry)
        assert registry.get_or_create_pipe(a, b) is registry.get_or_create_pipe(a, b)
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._lock = threading.RLock()
        self._counters: Dict[str, itertools.count] = {}
        self._loggers: "weakref.WeakValueDictionary[str, Logger]" = weakref.WeakValueDictionary()
        self._transports: "weakref.WeakValueDictionary[str, Transport]" = weakref.WeakValueDictionary()
        self._pipes: "weakref.WeakValueDictionary[Tuple[str, str], Pipe]" = (
            weakref.WeakValueDictionary()
        )

    def register_logger(self, instance: "Logger", requested_id: Optional[str] = None) -> str:
        """
        Assign an id to a logger.

        Args:
            instance: Logger being constructed
            requested_id: Caller-supplied id, used only if no live logger has it

        Returns:
            The assigned id
        """
        return self._register(self._loggers, "logger", instance, requested_id)

    def register_transport(self, instance: "Transport", requested_id: Optional[str] = None) -> str:
        """Assign an id to a transport. Same rules as register_logger."""
        return self._register(self._transports, "transport", instance, requested_id)

    def get_logger(self, logger_id: str) -> Optional["Logger"]:
        """Live logger with this id, if any."""
        with self._lock:
            return self._loggers.get(logger_id)

    def get_transport(self, transport_id: str) -> Optional["Transport"]:
        """Live transport with this id, if any."""
        with self._lock:
            return self._transports.get(transport_id)

    def get_or_create_pipe(self, sender: "Logger", receiver: "Logger") -> Pipe:
        """
        Pipe from sender to receiver.

        Returns the existing edge when one is already registered for the
        pair, so there is never more than one pipe per (sender, receiver).
        """
        key = (sender.id, receiver.id)
        with self._lock:
            pipe = self._pipes.get(key)
            if pipe is None:
                pipe = Pipe(sender, receiver, self._next_id("pipe"), registry=self)
                self._pipes[key] = pipe
                logger.debug("Created %s from %s to %s", pipe.id, sender.id, receiver.id)
            return pipe

    def get_pipe(self, sender_id: str, receiver_id: str) -> Optional[Pipe]:
        """Registered pipe for the pair, if any."""
        with self._lock:
            return self._pipes.get((sender_id, receiver_id))

    def discard_pipe(self, pipe: Pipe) -> bool:
        """
        Forget a pipe.

        Returns:
            True if the pipe was registered
        """
        with self._lock:
            for key, registered in list(self._pipes.items()):
                if registered is pipe:
                    del self._pipes[key]
                    return True
            return False

    def pipes(self) -> List[Pipe]:
        """All registered pipes in creation order."""
        with self._lock:
            return list(self._pipes.values())

    def clear(self) -> None:
        """Drop every registration and reset id counters."""
        with self._lock:
            self._counters.clear()
            self._loggers.clear()
            self._transports.clear()
            self._pipes.clear()

    def _register(
        self,
        table: "weakref.WeakValueDictionary[str, Any]",
        kind: str,
        instance: Any,
        requested_id: Optional[str],
    ) -> str:
        with self._lock:
            if requested_id is not None and requested_id not in table:
                table[requested_id] = instance
                return requested_id

            new_id = self._next_id(kind)
            while new_id in table:
                new_id = self._next_id(kind)

            if requested_id is not None:
                logger.warning("%s id %r is taken, using %r", kind, requested_id, new_id)
            table[new_id] = instance
            return new_id

    def _next_id(self, kind: str) -> str:
        counter = self._counters.setdefault(kind, itertools.count())
        return f"{kind}0x{next(counter):x}"

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"Registry(loggers={len(self._loggers)}, "
            f"transports={len(self._transports)}, "
            f"pipes={len(self._pipes)})"
        )


# Used by loggers and transports created without an explicit registry
default_registry = Registry()
