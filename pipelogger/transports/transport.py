"""
Transport - addressable output sink

A transport owns callbacks keyed by operation name. The logger only ever
calls ``post``; the bound "write" callback decides what a physical write is
and is expected to skip muted messages.
"""

from typing import Any, Callable, Dict, Optional

from pipelogger.core.message import Message
from pipelogger.core.registry import Registry, default_registry

WRITE = "write"

TransportMethod = Callable[[Message, Any], Any]


class Transport:
    """
    Output sink bound to loggers by key.

    Example:
        received = []
        transport = Transport(context={"name": "memory"})
        transport.set_method("write", lambda msg, ctx: received.append(msg))
        logger = Logger({"memory": transport})
    """

    def __init__(
        self,
        context: Any = None,
        id: Optional[str] = None,
        registry: Optional[Registry] = None,
    ):
        """
        Initialize transport.

        Args:
            context: Opaque value passed to every callback invocation
            id: Requested transport id (regenerated if already in use)
            registry: Id registry (default: the process-wide registry)
        """
        self.context = context
        self._methods: Dict[str, TransportMethod] = {}
        self._enabled = True
        self._registry = registry or default_registry
        self.id = self._registry.register_transport(self, id)

    def post(self, msg: Message) -> bool:
        """
        Deliver a message to the write callback.

        Returns:
            True if a write callback was invoked, False if the transport is
            disabled or has no write callback
        """
        if not self._enabled:
            return False
        callback = self._methods.get(WRITE)
        if callback is None:
            return False
        callback(msg, self.context)
        return True

    def set_method(self, key: str, callback: TransportMethod, force: bool = False) -> bool:
        """
        Bind a callback to an operation key.

        Args:
            key: Operation key ("write")
            callback: Function called as callback(msg, context)
            force: Replace an existing binding

        Returns:
            True if the callback was bound, False if the key was taken
        """
        if not callable(callback):
            raise TypeError("callback must be callable")
        if key in self._methods and not force:
            return False
        self._methods[key] = callback
        return True

    def remove_method(self, key: str) -> bool:
        """Unbind a callback. Returns True if one was bound."""
        return self._methods.pop(key, None) is not None

    def has_method(self, key: str) -> bool:
        return key in self._methods

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    @property
    def enabled(self) -> bool:
        return self._enabled

    def __repr__(self) -> str:
        """String representation."""
        return f"{type(self).__name__}(id={self.id!r}, enabled={self._enabled})"
