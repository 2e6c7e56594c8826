"""
Pipe - directed forwarding edge between two loggers

Pipes are created through Registry.get_or_create_pipe (or Logger.pipe), which
guarantees a single pipe per (sender, receiver) pair.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Optional

from pipelogger.core.message import Message

if TYPE_CHECKING:
    from pipelogger.core.logger import Logger
    from pipelogger.core.registry import Registry

logger = logging.getLogger(__name__)


class PipeDestroyedError(RuntimeError):
    """Raised when a destroyed pipe is used."""


class Pipe:
    """
    Forwards messages processed by the sender to the receiver.

    Two independent switches decide the ``muted`` flag of a forwarded message:

    - ``mute()``: every message leaving this pipe is muted. Always wins.
    - ``enable_unmuting_messages()``: a message muted upstream (for example
      rejected by the sender's level filter) is unmuted before delivery.

    Example:
        pipe = app_logger.pipe(audit_logger)
        pipe.enable_unmuting_messages()   # audit sees everything
        pipe.mute()                       # audit sees nothing
    """

    def __init__(
        self,
        sender: "Logger",
        receiver: "Logger",
        pipe_id: str,
        registry: Optional["Registry"] = None,
    ):
        """
        Initialize pipe.

        Args:
            sender: Logger whose messages are forwarded
            receiver: Logger receiving the forwarded messages
            pipe_id: Unique pipe id
            registry: Registry the pipe is recorded in
        """
        self.sender: Optional["Logger"] = sender
        self.receiver: Optional["Logger"] = receiver
        self._id = pipe_id
        self._registry = registry
        self._muted = False
        self._unmuting_messages = False
        self._destroyed = False

    @property
    def id(self) -> str:
        """Pipe id."""
        return self._id

    def write(self, msg: Message) -> None:
        """
        Resolve the mute flag of msg and hand it to the receiver.

        Args:
            msg: The pipe's own copy of the message
        """
        self._ensure_active()
        if self._muted:
            msg.muted = True
        elif msg.muted and self._unmuting_messages:
            msg.muted = False
        self.receiver.post_message(msg)

    def mute(self) -> "Pipe":
        self._ensure_active()
        self._muted = True
        return self

    def unmute(self) -> "Pipe":
        self._ensure_active()
        self._muted = False
        return self

    def enable_unmuting_messages(self) -> "Pipe":
        self._ensure_active()
        self._unmuting_messages = True
        return self

    def disable_unmuting_messages(self) -> "Pipe":
        self._ensure_active()
        self._unmuting_messages = False
        return self

    def is_muted(self) -> bool:
        return self._muted

    def does_unmute_messages(self) -> bool:
        return self._unmuting_messages

    def is_destroyed(self) -> bool:
        return self._destroyed

    def destroy(self) -> "Pipe":
        """
        Detach the pipe from its sender and registry.

        Both endpoint references are cleared; the pipe cannot be used
        afterwards.

        Returns:
            The destroyed pipe
        """
        self._ensure_active()
        self.sender.remove_pipe(self._id)
        if self._registry is not None:
            self._registry.discard_pipe(self)

        logger.debug("Destroyed %s", self._id)
        self.sender = None
        self.receiver = None
        self._destroyed = True
        return self

    def _ensure_active(self) -> None:
        if self._destroyed:
            raise PipeDestroyedError(f"Pipe '{self._id}' has been destroyed")

    def __repr__(self) -> str:
        """String representation."""
        if self._destroyed:
            return f"Pipe(id={self._id!r}, destroyed)"
        return (
            f"Pipe(id={self._id!r}, "
            f"sender={self.sender.id!r}, "
            f"receiver={self.receiver.id!r}, "
            f"muted={self._muted}, "
            f"unmuting={self._unmuting_messages})"
        )
