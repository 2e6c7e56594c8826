"""Console transport"""

import sys
from typing import Any, Optional, TextIO

from pipelogger.core.message import Message
from pipelogger.core.registry import Registry
from pipelogger.transports.transport import WRITE, Transport


class ConsoleTransport(Transport):
    """Write formatted messages to a text stream."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        context: Any = None,
        id: Optional[str] = None,
        registry: Optional[Registry] = None,
    ):
        """
        Initialize console transport.

        Args:
            stream: Output stream (default: sys.stdout, looked up on each write)
            context: Opaque value passed to the write callback
            id: Requested transport id
            registry: Id registry
        """
        super().__init__(context=context, id=id, registry=registry)
        self.stream = stream
        self.set_method(WRITE, self._write)

    def _write(self, msg: Message, context: Any) -> None:
        if msg.muted or msg.content.formatted is None:
            return
        stream = self.stream or sys.stdout
        stream.write(msg.content.formatted)
        stream.flush()

    def flush(self):
        """Flush stream."""
        (self.stream or sys.stdout).flush()
