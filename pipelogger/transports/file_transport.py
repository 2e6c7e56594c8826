"""File transport"""

from pathlib import Path
from typing import Any, Optional

from pipelogger.core.message import Message
from pipelogger.core.registry import Registry
from pipelogger.formatters.predefined import iso_timestamp
from pipelogger.transports.transport import WRITE, Transport

HEADER = "# File autogenerated by pipelogger [{timestamp}]\n"


class FileTransport(Transport):
    """Append plain-text messages to a file."""

    def __init__(
        self,
        filepath: str,
        context: Any = None,
        encoding: str = "utf-8",
        id: Optional[str] = None,
        registry: Optional[Registry] = None,
    ):
        """
        Initialize file transport.

        The file is truncated and stamped with a creation header.

        Args:
            filepath: Path to log file
            context: Opaque value passed to the write callback
            encoding: File encoding (default: 'utf-8')
            id: Requested transport id
            registry: Id registry
        """
        super().__init__(context=context, id=id, registry=registry)
        self.filepath = Path(filepath)
        self.encoding = encoding
        self._file = None
        self._open()
        self.set_method(WRITE, self._write)

    def _open(self):
        """Create log file and write the header."""
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.filepath, "w", encoding=self.encoding)
        self._file.write(HEADER.format(timestamp=iso_timestamp()))
        self._file.flush()

    def _write(self, msg: Message, context: Any) -> None:
        if msg.muted or self._file is None or msg.content.plain is None:
            return
        self._file.write(msg.content.plain)
        self._file.flush()

    def flush(self):
        """Flush file buffer."""
        if self._file:
            self._file.flush()

    def close(self):
        """Close file."""
        if self._file:
            self._file.close()
            self._file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
