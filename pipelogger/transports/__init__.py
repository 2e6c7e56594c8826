"""Transports module - Log output sinks"""

from pipelogger.transports.transport import Transport, WRITE
from pipelogger.transports.console_transport import ConsoleTransport
from pipelogger.transports.file_transport import FileTransport

__all__ = ["Transport", "WRITE", "ConsoleTransport", "FileTransport"]
