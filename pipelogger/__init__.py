"""
BSD 3-Clause License

Copyright (c) 2021, 🍀☀🌕🌥 🌊
All rights reserved.

Python Pipe Logger - Multi-destination logging with template formatting,
bitmask levels and logger-to-logger pipes
"""

__version__ = "1.0.0"
__author__ = "kcenon"
__email__ = "kcenon@naver.com"

from pipelogger.core.logger import Logger
from pipelogger.core.logger_builder import LoggerBuilder
from pipelogger.core.message import Message
from pipelogger.core.levels import LevelSet
from pipelogger.core.logger_config import LoggerConfig
from pipelogger.core.registry import Registry
from pipelogger.routing.pipe import Pipe, PipeDestroyedError
from pipelogger.transports import Transport, ConsoleTransport, FileTransport

# Import submodules (not all classes by default)
from pipelogger import formatters
from pipelogger import transports

__all__ = [
    "Logger",
    "LoggerBuilder",
    "Message",
    "LevelSet",
    "LoggerConfig",
    "Registry",
    "Pipe",
    "PipeDestroyedError",
    "Transport",
    "ConsoleTransport",
    "FileTransport",
    "formatters",
    "transports",
]
