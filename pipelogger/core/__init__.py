"""
Core module for logger system

This module contains the fundamental classes:
- Logger: Main logger class
- LoggerBuilder: Builder pattern for logger construction
- Message: Log message data structure
- LevelSet: Bitmask severity levels
- LoggerConfig: Configuration management
- Registry: Id and pipe registry
"""

from pipelogger.core.logger import Logger
from pipelogger.core.logger_builder import LoggerBuilder
from pipelogger.core.message import Message, MessageContent
from pipelogger.core.levels import LevelSet
from pipelogger.core.logger_config import LoggerConfig
from pipelogger.core.registry import Registry, default_registry

__all__ = [
    "Logger",
    "LoggerBuilder",
    "Message",
    "MessageContent",
    "LevelSet",
    "LoggerConfig",
    "Registry",
    "default_registry",
]
