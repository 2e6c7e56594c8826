"""Logger builder pattern"""

import dataclasses
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union

from pipelogger.core.logger import Logger
from pipelogger.core.logger_config import LoggerConfig
from pipelogger.core.registry import Registry, default_registry
from pipelogger.formatters.base_formatter import BaseFormatter
from pipelogger.formatters.reducer import Reducer
from pipelogger.transports.console_transport import ConsoleTransport
from pipelogger.transports.file_transport import FileTransport
from pipelogger.transports.transport import Transport

CONSOLE_KEY = "console"
FILE_KEY = "file"


class LoggerBuilder:
    """Builder pattern for logger construction."""

    def __init__(self, config: Optional[LoggerConfig] = None):
        self._config = config or LoggerConfig()
        self._console_enabled = False
        self._console_stream: Optional[TextIO] = None
        self._file_path: Optional[Path] = None
        self._custom_transports: Dict[str, Transport] = {}
        self._registry: Optional[Registry] = None

    def with_id(self, logger_id: str) -> "LoggerBuilder":
        """Request a logger id."""
        self._config.id = logger_id
        return self

    def with_format(self, fmt: str) -> "LoggerBuilder":
        """Set format template."""
        self._config.format = fmt
        return self

    def with_level(self, *levels: Union[int, str]) -> "LoggerBuilder":
        """
        Set the acceptance filter.

        Example:
            LoggerBuilder().with_level("WARNING", "ERROR")
        """
        self._config.log_level = levels
        return self

    def with_custom_levels(self, *names: str) -> "LoggerBuilder":
        """Register extra levels after the defaults."""
        self._config.custom_levels.extend(names)
        return self

    def with_console(self, colored: bool = True, stream: Optional[TextIO] = None) -> "LoggerBuilder":
        """Enable console output."""
        self._console_enabled = True
        self._console_stream = stream
        self._config.colored_output = colored
        return self

    def with_file(self, filepath: str) -> "LoggerBuilder":
        """Enable file output."""
        self._file_path = Path(filepath)
        return self

    def add_transport(self, key: str, transport: Transport) -> "LoggerBuilder":
        """
        Add a custom transport.

        Raises:
            ValueError: If key is already used by another custom transport
        """
        if key in self._custom_transports:
            raise ValueError(f"Transport '{key}' is already registered")
        self._custom_transports[key] = transport
        return self

    def with_predefined_value(self, key: str, value: Any) -> "LoggerBuilder":
        """Bind a template placeholder."""
        self._config.predefined_values[key] = value
        return self

    def with_join_char(self, join_char: str) -> "LoggerBuilder":
        self._config.join_char = join_char
        return self

    def with_reducer(self, reducer: Reducer) -> "LoggerBuilder":
        self._config.reducer = reducer
        return self

    def with_formatter(self, formatter: BaseFormatter) -> "LoggerBuilder":
        self._config.formatter = formatter
        return self

    def with_registry(self, registry: Registry) -> "LoggerBuilder":
        """Use an explicit registry instead of the process-wide one."""
        self._registry = registry
        return self

    def build(self) -> Logger:
        """Build and return configured logger."""
        # replace() re-runs validation on the accumulated settings
        config = dataclasses.replace(self._config)
        registry = self._registry or default_registry
        transports: Dict[str, Transport] = {}

        if self._console_enabled:
            transports[CONSOLE_KEY] = ConsoleTransport(self._console_stream, registry=registry)

        if self._file_path:
            transports[FILE_KEY] = FileTransport(str(self._file_path), registry=registry)

        logger = Logger(transports, config, registry)

        for key, transport in self._custom_transports.items():
            logger.add_transport(key, transport)

        return logger
