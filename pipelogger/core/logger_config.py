"""
Logger configuration management
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pipelogger.core.levels import ALL
from pipelogger.formatters.base_formatter import BaseFormatter
from pipelogger.formatters.reducer import DEFAULT_JOIN_CHAR, Reducer

DEFAULT_FORMAT = "%symbol %msg {gray [%date]}"

LevelSpec = Union[None, int, str, Sequence[Union[int, str]]]

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class LoggerConfig:
    """
    Logger configuration.

    ``log_level`` accepts a mask, a level name, a comma-separated string of
    names or a sequence of names/masks. None (the default) means "ALL" and
    keeps tracking levels registered later.
    """

    # Identity
    id: Optional[str] = None

    # Format settings
    format: str = DEFAULT_FORMAT
    colored_output: bool = True
    formatter: Optional[BaseFormatter] = None

    # Level settings
    log_level: LevelSpec = None
    custom_levels: List[str] = field(default_factory=list)

    # Message construction
    predefined_values: Dict[str, Any] = field(default_factory=dict)
    join_char: str = DEFAULT_JOIN_CHAR
    reducer: Optional[Reducer] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.custom_levels, str):
            self.custom_levels = [self.custom_levels]
        else:
            self.custom_levels = list(self.custom_levels)

        for name in self.custom_levels:
            if name.upper() == ALL:
                raise ValueError(f"'{ALL}' is reserved and cannot be a custom level")
        if isinstance(self.log_level, int) and self.log_level < 0:
            raise ValueError("log_level mask cannot be negative")
        if not isinstance(self.join_char, str):
            raise TypeError("join_char must be a string")
        if self.reducer is not None and not callable(self.reducer):
            raise TypeError("reducer must be callable")
        if not isinstance(self.predefined_values, Mapping):
            raise TypeError("predefined_values must be a mapping")
        self.predefined_values = dict(self.predefined_values)

    def level_spec(self) -> Tuple[Union[int, str], ...]:
        """``log_level`` as arguments for Logger.set_level."""
        return as_level_args(self.log_level)

    @classmethod
    def default(cls) -> "LoggerConfig":
        """Create default configuration."""
        return cls()

    @classmethod
    def plain_config(cls) -> "LoggerConfig":
        """Create configuration that logs the bare message without colors."""
        return cls(format="%msg", colored_output=False)

    @classmethod
    def from_env(
        cls,
        prefix: str = "PIPELOGGER_",
        environ: Optional[Mapping[str, str]] = None,
    ) -> "LoggerConfig":
        """
        Create configuration from environment variables.

        Reads ``<prefix>ID``, ``<prefix>FORMAT``, ``<prefix>LEVEL``
        (comma-separated level names), ``<prefix>CUSTOM_LEVELS`` and
        ``<prefix>COLOR``. Unset variables keep their defaults.

        Example:
            # PIPELOGGER_LEVEL=warning,error PIPELOGGER_COLOR=0
            config = LoggerConfig.from_env()
        """
        env = os.environ if environ is None else environ
        kwargs: Dict[str, Any] = {}

        if f"{prefix}ID" in env:
            kwargs["id"] = env[f"{prefix}ID"]
        if f"{prefix}FORMAT" in env:
            kwargs["format"] = env[f"{prefix}FORMAT"]
        if f"{prefix}LEVEL" in env:
            kwargs["log_level"] = env[f"{prefix}LEVEL"]
        if f"{prefix}CUSTOM_LEVELS" in env:
            kwargs["custom_levels"] = _split_names(env[f"{prefix}CUSTOM_LEVELS"])
        if f"{prefix}COLOR" in env:
            kwargs["colored_output"] = env[f"{prefix}COLOR"].strip().lower() in _TRUE_VALUES

        return cls(**kwargs)


def as_level_args(spec: LevelSpec) -> Tuple[Union[int, str], ...]:
    """Normalize a level specification to a tuple of masks and names."""
    if spec is None:
        return (ALL,)
    if isinstance(spec, int):
        return (spec,)
    if isinstance(spec, str):
        return tuple(_split_names(spec))
    return tuple(spec)


def _split_names(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]
