"""
Message data structure

A single emitted log call as it travels through pipes and transports.
"""

import copy
import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _copy_segment(segment: Any) -> Any:
    try:
        return copy.deepcopy(segment)
    except (TypeError, copy.Error):
        return segment


@dataclass
class MessageContent:
    """Text forms of a message."""

    passed_segments: List[Any]
    joined_segments: str
    formatted: Optional[str] = None
    plain: Optional[str] = None


@dataclass
class Message:
    """
    Log message record.

    Built once by the emitting logger. Only ``muted`` changes afterwards,
    while the message is routed through pipes and loggers.
    """

    content: MessageContent
    level: int
    source_logger: str
    endl: bool = True
    format: Optional[str] = None
    predefined_values: Dict[str, Any] = field(default_factory=dict)
    muted: bool = False

    def __post_init__(self):
        """Validate message after initialization."""
        if not isinstance(self.level, int):
            raise TypeError("level must be an int mask")

    def clone(self) -> "Message":
        """
        Deep copy of this message.

        Each pipe receives its own clone, so muting one branch never
        touches another branch or the original. Segments that cannot be
        deep-copied (locks, files, generators) are shared. Predefined
        values are resolvers, not data, and are copied by reference.
        """
        content = dataclasses.replace(
            self.content,
            passed_segments=[_copy_segment(s) for s in self.content.passed_segments],
        )
        return dataclasses.replace(
            self,
            content=content,
            predefined_values=dict(self.predefined_values),
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert message to dictionary.

        Returns:
            Dictionary representation
        """
        return {
            "passed_segments": list(self.content.passed_segments),
            "joined_segments": self.content.joined_segments,
            "formatted": self.content.formatted,
            "plain": self.content.plain,
            "level": self.level,
            "source_logger": self.source_logger,
            "endl": self.endl,
            "format": self.format,
            "muted": self.muted,
        }

    def __str__(self) -> str:
        """String representation."""
        if self.content.plain is not None:
            return self.content.plain
        return self.content.joined_segments
