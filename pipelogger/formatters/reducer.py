"""
Segment reducers

A reducer joins the positional arguments of a log call into one line.
"""

import json
from typing import Any, Callable, Sequence

Reducer = Callable[[Sequence[Any], str], str]

DEFAULT_JOIN_CHAR = " "


def segment_to_string(segment: Any) -> str:
    """Strings pass through, anything else is JSON-encoded."""
    if isinstance(segment, str):
        return segment
    return json.dumps(segment, default=str, ensure_ascii=False)


def default_reducer(segments: Sequence[Any], join_char: str = DEFAULT_JOIN_CHAR) -> str:
    """
    Fold segments left into a single string.

    Args:
        segments: Positional arguments of the log call
        join_char: Separator placed between segments (not after the last)

    Example:
        default_reducer(["id", 42, {"ok": True}])  # 'id 42 {"ok": true}'
    """
    line = ""
    last = len(segments) - 1
    for i, segment in enumerate(segments):
        line += segment_to_string(segment)
        if i != last:
            line += join_char
    return line
