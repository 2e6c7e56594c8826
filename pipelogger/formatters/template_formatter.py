"""
Template formatter with %placeholders

Substitutes ``%name`` tokens and then renders style markup.
"""

import re
from typing import Any, Dict, Mapping, Optional

from pipelogger.core.message import Message
from pipelogger.formatters.base_formatter import BaseFormatter
from pipelogger.formatters.markup import MarkupRenderer
from pipelogger.formatters.predefined import Converter, placeholder_key, resolve_all

TOKEN_RE = re.compile(r"%[A-Za-z0-9_-]+")

MSG_TOKEN = "%msg"


class TemplateFormatter(BaseFormatter):
    """
    Format messages using a placeholder template.

    Unknown placeholders are left in the output untouched, so templates can
    be assembled before all of their values exist.
    """

    def __init__(self, colored: bool = True, markup: Optional[MarkupRenderer] = None):
        """
        Initialize template formatter.

        Args:
            colored: Emit ANSI codes for style markup
            markup: Markup renderer (default: MarkupRenderer(colored))

        Example:
            formatter = TemplateFormatter(colored=False)
            formatter.render("%symbol %msg", {"%symbol": "[INFO]", "%msg": "hi"})
            # '[INFO] hi'
        """
        self.markup = markup or MarkupRenderer(colored)

    def render(self, template: str, values: Mapping[str, str]) -> str:
        """
        Substitute placeholders, then render markup.

        Args:
            template: Format template
            values: Placeholder values, keys with or without the leading "%"

        Returns:
            Display string
        """
        table = {placeholder_key(k): v for k, v in values.items()}
        substituted = TOKEN_RE.sub(lambda m: table.get(m.group(0), m.group(0)), template)
        return self.markup.render(substituted)

    def __repr__(self) -> str:
        """String representation."""
        return f"TemplateFormatter(markup={self.markup!r})"


def build_values(
    message_line: str,
    persistent: Mapping[str, Any],
    local: Optional[Mapping[str, Any]],
    message: Message,
    convert: Converter,
) -> Dict[str, str]:
    """
    Build the substitution table for one message.

    Later sources override earlier ones: ``%msg``, then the logger's
    predefined values, then per-call values.
    """
    values = {MSG_TOKEN: message_line}
    values.update(resolve_all(persistent, message, convert))
    if local:
        values.update(resolve_all(local, message, convert))
    return values
