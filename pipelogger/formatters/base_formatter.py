"""
Base formatter interface
"""

from abc import ABC, abstractmethod
from typing import Mapping

from pipelogger.formatters.markup import strip_markup


class BaseFormatter(ABC):
    """
    Abstract base class for template formatters.

    Formatters turn a template and a table of resolved placeholder values
    into display text.
    """

    @abstractmethod
    def render(self, template: str, values: Mapping[str, str]) -> str:
        """
        Render a template.

        Args:
            template: Format template containing ``%name`` placeholders
            values: Placeholder token (e.g. "%msg") to substituted text

        Returns:
            Display string
        """
        pass

    def strip(self, text: str) -> str:
        """Plain-text form of a rendered string."""
        return strip_markup(text)

    def __call__(self, template: str, values: Mapping[str, str]) -> str:
        """Allow formatters to be callable."""
        return self.render(template, values)
