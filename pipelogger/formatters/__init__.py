"""
Formatters module

Template rendering, predefined placeholder values and style markup.
"""

from pipelogger.formatters.base_formatter import BaseFormatter
from pipelogger.formatters.template_formatter import TemplateFormatter, build_values
from pipelogger.formatters.markup import MarkupRenderer, render, strip_markup
from pipelogger.formatters.predefined import Literal, Computed, as_predefined
from pipelogger.formatters.reducer import Reducer, default_reducer

__all__ = [
    "BaseFormatter",
    "TemplateFormatter",
    "build_values",
    "MarkupRenderer",
    "render",
    "strip_markup",
    "Literal",
    "Computed",
    "as_predefined",
    "Reducer",
    "default_reducer",
]
