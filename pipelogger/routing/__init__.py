"""Routing module - Forwarding edges between loggers"""

from pipelogger.routing.pipe import Pipe, PipeDestroyedError

__all__ = [
    "Pipe",
    "PipeDestroyedError",
]
