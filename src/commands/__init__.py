"""
Command handling

- interpreter: raw token → Intent
- sources: where raw tokens come from (CLI token, HTTP queue)
"""

from .interpreter import parse, is_fallback, describe_animations, available_colors
from .sources import single_command_source, HttpQueueSource

__all__ = [
    "parse",
    "is_fallback",
    "describe_animations",
    "available_colors",
    "single_command_source",
    "HttpQueueSource",
]
