"""
Animation engine: dispatcher and per-animation sessions
"""

from .animation_session import AnimationSession, CancellationToken
from .dispatcher import Dispatcher

__all__ = [
    "AnimationSession",
    "CancellationToken",
    "Dispatcher",
]
