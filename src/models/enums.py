"""
Enums for the PiGlow animation controller
"""

from enum import Enum, auto


class AnimationKind(Enum):
    """Closed set of animation kinds understood by the dispatcher"""
    SHIMMER = auto()
    PULSE = auto()
    BOUNCE = auto()
    CYCLE = auto()
    ARMS = auto()
    SPIN = auto()
    SOLID = auto()


class Color(Enum):
    """
    Color bands of the PiGlow plus the two solid-only sentinels.

    CLEAR and ALL are only meaningful for SOLID intents.
    """
    WHITE = "white"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    ORANGE = "orange"
    RED = "red"
    CLEAR = "clear"   # blank display
    ALL = "all"       # every LED lit

    @property
    def is_band(self) -> bool:
        return self not in (Color.CLEAR, Color.ALL)


class DeviceDriver(Enum):
    """Device driver selection (config: device.driver)"""
    AUTO = "auto"
    VIRTUAL = "virtual"
    SN3218 = "sn3218"


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    HARDWARE = auto()    # I2C bus, device frames
    ANIMATION = auto()   # Animation start/stop/ticks
    DISPATCHER = auto()  # Command dispatch, session handover
    COMMAND = auto()     # Command sources (CLI token, HTTP queue)
    SYSTEM = auto()      # Startup, shutdown, errors
    SHUTDOWN = auto()
    TASK = auto()

    GENERAL = auto()    # Default general category
