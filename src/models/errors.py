"""
Domain errors

All fatal conditions of the controller are raised as subclasses of
BlinkyError so the entry point can log them and exit with a non-zero status.
"""

from typing import Optional


class BlinkyError(Exception):
    """Base class for controller errors"""
    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DeviceError(BlinkyError):
    """Device unavailable or failing"""


class DeviceInitError(DeviceError):
    """Device could not be opened or brought to the all-off state"""


class DeviceApplyError(DeviceError):
    """Committing the pending frame to hardware failed"""
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message, details={"cause": repr(cause)} if cause else None)
        self.cause = cause


class CommandSourceError(BlinkyError):
    """Command source transport/read failure (never retried)"""
    def __init__(self, url: str, reason: str):
        super().__init__(
            f"Command source '{url}' failed: {reason}",
            details={"url": url, "reason": reason}
        )
        self.url = url
        self.reason = reason


class ConfigError(BlinkyError):
    """Configuration value cannot be used"""
