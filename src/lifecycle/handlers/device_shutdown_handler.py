from __future__ import annotations

from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from models.errors import DeviceError
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from hardware.device.device_interface import IDevice

log = get_logger().for_category(LogCategory.SHUTDOWN)


class DeviceShutdownHandler(IShutdownHandler):
    """
    Shutdown handler for the LED device.

    Blanks the LEDs and releases the bus so they are not left on.
    Runs AFTER the dispatcher stops, otherwise an animation tick could
    relight LEDs after clearing.

    Priority: 100
    """

    def __init__(self, device: IDevice):
        self.device = device

    @property
    def shutdown_priority(self) -> int:
        return 100

    async def shutdown(self) -> None:
        log.info("Blanking LEDs and closing device...")

        try:
            self.device.close()
        except DeviceError as e:
            log.error(f"Error closing device: {e}")
            raise

        log.info("LEDs cleared")
