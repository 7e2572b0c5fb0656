# hardware/device/sn3218_piglow.py
"""
SN3218PiGlow - PiGlow driver over I2C (smbus2)
===============================================
Concrete implementation of IDevice for the SN3218 18-channel PWM chip.

Register map:
- 0x00      shutdown register (0x01 = normal operation)
- 0x01-0x12 PWM value per channel
- 0x13-0x15 channel enable bits (6 channels per register)
- 0x16      update register (any write latches PWM values)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

from smbus2 import SMBus

from hardware.device.buffered_device import BufferedDevice
from models.errors import DeviceApplyError, DeviceInitError
from models.topology import LED_COUNT
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)

REG_SHUTDOWN = 0x00
REG_PWM_BASE = 0x01
REG_ENABLE_BASE = 0x13
REG_UPDATE = 0x16

ENABLE_ALL_CHANNELS = [0x3F, 0x3F, 0x3F]


@dataclass(frozen=True)
class SN3218Config:
    """Configuration for the SN3218 chip."""
    bus: int = 1
    address: int = 0x54


class SN3218PiGlow(BufferedDevice):
    """
    PiGlow hardware driver.

    - _buffer (BufferedDevice) is canonical source of truth
    - apply() writes all 18 PWM values in one block transfer, then latches
    """

    def __init__(self, config: SN3218Config, bus: SMBus | None = None) -> None:
        super().__init__()
        self.config = config

        try:
            self._bus = bus if bus is not None else SMBus(config.bus)
            self._bus.write_byte_data(config.address, REG_SHUTDOWN, 0x01)
            self._bus.write_i2c_block_data(config.address, REG_ENABLE_BASE, ENABLE_ALL_CHANNELS)
        except OSError as ex:
            raise DeviceInitError(
                f"Couldn't open PiGlow on i2c-{config.bus} @ {config.address:#04x}: {ex}",
                details={"bus": config.bus, "address": config.address}
            ) from ex

        log.info(
            "SN3218PiGlow initialized",
            bus=config.bus,
            address=f"{config.address:#04x}",
        )

    # ==================== BufferedDevice API ====================

    def _write(self, frame: Sequence[int]) -> None:
        """Single block write of all PWM registers, then latch."""
        # Blocks the event loop for about 2 ms per frame at the default 100 kHz I2C clock
        try:
            self._bus.write_i2c_block_data(self.config.address, REG_PWM_BASE, list(frame[:LED_COUNT]))
            self._bus.write_byte_data(self.config.address, REG_UPDATE, 0xFF)
        except OSError as ex:
            raise DeviceApplyError(f"Couldn't apply changes: {ex}", cause=ex) from ex

    def close(self) -> None:
        """Graceful shutdown (blank + chip shutdown + close bus)."""
        log.info(f"Shutting down SN3218PiGlow on i2c-{self.config.bus}")
        try:
            self.set_all(0)
            self.apply()
            self._bus.write_byte_data(self.config.address, REG_SHUTDOWN, 0x00)
        except (OSError, DeviceApplyError) as ex:
            log.error("PiGlow shutdown write failed", error=str(ex))
        finally:
            self._bus.close()
