# device_factory.py

from runtime.runtime_info import RuntimeInfo
from hardware.device.device_interface import IDevice
from hardware.device.virtual_piglow import VirtualPiGlow
from models.config import DeviceConfig
from models.enums import DeviceDriver
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)


def create_device(config: DeviceConfig) -> IDevice:
    """
    Build the LED device selected by config.

    AUTO picks the SN3218 driver on a Raspberry Pi with an I2C bus and falls
    back to the virtual device everywhere else. An explicit SN3218 that
    cannot be opened raises DeviceInitError.
    """
    driver = config.driver

    if driver is DeviceDriver.AUTO:
        on_pi = (
            RuntimeInfo.is_raspberry_pi()
            and RuntimeInfo.has_smbus()
            and RuntimeInfo.has_i2c_bus(config.i2c_bus)
        )
        driver = DeviceDriver.SN3218 if on_pi else DeviceDriver.VIRTUAL
        log.debug("Device driver auto-selected", driver=driver.value)

    if driver is DeviceDriver.SN3218:
        from hardware.device.sn3218_piglow import SN3218PiGlow, SN3218Config

        return SN3218PiGlow(SN3218Config(bus=config.i2c_bus, address=config.i2c_address))

    log.info("Using virtual PiGlow (no hardware writes)")
    return VirtualPiGlow()
