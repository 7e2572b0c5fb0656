import sys
import importlib.util
from pathlib import Path


class RuntimeInfo:

    @classmethod
    def is_linux(cls) -> bool:
        return sys.platform.startswith("linux")

    @classmethod
    def is_raspberry_pi(cls) -> bool:
        if not cls.is_linux():
            return False
        try:
            with open("/proc/cpuinfo", "r") as f:
                return "Raspberry Pi" in f.read()
        except OSError:
            return False

    @classmethod
    def has_smbus(cls) -> bool:
        return cls.has_module("smbus2")

    @classmethod
    def has_i2c_bus(cls, bus: int) -> bool:
        return Path(f"/dev/i2c-{bus}").exists()

    @classmethod
    def has_module(cls, module_name: str) -> bool:
        try:
            return importlib.util.find_spec(module_name) is not None
        except (ImportError, ValueError):
            return False
