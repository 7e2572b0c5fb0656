"""
Configuration schemas - Pydantic models for config.yaml

Pydantic validates the raw YAML dict into typed objects; every field has a
default so an empty (or missing) file yields a usable configuration.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from models.enums import DeviceDriver, LogLevel


class DeviceConfig(BaseModel):
    """LED device selection and I2C wiring"""
    driver: DeviceDriver = Field(
        DeviceDriver.AUTO,
        description="auto = SN3218 on a Raspberry Pi, virtual elsewhere"
    )
    i2c_bus: int = Field(1, ge=0, description="I2C bus number (/dev/i2c-N)")
    i2c_address: int = Field(0x54, ge=0x03, le=0x77, description="SN3218 address")


class AnimationTimingConfig(BaseModel):
    """Per-tick pacing of the animation loops (seconds)"""
    tick_interval: float = Field(0.1, gt=0, description="Default tick interval")
    shimmer_interval: float = Field(0.02, gt=0, description="Shimmer tick interval")


class CommandSourceConfig(BaseModel):
    """Where commands come from"""
    webqueue: Optional[str] = Field(
        None,
        description="Queue URL polled with HTTP GET (WEBQUEUE env overrides)"
    )
    default_animation: str = Field("cycle", description="Command used by -a when omitted")
    request_timeout: Optional[float] = Field(
        None,
        description="HTTP timeout in seconds, null waits forever (long-poll)"
    )
    idle_delay: float = Field(0.0, ge=0, description="Pause after a non-200 response")

    @field_validator("webqueue")
    @classmethod
    def _blank_url_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


class LoggingConfig(BaseModel):
    level: LogLevel = LogLevel.INFO
    use_colors: bool = True

    @field_validator("level", mode="before")
    @classmethod
    def _level_by_name(cls, value):
        if isinstance(value, str):
            try:
                return LogLevel[value.upper()]
            except KeyError:
                raise ValueError(f"Unknown log level: {value}")
        return value


class AppConfig(BaseModel):
    """Root of config.yaml"""
    device: DeviceConfig = Field(default_factory=DeviceConfig)
    animations: AnimationTimingConfig = Field(default_factory=AnimationTimingConfig)
    command_source: CommandSourceConfig = Field(default_factory=CommandSourceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
