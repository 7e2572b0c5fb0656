"""
Config Manager

Loads config.yaml (optionally split with an include: list), validates it
with the pydantic schemas in models.config and applies environment
overrides. Never fails: a missing or invalid file falls back to defaults.
"""

import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from models.config import AppConfig, AnimationTimingConfig, CommandSourceConfig, DeviceConfig, LoggingConfig
from models.errors import ConfigError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

WEBQUEUE_ENV = "WEBQUEUE"
DEFAULT_CONFIG_PATH = "config/config.yaml"


class ConfigManager:
    """
    Main configuration manager

    Example:
        config = ConfigManager()
        config.load()

        config.device.driver            # DeviceDriver.AUTO
        config.animations.tick_interval # 0.1
        config.command_source.webqueue  # None, unless WEBQUEUE is set
    """

    def __init__(
        self,
        config_path: Union[str, Path] = DEFAULT_CONFIG_PATH,
        environ: Optional[Mapping[str, str]] = None
    ):
        """
        Args:
            config_path: Path to config.yaml (relative paths resolve against src/)
            environ: Environment to read overrides from (default: os.environ)
        """
        self.is_default_path = str(config_path) == DEFAULT_CONFIG_PATH
        path = Path(config_path)
        if not path.is_absolute():
            path = Path(__file__).parent.parent / path
        self.config_path = path
        self.environ = os.environ if environ is None else environ

        self.data: Dict = {}
        self.config: AppConfig = AppConfig()
        self.used_defaults = False

    def load(self) -> AppConfig:
        """
        Load, validate and override

        Process:
        1. Read config.yaml (merging include: files if present)
        2. Validate into AppConfig
        3. Fall back to AppConfig() defaults on any failure
        4. Apply WEBQUEUE environment override
        """
        if self.is_default_path and not self.config_path.exists():
            # Installed without the bundled file
            log.info("No config.yaml found, using defaults", path=str(self.config_path))
            self._reset_to_defaults()
            self._apply_env_overrides()
            return self.config

        try:
            self.data = self._read_yaml(self.config_path)
            self.config = AppConfig.model_validate(self.data)
            self.used_defaults = False
            log.info("Configuration loaded", path=str(self.config_path))
        except (OSError, yaml.YAMLError, ValidationError, ConfigError) as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to default configuration")
            self._reset_to_defaults()

        self._apply_env_overrides()
        return self.config

    def _reset_to_defaults(self) -> None:
        self.data = {}
        self.config = AppConfig()
        self.used_defaults = True

    def _read_yaml(self, path: Path) -> Dict:
        with open(path, "r", encoding="utf-8") as f:
            main_config = yaml.safe_load(f) or {}

        if not isinstance(main_config, dict):
            raise ConfigError(f"{path.name} must contain a mapping, got {type(main_config).__name__}")

        if "include" in main_config:
            return self._load_with_includes(main_config["include"], path.parent)
        return main_config

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["device.yaml", "logging.yaml"])
            config_dir: Directory containing config files
        """
        merged = {}

        for filename in include_list:
            with open(config_dir / filename, "r", encoding="utf-8") as f:
                file_data = yaml.safe_load(f)
            if file_data:
                merged.update(file_data)
                log.debug(f"Loaded {filename}", keys=str(list(file_data.keys())))

        return merged

    def _apply_env_overrides(self) -> None:
        webqueue = self.environ.get(WEBQUEUE_ENV)
        if webqueue and webqueue.strip():
            self.config.command_source.webqueue = webqueue.strip()
            log.info("Command queue taken from environment", env=WEBQUEUE_ENV)

    # ==================== Section accessors ====================

    @property
    def device(self) -> DeviceConfig:
        return self.config.device

    @property
    def animations(self) -> AnimationTimingConfig:
        return self.config.animations

    @property
    def command_source(self) -> CommandSourceConfig:
        return self.config.command_source

    @property
    def logging(self) -> LoggingConfig:
        return self.config.logging
