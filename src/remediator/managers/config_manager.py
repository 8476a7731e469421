# src/remediator/managers/config_manager.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from remediator.model import RemediationSettings
from remediator.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    A singleton class to manage the application's configuration.
    It loads settings from a file and allows for in-memory modifications.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Loads the configuration from the file."""
        self._config: Dict[str, Any] = {}
        self._path: Optional[Path] = None
        self.reset()
        logger.debug("ConfigManager initialized.")

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Safely retrieves a nested value from the configuration.
        e.g., 'remediation.empty_blocks'.
        """
        keys = key_path.split('.')
        value = self._config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
        return value if value is not None else default

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Overrides one value in the in-memory configuration, e.g. from
        `--set remediation.document_marker=<body`. A scalar replacing a string,
        int or float keeps that type; anything else is left to the validation
        in load_settings().
        """
        *sections, leaf = key_path.split(".")
        target = self._config
        for key in sections:
            target = target.setdefault(key, {})
            if not isinstance(target, dict):
                logger.error("Cannot set '%s': '%s' is not a section.", key_path, key)
                return False

        current = target.get(leaf)
        scalar = isinstance(value, (str, int, float))
        if scalar and type(current) in (str, int, float) and not isinstance(value, type(current)):
            try:
                value = type(current)(value)
            except (TypeError, ValueError):
                logger.warning("'%s' expects %s, keeping %r as given.", key_path, type(current).__name__, value)

        target[leaf] = value
        logger.info("Configuration override: %s = %r", key_path, value)
        return True

    @property
    def settings_path(self) -> Path:
        """The settings file in use: an explicit override or the packaged settings.json."""
        return self._path or PathUtils.get_settings_file()

    @settings_path.setter
    def settings_path(self, path: Union[str, Path, None]) -> None:
        self._path = Path(path) if path else None

    def reset(self):
        """Resets the in-memory configuration from the settings file."""
        config_path = self.settings_path
        try:
            if not config_path.exists():
                logger.warning("settings.json not found at %s. Using empty config.", config_path)
                self._config = {}
                return
            with open(config_path, "r", encoding="utf-8") as f:
                self._config = json.load(f)
            logger.info("Configuration has been (re)loaded from %s.", config_path.name)
        except Exception as e:
            logger.error("Failed to load settings.json: %s", e, exc_info=True)
            self._config = {}

    def load_settings(self) -> RemediationSettings:
        """
        Builds the typed settings for the engine from the current configuration.
        Invalid values are logged and replaced by the defaults.
        """
        data = dict(self.get_nested("remediation", {}) or {})
        if self.get_nested("editor") is not None:
            data["editor"] = self.get_nested("editor")
        if self.get_nested("logging") is not None:
            data["logging"] = self.get_nested("logging")

        try:
            return RemediationSettings.model_validate(data)
        except ValidationError as e:
            logger.error("Invalid remediation settings, falling back to defaults: %s", e)
            return RemediationSettings()


# The global singleton instance used by the command line and host adapters.
config_manager = ConfigManager()
