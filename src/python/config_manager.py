import json
import pathlib
import sys
import logging
from typing import Any, NoReturn

from custom_types import (
    ConfigSection, GestureConfig, LoggingConfig, PagerHostConfig, PlatformConfig
)

logger = logging.getLogger(__name__)

# Sections every config.json must provide, as key paths from the root
REQUIRED_SECTIONS: tuple[tuple[str, ...], ...] = (
    ("colors", "palette"),
    ("colors", "fonts"),
    ("strings",),
    ("ui",),
    ("platform",),
)

DEFAULT_PAGER_HOST: PagerHostConfig = {"frameIntervalMs": 16, "background": "background"}


class ConfigManager:
    """Loads config.json and serves palette, strings, UI, platform and logging settings.

    Required sections are checked at load time. A broken configuration stops
    the program, or raises when `exit_on_error` is False (tests).
    """

    colors: dict[str, str]
    fonts: dict[str, str]
    strings: dict[str, Any]
    ui: dict[str, Any]
    platform: dict[str, Any]
    exit_on_error: bool
    _cfg: dict[str, Any]
    cfg_path: str | pathlib.Path

    def __init__(
        self,
        cfg_path: str | pathlib.Path | None = None,
        exit_on_error: bool = True
    ) -> None:
        """
        Args:
            cfg_path: Path to config.json (defaults to <repo>/config/config.json)
            exit_on_error: Exit the program on configuration errors instead of raising
        """
        self.exit_on_error = exit_on_error
        self.cfg_path = cfg_path if cfg_path is not None else self._default_config_path()
        self._cfg = {}
        self.load_config()

    @staticmethod
    def _default_config_path() -> pathlib.Path:
        base = pathlib.Path(__file__).parent.parent.parent
        return base / "config" / "config.json"

    def _fail(self, error_type: type[Exception], message: str) -> NoReturn:
        logger.error("%s", message)
        if self.exit_on_error:
            sys.exit(1)
        raise error_type(message)

    def load_config(self) -> None:
        """Read the configuration file and bind its sections."""
        try:
            with open(self.cfg_path, 'r') as f:
                self._cfg = json.load(f)
        except (OSError, ValueError) as e:
            self._fail(RuntimeError, f"Critical error loading configuration '{self.cfg_path}': {e}")

        for path in REQUIRED_SECTIONS:
            node: Any = self._cfg
            for key in path:
                if not isinstance(node, dict) or key not in node:
                    self._fail(KeyError, f"Configuration missing key: {'.'.join(path)}")
                node = node[key]

        self.colors = self._cfg["colors"]["palette"]
        self.fonts = self._cfg["colors"]["fonts"]
        self.strings = self._cfg["strings"]
        self.ui = self._cfg["ui"]
        self.platform = self._cfg["platform"]
        logger.debug("Loaded configuration from %s", self.cfg_path)

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def get_color(self, key: str, default: str | None = None) -> str:
        """Palette color by key, e.g. 'background' or 'page0'."""
        return self.colors.get(key, default or "#000000")

    def get_font(self, key: str = "primary") -> str:
        return self.fonts.get(key, "Arial")

    def get_string(self, category: str, key: str, default: str | None = None) -> str:
        value = self.strings.get(category, {}).get(key)
        if value is None:
            return default or key
        return value

    def get_nested_string(self, path: str, default: str | list[Any] | None = None) -> str | list[Any]:
        """String (or list of strings) by dot path, e.g. 'demo.pageTitles'.

        Falls back to `default`, or the path itself, when the path does not
        lead to a string or list.
        """
        current: Any = self.strings
        for part in path.split('.'):
            if not isinstance(current, dict) or part not in current:
                return default if default is not None else path
            current = current[part]

        if isinstance(current, (str, list)):
            return current
        return default if default is not None else path

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def get_ui_setting(self, category: str, key: str, default: Any = None) -> Any:
        """UI setting by category ('pager', 'demo') and key."""
        return self.ui.get(category, {}).get(key, default)

    def get_setting(self, section: str, key: str, default: Any = None) -> Any:
        return self._cfg.get(section, {}).get(key, default)

    def set_setting(self, section: str, key: str, value: Any) -> None:
        """Override a setting in memory; config.json is left untouched."""
        section_values: ConfigSection = self._cfg.setdefault(section, {})
        section_values[key] = value
        if section == "platform":
            self.platform = section_values

    def get_logging_config(self) -> LoggingConfig:
        """The 'logging' section read by logging_config.setup_logging()."""
        return self._cfg.get("logging", {})

    def get_logging_setting(self, key: str, default: Any = None) -> Any:
        return self.get_logging_config().get(key, default)

    # ------------------------------------------------------------------
    # Pager sections
    # ------------------------------------------------------------------

    def get_platform_config(self) -> PlatformConfig:
        """Device metrics in DIP.

        Returns:
            dict with keys:
                - touchSlopDp: Drag recognition distance
                - maximumFlingVelocityDp: Fling velocity cap per second
                - density: Physical pixels per DIP
        """
        return self.platform

    def get_gesture_config(self) -> GestureConfig:
        """Gesture arbitration options ('interceptTracksMotion')."""
        return self._cfg.get("gestures", {})

    def get_pager_host_config(self) -> PagerHostConfig:
        """Qt host settings: render loop interval and background palette key."""
        return self.ui.get("pager", DEFAULT_PAGER_HOST)


# Create a singleton instance
config = ConfigManager()
