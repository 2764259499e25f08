import configparser
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class ConfigLoader:
    def __init__(self, config_path=None):
        # project root (core/config/*)
        self.project_root = Path(__file__).resolve().parents[2]
        self.config_path = Path(config_path) if config_path else self.project_root / "conf" / "settings.ini"

        self.config = configparser.ConfigParser()
        # keep option names as written (CATALOG, DEFAULT_LEVEL, ...)
        self.config.optionxform = str
        if self.config_path.exists():
            self.config.read(self.config_path, encoding="utf-8")
        else:
            logger.warning("Config file missing, using defaults: %s", self.config_path)

    @property
    def exists(self):
        return self.config_path.exists()

    def get(self, section, key, fallback=None):
        """Return a config value, expanding ~ in user paths."""
        val = self.config.get(section, key, fallback=fallback)
        if val and isinstance(val, str) and "~" in val:
            return os.path.expanduser(val)
        return val

    def get_int(self, section, key, fallback=0):
        try:
            return self.config.getint(section, key, fallback=fallback)
        except ValueError:
            logger.warning("Invalid integer for [%s] %s, using %s", section, key, fallback)
            return fallback

    def get_path(self, section, key, fallback=None):
        """Path value; relative paths resolve against the project root."""
        val = self.get(section, key)
        if not val:
            return Path(fallback) if fallback else None
        p = Path(val)
        if not p.is_absolute():
            p = self.project_root / p
        return p

    def catalog_path(self):
        return self.get_path("PATHS", "CATALOG", self.project_root / "data" / "ingredients.json")


# module-level instance
arcadia_config = ConfigLoader()
