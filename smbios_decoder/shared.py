"""
Shared utilities for the decoder CLI: config and logging.
"""
import sys
import logging
import configparser
from pathlib import Path
from configparser import ConfigParser
from typing import Optional


DEFAULT_CONFIG_PATH = Path(__file__).parents[1] / "configs" / "smbios_decoder.ini"
DEFAULT_DMI_PATH = "/sys/firmware/dmi/tables/DMI"

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


class ConfigManager:
    """Manages decoder configuration from INI file."""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        # Paths may contain '%'; values are taken literally
        self.config = ConfigParser(interpolation=None)

    def load(self) -> ConfigParser:
        """Load config file. A missing file leaves only defaults."""
        self.config.read(self.config_path)
        return self.config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> str:
        """Get config value with fallback."""
        try:
            return self.config.get(section, key, fallback=fallback if fallback else "")
        except configparser.Error:
            return fallback if fallback else ""

    @property
    def dmi_path(self) -> str:
        return self.get('tables', 'dmi_path', DEFAULT_DMI_PATH)

    @property
    def output_format(self) -> str:
        fmt = self.get('output', 'format', 'text').lower()
        return fmt if fmt in ('text', 'json') else 'text'


class LogManager:
    """Manages logging for the decoder.

    Console output goes to stderr so that report text and JSON on stdout stay
    clean. A file handler is only attached when ``log_dir`` is set.
    """

    def __init__(self, name: str, log_dir: Optional[str] = None, level: str = "WARNING"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

        formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

        # Re-running the CLI in one process (tests) must not stack handlers
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        ch = logging.StreamHandler(sys.stderr)
        ch.setLevel(self.logger.level)
        ch.setFormatter(formatter)
        self.logger.addHandler(ch)

        if log_dir:
            self.log_dir = Path(log_dir)
            self.log_dir.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(self.log_dir / f"{name}.log")
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(formatter)
            self.logger.addHandler(fh)
        else:
            self.log_dir = None

    def get_logger(self) -> logging.Logger:
        """Get configured logger."""
        return self.logger
