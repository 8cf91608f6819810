"""
Configuration for htmldoc.

All document defaults in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/htmldoc/config.toml) if exists
3. Environment variables (HTMLDOC_*) override file
4. CLI flags / options records override everything
"""

from __future__ import annotations

import logging
import os
import tomllib  # stdlib in 3.11+
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class DocumentConfig:
    """Skeleton defaults."""
    lang: str = "en"
    doctype: str = "html"
    charset: str = "utf-8"
    viewport: str = "width=device-width,initial-scale=1"


@dataclass
class ThemeConfig:
    """theme-color values for the light and dark colour schemes."""
    light: str = "#eeeeee"
    dark: str = "#22262d"


@dataclass
class FontsConfig:
    """Webfont hosts and the shared webfont stylesheet."""
    preconnect: list[str] = field(default_factory=lambda: [
        "https://fonts.googleapis.com",
        "https://fonts.gstatic.com",
    ])
    stylesheet: str = "https://fonts.googleapis.com/css2?family=Poppins&display=swap"


@dataclass
class Config:
    """Root config with all settings."""
    document: DocumentConfig = field(default_factory=DocumentConfig)
    theme: ThemeConfig = field(default_factory=ThemeConfig)
    fonts: FontsConfig = field(default_factory=FontsConfig)


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "htmldoc" / "config.toml"
    return Path.home() / ".config" / "htmldoc" / "config.toml"


def load_config() -> Config:
    """Load config from file if exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)
        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
            logger.warning("Ignoring config file %s: %s", path, e)
            config = Config()

    # env var overrides
    config = _apply_env(config)

    return config


def _apply_toml(config: Config, data: dict) -> Config:
    """Apply toml data to config."""
    if "document" in data:
        d = data["document"]
        for key in ("lang", "doctype", "charset", "viewport"):
            if key in d:
                setattr(config.document, key, str(d[key]))

    if "theme" in data:
        t = data["theme"]
        if "light" in t:
            config.theme.light = str(t["light"])
        if "dark" in t:
            config.theme.dark = str(t["dark"])

    if "fonts" in data:
        f = data["fonts"]
        if "preconnect" in f:
            if not isinstance(f["preconnect"], list):
                raise TypeError("fonts.preconnect must be a list of URLs")
            config.fonts.preconnect = [str(url) for url in f["preconnect"]]
        if "stylesheet" in f:
            config.fonts.stylesheet = str(f["stylesheet"])

    return config


def _apply_env(config: Config) -> Config:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str]] = {
        "HTMLDOC_LANG": ("document", "lang"),
        "HTMLDOC_DOCTYPE": ("document", "doctype"),
        "HTMLDOC_CHARSET": ("document", "charset"),
        "HTMLDOC_VIEWPORT": ("document", "viewport"),
        "HTMLDOC_THEME_LIGHT": ("theme", "light"),
        "HTMLDOC_THEME_DARK": ("theme", "dark"),
        "HTMLDOC_FONT_STYLESHEET": ("fonts", "stylesheet"),
    }

    for env_key, (section, attr) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            setattr(getattr(config, section), attr, val)

    return config


# Module-level config instance, loaded once on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config
