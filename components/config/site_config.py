"""
Configuration management for the monastery site.

Settings for the map viewport, the slideshow, the backend API and the
Streamlit frontend live in a single JSON file that is merged over the
built-in defaults. A handful of deployment values can be overridden from
the environment.
"""

import copy
import json
import os
from typing import Dict, Any, Optional, List
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "site_config.json"

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "STORAGE_BACKEND": ("backend", "storage_backend"),
    "DATA_DIR": ("backend", "data_dir"),
    "DATABASE_URL": ("backend", "database_url"),
    "UPLOAD_DIR": ("backend", "upload_dir"),
    "JWT_SECRET": ("backend", "jwt_secret"),
    "API_BASE_URL": ("frontend", "api_base_url"),
}


class SiteConfig:
    """Manages site configuration settings."""

    def __init__(self, config_path: Optional[str] = None, apply_env: bool = True):
        self.config_path = config_path or os.environ.get("SITE_CONFIG", DEFAULT_CONFIG_PATH)
        self.default_config = self._get_default_config()
        self.config = self._load_config()
        if apply_env:
            self._apply_env_overrides()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default site configuration."""
        return {
            "map_settings": {
                "default_center": [27.33, 88.62],
                "default_zoom": 10,
                "tile_url": "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
                "tile_attribution": (
                    '&copy; <a href="http://www.openstreetmap.org/copyright">'
                    'OpenStreetMap</a> contributors'
                ),
                "detail_page": "/",
                "map_height": 550
            },
            "slideshow": {
                "interval_seconds": 5,
                "slides": [
                    {"image": "static/rumtek.jpg", "caption": "Rumtek Monastery"},
                    {"image": "static/pemayangtse.jpg", "caption": "Pemayangtse Monastery"},
                    {"image": "static/tashiding.jpg", "caption": "Tashiding Monastery"},
                    {"image": "static/enchey.jpg", "caption": "Enchey Monastery"}
                ]
            },
            "backend": {
                "storage_backend": "memory",
                "data_dir": "./data",
                "database_url": "",
                "upload_dir": "./uploads",
                "max_upload_mb": 10,
                "allowed_extensions": [".jpg", ".jpeg", ".png", ".gif", ".webp"],
                "jwt_secret": "change-me",
                "jwt_algorithm": "HS256",
                "token_expiry_minutes": 60,
                "cors_origins": "*",
                "min_password_length": 6,
                "placeholder_photo": "/static/placeholder.jpg",
                "fallback_photos": [
                    {"filepath": "/static/rumtek.jpg"},
                    {"filepath": "/static/pemayangtse.jpg"}
                ]
            },
            "frontend": {
                "api_base_url": "http://localhost:3000",
                "request_timeout": 10
            }
        }

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file or use defaults."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    config = json.load(f)
                logger.info(f"Loaded site configuration from {self.config_path}")
                return self._merge_configs(self.default_config, config)
            except (OSError, ValueError) as e:
                logger.error(f"Failed to load config from {self.config_path}: {e}")
                logger.info("Using default configuration")
                return copy.deepcopy(self.default_config)
        else:
            logger.info(f"Config file {self.config_path} not found, using defaults")
            return copy.deepcopy(self.default_config)

    def _merge_configs(self, default: Dict, user: Dict) -> Dict:
        """Recursively merge user config with defaults."""
        merged = copy.deepcopy(default)

        for key, value in user.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._merge_configs(merged[key], value)
            else:
                merged[key] = value

        return merged

    def _apply_env_overrides(self) -> None:
        for env_name, (section, key) in ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value:
                self.config[section][key] = value
                logger.debug(f"Config {section}.{key} overridden from {env_name}")

    def save_config(self) -> None:
        """Save current configuration to file."""
        try:
            config_dir = Path(self.config_path).parent
            config_dir.mkdir(parents=True, exist_ok=True)

            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self.config, f, indent=2)
            logger.info(f"Saved site configuration to {self.config_path}")
        except OSError as e:
            logger.error(f"Failed to save config to {self.config_path}: {e}")

    def get_map_settings(self) -> Dict[str, Any]:
        """Get map display settings."""
        return self.config["map_settings"]

    def get_slideshow_settings(self) -> Dict[str, Any]:
        """Get slideshow settings."""
        return self.config["slideshow"]

    def get_backend_settings(self) -> Dict[str, Any]:
        """Get backend API settings."""
        return self.config["backend"]

    def get_frontend_settings(self) -> Dict[str, Any]:
        """Get frontend settings."""
        return self.config["frontend"]

    def get_fallback_photos(self) -> List[Dict[str, str]]:
        return [dict(photo) for photo in self.config["backend"]["fallback_photos"]]

    def update_section(self, section: str, updates: Dict[str, Any]) -> None:
        """Update one configuration section."""
        self.config.setdefault(section, {}).update(updates)
        logger.info(f"Updated {section} configuration")

    def reset_to_defaults(self) -> None:
        """Reset configuration to defaults."""
        self.config = copy.deepcopy(self.default_config)
        logger.info("Reset configuration to defaults")


# Global configuration instance
_site_config = None


def get_site_config(config_path: Optional[str] = None) -> SiteConfig:
    """Get global site configuration instance."""
    global _site_config
    if _site_config is None:
        _site_config = SiteConfig(config_path)
    return _site_config
