"""Configuration loader with YAML and environment variable support.

This module reads ~/.config/quickclass/config.yaml (if present) and applies
environment variable overrides using the QUICKCLASS_ prefix. A missing file
is not an error: every setting has a default.

Environment variables:
- QUICKCLASS_BACKEND_KIND: Override backend.kind ("file" or "ajax")
- QUICKCLASS_BACKEND_PATH: Override backend.path
- QUICKCLASS_BACKEND_AJAX_URL: Override backend.ajax_url
- QUICKCLASS_BACKEND_NONCE: Override backend.nonce
- QUICKCLASS_UI_STATUS_TIMEOUT: Override ui.status_timeout (seconds)
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from quickclass.models.config import Config
from quickclass.utils.logging import get_logger


logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "quickclass" / "config.yaml"


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to config file. If None, uses ~/.config/quickclass/config.yaml

    Returns:
        Validated Config object

    Raises:
        ValueError: If the YAML is malformed or fails validation
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if config_path.exists():
        with config_path.open(encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Configuration in {config_path} must be a mapping")
        logger.info("config_file_loaded", path=str(config_path))
    else:
        data = {}
        logger.info("config_file_missing_using_defaults", path=str(config_path))

    data = _apply_env_overrides(data)

    # Pydantic will validate the structure
    return Config(**data)


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to configuration data.

    Environment variables use the format: QUICKCLASS_SECTION_KEY
    For example: QUICKCLASS_BACKEND_NONCE sets data['backend']['nonce']

    Args:
        data: Base configuration dictionary from YAML

    Returns:
        Configuration dictionary with environment overrides applied
    """
    backend = dict(data.get("backend") or {})
    ui = dict(data.get("ui") or {})

    if env_kind := os.getenv("QUICKCLASS_BACKEND_KIND"):
        backend["kind"] = env_kind

    if env_path := os.getenv("QUICKCLASS_BACKEND_PATH"):
        backend["path"] = env_path

    if env_url := os.getenv("QUICKCLASS_BACKEND_AJAX_URL"):
        backend["ajax_url"] = env_url

    if env_nonce := os.getenv("QUICKCLASS_BACKEND_NONCE"):
        backend["nonce"] = env_nonce

    if env_timeout := os.getenv("QUICKCLASS_UI_STATUS_TIMEOUT"):
        try:
            ui["status_timeout"] = float(env_timeout)
        except ValueError:
            pass  # Invalid value, ignore

    data["backend"] = backend
    data["ui"] = ui
    return data
