"""Web application package for the translation bridge."""

from typing import Any, Dict, Optional

from flask import Flask

from deeplx_bridge.config import load_config


def create_app(config_overrides: Optional[Dict[str, Any]] = None) -> Flask:
    """Application factory for the HTTP front end."""
    settings = load_config()
    if config_overrides:
        settings.update(config_overrides)

    from .app import build_app  # Import here to avoid circular imports

    return build_app(settings)


__all__ = ["create_app"]
