"""Route blueprints for the web application."""

from .translate import translate_bp

__all__ = [
    "translate_bp",
]
