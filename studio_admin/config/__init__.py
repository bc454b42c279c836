"""Configuration module for the studio admin backend."""
from .settings import AppConfig, load_settings

__all__ = ["AppConfig", "load_settings"]
