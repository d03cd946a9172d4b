"""Configuration Module"""
from . import settings
from .settings import configure_logging

__all__ = ["settings", "configure_logging"]
