"""Configuration module for the Crowd group client."""
from .settings import CrowdSettings, load_settings

__all__ = ["CrowdSettings", "load_settings"]
