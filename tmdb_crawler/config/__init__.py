"""Configuration package exports."""

from .loader import ConfigLoader, ConfigLocator
from .models import ApiConfig, CrawlConfig, EntityKind, FilterThresholds

__all__ = [
    "ApiConfig",
    "ConfigLoader",
    "ConfigLocator",
    "CrawlConfig",
    "EntityKind",
    "FilterThresholds",
]
