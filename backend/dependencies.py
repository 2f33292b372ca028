"""
Dependency injection for FastAPI endpoints.

Provides singleton instances of Config and Prioritizer to be used across
all API routes.
"""

from functools import lru_cache

from focus_planner.core.config import Config
from focus_planner.scheduler.prioritizer import Prioritizer


@lru_cache()
def get_config() -> Config:
    """
    Get cached Config instance.

    lru_cache ensures we only create one Config instance
    for the lifetime of the application.
    """
    return Config()


@lru_cache()
def get_prioritizer() -> Prioritizer:
    """
    Get cached Prioritizer instance.

    The prioritizer only holds read-only settings, so one instance
    serves every request.
    """
    return Prioritizer(get_config())
