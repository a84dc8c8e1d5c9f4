"""Project logging package.

Contains internal logging utilities (event catalog + EventSubLogger). Avoid
importing stdlib logging through this package name externally.
"""

from .event_catalog import EVENT_TEMPLATES, reload_event_templates  # noqa: F401
from .logger import EventSubLogger, logger  # noqa: F401

__all__ = ["EventSubLogger", "logger", "EVENT_TEMPLATES", "reload_event_templates"]
