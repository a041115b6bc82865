"""switchdesk - backend of a live production-switcher control surface."""

__version__ = "1.0.0"
