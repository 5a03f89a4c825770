"""Game managers.

- log_manager.py: Event-driven match log with categories and file export
"""

from .log_manager import LogManager, LogCategory, LogLevel, LogMessage

__all__ = [
    "LogManager",
    "LogCategory",
    "LogLevel",
    "LogMessage",
]
