from .event_log import LEVELS, EventLog

__all__ = ["LEVELS", "EventLog"]
