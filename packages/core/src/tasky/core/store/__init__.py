"""Tasky Core Store -- 内存中的事件日志与状态存储"""

from .event_log import InMemoryEventLog
from .protocols import EventLog
from .state_store import StateObserver, StateStore

__all__ = [
    "EventLog",
    "InMemoryEventLog",
    "StateObserver",
    "StateStore",
]
