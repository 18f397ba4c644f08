"""Tasky Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import DispatchStatus, EventKind, RejectionReason
from .event import (
    AddTaskRequested,
    DeleteRequested,
    EventRecord,
    FavoriteToggled,
    InputChanged,
    PlaybackRequested,
    TaskEvent,
    parse_event,
)
from .result import DispatchResult
from .state import TaskListState
from .task import Task

__all__ = [
    # 枚举
    "EventKind",
    "DispatchStatus",
    "RejectionReason",
    # Task
    "Task",
    # Event
    "TaskEvent",
    "AddTaskRequested",
    "PlaybackRequested",
    "DeleteRequested",
    "InputChanged",
    "FavoriteToggled",
    "EventRecord",
    "parse_event",
    # State
    "TaskListState",
    # Result
    "DispatchResult",
]
