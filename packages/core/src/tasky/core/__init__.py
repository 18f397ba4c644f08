"""Tasky Core -- 事件溯源的任务列表状态控制器

事件日志 + 确定性 reducer + 回放引擎。表现层通过 TaskListController.submit
提交事件，并通过 subscribe 订阅状态快照。
"""

from .config import ControllerConfig, load_controller_config
from .controller import TaskListController
from .ids import SequentialTaskIdFactory, TaskIdFactory
from .logging_config import setup_logging
from .models import (
    AddTaskRequested,
    DeleteRequested,
    DispatchResult,
    DispatchStatus,
    EventKind,
    EventRecord,
    FavoriteToggled,
    InputChanged,
    PlaybackRequested,
    RejectionReason,
    Task,
    TaskEvent,
    TaskListState,
    parse_event,
)
from .projection import rebuild_state
from .reducer import Reducer, Reduction
from .replay import ReplayEngine
from .store import EventLog, InMemoryEventLog, StateStore

__all__ = [
    # 控制器
    "TaskListController",
    "Reducer",
    "Reduction",
    "ReplayEngine",
    "rebuild_state",
    # 存储
    "EventLog",
    "InMemoryEventLog",
    "StateStore",
    # ID
    "TaskIdFactory",
    "SequentialTaskIdFactory",
    # 配置
    "ControllerConfig",
    "load_controller_config",
    "setup_logging",
    # 模型
    "Task",
    "TaskEvent",
    "AddTaskRequested",
    "PlaybackRequested",
    "DeleteRequested",
    "InputChanged",
    "FavoriteToggled",
    "EventRecord",
    "EventKind",
    "DispatchStatus",
    "RejectionReason",
    "DispatchResult",
    "TaskListState",
    "parse_event",
]
