"""TaskListController -- 事件入口

所有事件经 dispatch 进入：先追加到事件日志，再交给 reducer。
派发由 asyncio.Lock 串行化，新增任务的挂起延迟期间到达的事件会排队，
不会与进行中的状态修改交错。
"""

import asyncio
from collections.abc import Callable

import structlog

from .config import ControllerConfig, load_controller_config
from .ids import SequentialTaskIdFactory, TaskIdFactory
from .models.enums import DispatchStatus, EventKind
from .models.event import EventRecord, PlaybackRequested, TaskEvent
from .models.result import DispatchResult
from .models.state import TaskListState
from .models.task import Task
from .reducer import Reducer, Sleep
from .replay import ReplayEngine
from .store.event_log import InMemoryEventLog
from .store.protocols import EventLog
from .store.state_store import StateObserver, StateStore

log = structlog.get_logger()


class TaskListController:
    """任务列表控制器 -- 唯一持有事件日志，表现层只通过 submit 提交事件"""

    def __init__(
        self,
        config: ControllerConfig | None = None,
        *,
        id_factory: TaskIdFactory | None = None,
        event_log: EventLog | None = None,
        state_store: StateStore | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._config = config if config is not None else load_controller_config()
        self._id_factory = id_factory if id_factory is not None else SequentialTaskIdFactory()
        self._event_log = event_log if event_log is not None else InMemoryEventLog()
        self._store = state_store if state_store is not None else StateStore()
        self._lock = asyncio.Lock()
        self._reducer = Reducer(self._config, self._id_factory, sleep)
        self._replay = ReplayEngine(
            self._event_log,
            self._store,
            self._id_factory,
            self._config,
            dispatch=self._dispatch,
            sleep=sleep,
        )

    @property
    def config(self) -> ControllerConfig:
        return self._config

    @property
    def state(self) -> TaskListState:
        return self._store.state

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._store.state.tasks

    @property
    def is_loading(self) -> bool:
        return self._store.state.is_loading

    @property
    def is_input_valid(self) -> bool:
        return self._store.state.is_input_valid

    @property
    def draft_input(self) -> str:
        return self._store.state.draft_input

    @property
    def events(self) -> tuple[EventRecord, ...]:
        """工作日志（回放会清空并重新填充）"""
        return self._event_log.records()

    @property
    def audit_trail(self) -> tuple[EventRecord, ...]:
        return self._event_log.audit_trail()

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        """订阅状态变更，返回取消订阅函数"""
        return self._store.subscribe(observer)

    def subscribe_queue(self) -> asyncio.Queue:
        return self._store.subscribe_queue()

    def unsubscribe_queue(self, queue: asyncio.Queue) -> None:
        self._store.unsubscribe_queue(queue)

    def append(self, event: TaskEvent) -> EventRecord:
        """仅追加事件到日志，不派发（下次回放时才会生效）"""
        return self._event_log.append(event)

    async def dispatch(self, event: TaskEvent) -> DispatchResult:
        """追加并派发事件（串行）

        Returns:
            DispatchResult；输入不合法时 status=rejected，不抛异常
        """
        async with self._lock:
            return await self._dispatch(event, 0)

    async def submit(self, event: TaskEvent) -> DispatchResult:
        """表现层入口，等同于 dispatch"""
        return await self.dispatch(event)

    async def _dispatch(self, event: TaskEvent, replay_depth: int) -> DispatchResult:
        record = self._event_log.append(event, replay_depth)

        if isinstance(event, PlaybackRequested):
            replayed = await self._replay.replay(record)
            return DispatchResult(
                event_id=record.event_id,
                kind=EventKind.PLAYBACK_REQUESTED,
                status=DispatchStatus.APPLIED,
                replayed=replayed,
                state=self._store.state,
            )

        with structlog.contextvars.bound_contextvars(
            event_id=record.event_id, kind=record.kind, replay_depth=replay_depth
        ):
            reduction = await self._reducer.apply(self._store, event)

            if reduction.reason is not None:
                await log.ainfo("event_rejected", reason=reduction.reason)
                status = DispatchStatus.REJECTED
            else:
                await log.adebug("event_dispatched", seq=record.seq)
                status = DispatchStatus.APPLIED

        return DispatchResult(
            event_id=record.event_id,
            kind=record.kind,
            status=status,
            reason=reduction.reason,
            state=reduction.state,
        )
