"""StateStore -- 当前状态持有者 + 变更推送

每次 commit 之后同步通知所有回调观察者，并向队列订阅者推送快照。
队列订阅者基于 asyncio.Queue，队列满时直接移除该订阅者。
"""

import asyncio
from collections.abc import Callable

import structlog

from ..models.state import TaskListState

log = structlog.get_logger()

StateObserver = Callable[[TaskListState], None]


class StateStore:
    """状态存储 -- 只允许 reducer（commit）和回放引擎（reset）写入"""

    def __init__(
        self,
        initial: TaskListState | None = None,
        queue_maxsize: int = 100,
    ) -> None:
        self._state = initial if initial is not None else TaskListState.initial()
        self._observers: list[StateObserver] = []
        self._queues: set[asyncio.Queue] = set()
        self._queue_maxsize = queue_maxsize

    @property
    def state(self) -> TaskListState:
        return self._state

    def commit(self, state: TaskListState) -> None:
        """替换当前状态并通知观察者"""
        self._state = state
        self._notify()

    def reset(self) -> None:
        """回到初始空状态"""
        self.commit(TaskListState.initial())

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        """注册回调观察者

        Returns:
            取消订阅的函数
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def subscribe_queue(self) -> asyncio.Queue:
        """订阅状态快照队列

        Returns:
            asyncio.Queue 实例，每次 commit 的快照会被推送到此队列
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_maxsize)
        self._queues.add(queue)
        return queue

    def unsubscribe_queue(self, queue: asyncio.Queue) -> None:
        self._queues.discard(queue)

    def _notify(self) -> None:
        snapshot = self._state
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception:
                log.exception("state_observer_failed", observer=repr(observer))

        dead_queues = []
        for queue in self._queues:
            try:
                queue.put_nowait(snapshot)
            except asyncio.QueueFull:
                dead_queues.append(queue)

        # 清理已满的队列
        for q in dead_queues:
            self._queues.discard(q)
            log.warning("state_queue_dropped", queue_maxsize=self._queue_maxsize)
