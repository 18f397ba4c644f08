"""ReplayEngine -- 从历史事件重建状态

回放流程：
1. 从工作日志移除本次回放的触发事件（避免无限递归）
2. 将 StateStore 和 TaskIdFactory 重置为初始状态
3. 取走剩余历史事件并清空工作日志，回放出的事件会重新填充它
4. 按原顺序逐个等待固定间隔后，经控制器的派发路径重新派发；
   间隔失败只记录日志，回放被取消时尚未派发的条目放回工作日志

历史中若包含更早的 PlaybackRequested，它会在嵌套层级再次触发回放，
并在该层级同样先移除自身，因此每一层都必然终止。
"""

import asyncio
import time
from collections.abc import Awaitable, Callable

import structlog

from .config import ControllerConfig
from .ids import TaskIdFactory
from .models.event import EventRecord, TaskEvent
from .models.result import DispatchResult
from .reducer import Sleep
from .store.protocols import EventLog
from .store.state_store import StateStore

log = structlog.get_logger()

Dispatch = Callable[[TaskEvent, int], Awaitable[DispatchResult]]


class ReplayEngine:
    """回放引擎

    dispatch 必须是控制器内部的无锁派发路径：回放发生在持有派发锁的
    PlaybackRequested 处理过程中，实时提交的事件会排队等待回放结束。
    """

    def __init__(
        self,
        event_log: EventLog,
        store: StateStore,
        id_factory: TaskIdFactory,
        config: ControllerConfig,
        dispatch: Dispatch,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._event_log = event_log
        self._store = store
        self._id_factory = id_factory
        self._config = config
        self._dispatch = dispatch
        self._sleep = sleep

    async def replay(self, trigger: EventRecord) -> int:
        """执行一次回放

        Args:
            trigger: 触发本次回放的 PlaybackRequested 日志条目

        Returns:
            重新派发的历史事件数
        """
        start_time = time.monotonic()

        self._event_log.discard(trigger.event_id)
        self._store.reset()
        self._id_factory.reset()
        history = self._event_log.detach()

        depth = trigger.replay_depth + 1
        with structlog.contextvars.bound_contextvars(
            trigger_event_id=trigger.event_id, replay_depth=depth
        ):
            # 已开始派发的条目由派发路径重新追加，其余条目在中断时原样放回
            started = 0
            try:
                await log.ainfo("replay_started", event_count=len(history))
                for record in history:
                    await self._pace()
                    started += 1
                    await self._dispatch(record.event, depth)
            finally:
                if started < len(history):
                    self._event_log.restore(history[started:])
                    log.warning(
                        "replay_interrupted",
                        event_count=len(history),
                        restored=len(history) - started,
                    )

            elapsed_ms = int((time.monotonic() - start_time) * 1000)
            await log.ainfo(
                "replay_completed",
                event_count=len(history),
                task_count=len(self._store.state.tasks),
                elapsed_ms=elapsed_ms,
            )
        return len(history)

    async def _pace(self) -> None:
        """回放间隔，失败时记录日志后继续"""
        try:
            await self._sleep(self._config.replay_interval_s)
        except Exception:
            log.warning("replay_interval_failed", exc_info=True)
