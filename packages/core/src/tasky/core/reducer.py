"""Reducer -- 事件到状态的确定性折叠

reduce() 是纯函数：相同的状态与事件得到相同的新状态，
唯一的例外是新增任务时由 TaskIdFactory 生成的 ID。
apply() 在 reduce() 之外加上新增任务的挂起延迟，并把结果提交到 StateStore。
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import NamedTuple

import structlog

from .config import ControllerConfig
from .ids import TaskIdFactory
from .models.enums import RejectionReason
from .models.event import (
    AddTaskRequested,
    DeleteRequested,
    FavoriteToggled,
    InputChanged,
    TaskEvent,
)
from .models.state import TaskListState
from .models.task import Task
from .store.state_store import StateStore

log = structlog.get_logger()

Sleep = Callable[[float], Awaitable[None]]


class Reduction(NamedTuple):
    """reduce() 的输出：新状态 + 拒绝原因（生效时为 None）"""

    state: TaskListState
    reason: RejectionReason | None = None


class Reducer:
    """任务列表 reducer"""

    def __init__(
        self,
        config: ControllerConfig,
        id_factory: TaskIdFactory,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._config = config
        self._id_factory = id_factory
        self._sleep = sleep

    def is_favorite_title(self, title: str) -> bool:
        """标题包含任一收藏关键词（区分大小写）"""
        return any(keyword in title for keyword in self._config.favorite_keywords)

    def is_input_valid(self, text: str) -> bool:
        return len(text) > self._config.input_min_length

    def reduce(self, state: TaskListState, event: TaskEvent) -> Reduction:
        """纯状态流转

        AddTaskRequested 在这里对应延迟结束后的那一步（is_loading 回到 False）。
        PlaybackRequested 不改变状态，由 ReplayEngine 处理。
        """
        if isinstance(event, AddTaskRequested):
            return self._add_task(state, event)
        if isinstance(event, DeleteRequested):
            return self._delete(state, event)
        if isinstance(event, InputChanged):
            return Reduction(
                state.model_copy(
                    update={
                        "draft_input": event.text,
                        "is_input_valid": self.is_input_valid(event.text),
                    }
                )
            )
        if isinstance(event, FavoriteToggled):
            return self._toggle_favorite(state, event)
        return Reduction(state)

    async def apply(self, store: StateStore, event: TaskEvent) -> Reduction:
        """将事件应用到 StateStore

        AddTaskRequested: 先提交 is_loading=True，挂起固定延迟后再提交结果。
        延迟失败按 best effort 处理：记录 warning 后继续。
        """
        if isinstance(event, AddTaskRequested):
            store.commit(store.state.model_copy(update={"is_loading": True}))
            try:
                await self._simulate_latency()
            except asyncio.CancelledError:
                store.commit(store.state.model_copy(update={"is_loading": False}))
                raise

        reduction = self.reduce(store.state, event)
        store.commit(reduction.state)
        return reduction

    async def _simulate_latency(self) -> None:
        try:
            await self._sleep(self._config.add_task_latency_s)
        except Exception:
            log.warning("add_task_latency_failed", exc_info=True)

    def _add_task(self, state: TaskListState, event: AddTaskRequested) -> Reduction:
        if not event.title:
            return Reduction(
                state.model_copy(update={"is_loading": False}),
                RejectionReason.EMPTY_TITLE,
            )

        task = Task(
            task_id=self._id_factory.mint(event.title),
            title=event.title,
            is_favorited=self.is_favorite_title(event.title),
        )
        return Reduction(
            state.model_copy(
                update={
                    "tasks": (task, *state.tasks),
                    "draft_input": "",
                    "is_input_valid": self.is_input_valid(""),
                    "is_loading": False,
                }
            )
        )

    @staticmethod
    def _delete(state: TaskListState, event: DeleteRequested) -> Reduction:
        # 负数下标同样视为越界
        if not 0 <= event.index < len(state.tasks):
            return Reduction(state, RejectionReason.INDEX_OUT_OF_RANGE)
        tasks = state.tasks[: event.index] + state.tasks[event.index + 1 :]
        return Reduction(state.model_copy(update={"tasks": tasks}))

    @staticmethod
    def _toggle_favorite(state: TaskListState, event: FavoriteToggled) -> Reduction:
        index = state.find_task(event.task_id)
        if index is None:
            return Reduction(state, RejectionReason.UNKNOWN_TASK)

        tasks = list(state.tasks)
        tasks[index] = tasks[index].model_copy(update={"is_favorited": event.is_favorited})
        return Reduction(state.model_copy(update={"tasks": tuple(tasks)}))
