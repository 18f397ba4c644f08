"""TaskListController 测试

测试内容：
1. submit 返回 DispatchResult（applied / rejected）
2. 派发串行化：延迟期间到达的事件排队
3. 只读访问器与订阅
4. append 只入日志不派发
"""

import asyncio

from tasky.core.config import ControllerConfig
from tasky.core.controller import TaskListController
from tasky.core.models import (
    AddTaskRequested,
    DeleteRequested,
    DispatchStatus,
    EventKind,
    FavoriteToggled,
    InputChanged,
    RejectionReason,
    TaskListState,
)


class TestSubmit:
    """单事件派发"""

    async def test_add_task(self, controller: TaskListController):
        result = await controller.submit(AddTaskRequested(title="I love Go"))

        assert result.status == DispatchStatus.APPLIED
        assert result.kind == EventKind.ADD_TASK_REQUESTED
        assert result.state.tasks[0].title == "I love Go"
        assert result.state.tasks[0].is_favorited is True
        assert controller.tasks == result.state.tasks
        assert controller.is_loading is False

    async def test_input_changed(self, controller: TaskListController):
        await controller.submit(InputChanged(text="abc"))
        assert controller.draft_input == "abc"
        assert controller.is_input_valid is False

        await controller.submit(InputChanged(text="abcd"))
        assert controller.is_input_valid is True

    async def test_rejections_are_results_not_errors(self, controller: TaskListController):
        """越界删除 / 未知 ID / 空标题都返回 rejected"""
        await controller.submit(AddTaskRequested(title="a"))
        await controller.submit(AddTaskRequested(title="b"))
        before = controller.state.model_dump()

        out_of_range = await controller.submit(DeleteRequested(index=99))
        unknown = await controller.submit(FavoriteToggled(task_id="task-9", is_favorited=True))
        empty = await controller.submit(AddTaskRequested(title=""))

        assert out_of_range.reason == RejectionReason.INDEX_OUT_OF_RANGE
        assert unknown.reason == RejectionReason.UNKNOWN_TASK
        assert empty.reason == RejectionReason.EMPTY_TITLE
        assert not out_of_range.applied
        assert controller.state.model_dump() == before

    async def test_rejected_events_are_logged(self, controller: TaskListController):
        """拒绝的事件同样保留在日志中"""
        result = await controller.submit(DeleteRequested(index=5))
        assert [r.event_id for r in controller.events] == [result.event_id]

    async def test_favorite_toggle_by_id(self, controller: TaskListController):
        await controller.submit(AddTaskRequested(title="hello"))
        result = await controller.submit(FavoriteToggled(task_id="task-1", is_favorited=True))
        assert result.applied
        assert controller.tasks[0].is_favorited is True


class TestSerialization:
    """派发串行化"""

    async def test_concurrent_adds_keep_submission_order(self):
        """两个并发新增不交错，按提交顺序插入"""
        controller = TaskListController(
            ControllerConfig(add_task_latency_s=0.01, replay_interval_s=0.0)
        )
        await asyncio.gather(
            controller.submit(AddTaskRequested(title="first")),
            controller.submit(AddTaskRequested(title="second")),
        )
        assert [t.title for t in controller.tasks] == ["second", "first"]
        assert [t.task_id for t in controller.tasks] == ["task-2", "task-1"]

    async def test_event_waits_for_in_flight_add(self):
        """新增任务挂起期间到达的删除事件等待其完成后再执行"""
        gate = asyncio.Event()

        async def gated_sleep(seconds: float) -> None:
            await gate.wait()

        controller = TaskListController(ControllerConfig(), sleep=gated_sleep)
        add = asyncio.create_task(controller.submit(AddTaskRequested(title="hello")))
        await asyncio.sleep(0)
        delete = asyncio.create_task(controller.submit(DeleteRequested(index=0)))
        await asyncio.sleep(0)

        assert controller.is_loading is True
        assert not delete.done()
        assert len(controller.events) == 1

        gate.set()
        add_result, delete_result = await asyncio.gather(add, delete)

        assert add_result.applied
        assert delete_result.applied
        assert controller.tasks == ()


class TestObservation:
    """订阅"""

    async def test_subscriber_sees_every_commit(self, controller: TaskListController):
        seen: list[TaskListState] = []
        unsubscribe = controller.subscribe(seen.append)

        await controller.submit(InputChanged(text="hello"))
        await controller.submit(AddTaskRequested(title="hello"))
        assert [s.is_loading for s in seen] == [False, True, False]

        unsubscribe()
        await controller.submit(InputChanged(text="x"))
        assert len(seen) == 3

    async def test_rejected_dispatch_still_notifies(self, controller: TaskListController):
        seen: list[TaskListState] = []
        controller.subscribe(seen.append)
        await controller.submit(DeleteRequested(index=0))
        assert len(seen) == 1

    async def test_queue_subscription(self, controller: TaskListController):
        queue = controller.subscribe_queue()
        await controller.submit(InputChanged(text="abcd"))
        snapshot = await asyncio.wait_for(queue.get(), timeout=1)
        assert snapshot.is_input_valid is True
        controller.unsubscribe_queue(queue)


class TestAppend:
    """append 只入日志"""

    async def test_append_does_not_reduce(self, controller: TaskListController):
        record = controller.append(AddTaskRequested(title="later"))
        assert controller.tasks == ()
        assert controller.events == (record,)


class TestDefaults:
    """默认构造"""

    def test_default_config_from_env(self, monkeypatch):
        monkeypatch.setenv("TASKY_ADD_TASK_LATENCY_S", "0.25")
        controller = TaskListController()
        assert controller.config.add_task_latency_s == 0.25
