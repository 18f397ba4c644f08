"""Projection 重建模块

把一段事件序列折叠到全新的控制器上（零延迟、零回放间隔），得到最终状态。
用于离线重建和确定性校验。
"""

from collections.abc import Iterable

import structlog

from .config import ControllerConfig
from .controller import TaskListController
from .ids import SequentialTaskIdFactory, TaskIdFactory
from .models.event import TaskEvent
from .models.state import TaskListState

log = structlog.get_logger()


async def rebuild_state(
    events: Iterable[TaskEvent],
    config: ControllerConfig | None = None,
    id_factory: TaskIdFactory | None = None,
) -> TaskListState:
    """从事件序列重建状态

    Args:
        events: 按原顺序排列的事件
        config: 基础配置（延迟与回放间隔会被置零）
        id_factory: Task ID 工厂，默认 SequentialTaskIdFactory

    Returns:
        重建后的状态
    """
    base = config if config is not None else ControllerConfig()
    controller = TaskListController(
        base.model_copy(update={"add_task_latency_s": 0.0, "replay_interval_s": 0.0}),
        id_factory=id_factory if id_factory is not None else SequentialTaskIdFactory(),
    )

    event_count = 0
    for event in events:
        await controller.dispatch(event)
        event_count += 1

    await log.ainfo(
        "projection_rebuild_completed",
        event_count=event_count,
        task_count=len(controller.tasks),
    )
    return controller.state
