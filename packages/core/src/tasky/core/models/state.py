"""State Model

TaskListState 是由事件折叠出的当前状态，只由 StateStore 持有。
"""

from pydantic import BaseModel, ConfigDict, Field

from .task import Task


class TaskListState(BaseModel):
    """任务列表状态快照（不可变）

    tasks 按插入时间倒序排列（最新的在最前）。
    Task 的相等性只比较 task_id，因此结构比较请使用 model_dump()。
    """

    model_config = ConfigDict(frozen=True)

    tasks: tuple[Task, ...] = Field(default=(), description="任务列表，最新在前")
    is_loading: bool = Field(default=False, description="是否有新增任务在处理中")
    is_input_valid: bool = Field(default=False, description="草稿文本是否满足长度要求")
    draft_input: str = Field(default="", description="草稿文本")

    @classmethod
    def initial(cls) -> "TaskListState":
        return cls()

    def find_task(self, task_id: str) -> int | None:
        """按 task_id 查找下标，不存在返回 None"""
        for index, task in enumerate(self.tasks):
            if task.task_id == task_id:
                return index
        return None
