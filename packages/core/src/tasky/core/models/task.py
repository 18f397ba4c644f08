"""Task Domain Model

Task 是任务列表中的一条记录，本身不带行为。
task_id 是不透明的唯一标识，与 title 无关；相等性只比较 task_id。
"""

from pydantic import BaseModel, ConfigDict, Field


class Task(BaseModel):
    """Task 数据模型

    状态变更（收藏标记）通过 model_copy 生成新实例，原实例不可变。
    """

    model_config = ConfigDict(frozen=True)

    task_id: str = Field(description="唯一标识，创建后不变且不复用")
    title: str = Field(description="任务标题")
    is_favorited: bool = Field(default=False, description="是否收藏")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.task_id == other.task_id

    def __hash__(self) -> int:
        return hash(self.task_id)
