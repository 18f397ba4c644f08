"""派发结果模型

每次 dispatch 都返回 DispatchResult，观察者可以区分
"已生效" 与 "被拒绝（状态未变）"。
"""

from pydantic import BaseModel, ConfigDict, Field

from .enums import DispatchStatus, EventKind, RejectionReason
from .state import TaskListState


class DispatchResult(BaseModel):
    """单次派发结果"""

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(description="对应 EventRecord 的 event_id")
    kind: EventKind = Field(description="事件种类")
    status: DispatchStatus = Field(description="applied / rejected")
    reason: RejectionReason | None = Field(default=None, description="拒绝原因")
    replayed: int = Field(default=0, description="回放时重新派发的历史事件数")
    state: TaskListState = Field(description="派发完成后的状态快照")

    @property
    def applied(self) -> bool:
        return self.status == DispatchStatus.APPLIED
