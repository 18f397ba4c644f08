"""Event Domain Model

事件是用户意图的不可变记录：先追加到事件日志，再交给 reducer 处理。
五种事件构成封闭的判别联合（discriminator 为 kind）。
EventRecord 是事件在日志中的信封，附带 event_id / seq / ts 等审计信息。
"""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .enums import EventKind


class _EventBase(BaseModel):
    model_config = ConfigDict(frozen=True)


class AddTaskRequested(_EventBase):
    """请求新增任务（经过一段模拟延迟后生效）"""

    kind: Literal["ADD_TASK_REQUESTED"] = "ADD_TASK_REQUESTED"
    title: str = Field(description="任务标题，空字符串不会创建任务")


class PlaybackRequested(_EventBase):
    """请求回放历史事件"""

    kind: Literal["PLAYBACK_REQUESTED"] = "PLAYBACK_REQUESTED"


class DeleteRequested(_EventBase):
    """请求删除任务（调用方已完成用户确认）"""

    kind: Literal["DELETE_REQUESTED"] = "DELETE_REQUESTED"
    index: int = Field(description="派发时任务列表中的下标")


class InputChanged(_EventBase):
    """输入框文本变化"""

    kind: Literal["INPUT_CHANGED"] = "INPUT_CHANGED"
    text: str = Field(description="当前草稿文本")


class FavoriteToggled(_EventBase):
    """设置任务收藏标记"""

    kind: Literal["FAVORITE_TOGGLED"] = "FAVORITE_TOGGLED"
    task_id: str = Field(description="目标任务 ID")
    is_favorited: bool = Field(description="新的收藏状态")


TaskEvent = Annotated[
    AddTaskRequested | PlaybackRequested | DeleteRequested | InputChanged | FavoriteToggled,
    Field(discriminator="kind"),
]

_event_adapter: TypeAdapter[TaskEvent] = TypeAdapter(TaskEvent)


def parse_event(data: dict) -> TaskEvent:
    """从普通 dict 校验并构造事件

    Raises:
        pydantic.ValidationError: kind 未知或字段不合法
    """
    return _event_adapter.validate_python(data)


class EventRecord(BaseModel):
    """事件日志条目

    seq 在同一日志内严格单调递增，回放清空工作日志后也不会复用。
    ts 仅用于审计，reducer 不读取。
    """

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(description="唯一标识，ULID 格式，时间有序")
    seq: int = Field(description="日志内序号，严格单调递增")
    ts: datetime = Field(description="追加时间")
    replay_depth: int = Field(default=0, ge=0, description="回放嵌套深度，0 表示实时提交")
    event: TaskEvent = Field(description="事件本体")

    @property
    def kind(self) -> EventKind:
        return EventKind(self.event.kind)
