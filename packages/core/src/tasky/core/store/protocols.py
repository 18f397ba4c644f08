"""Store Protocol 接口定义

定义 EventLog 的抽象接口，使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from collections.abc import Sequence
from typing import Protocol

from ..models.event import EventRecord, TaskEvent


class EventLog(Protocol):
    """事件日志接口

    工作日志只追加；discard / detach / restore 仅供回放引擎使用。
    """

    def append(self, event: TaskEvent, replay_depth: int = 0) -> EventRecord:
        """无条件追加事件"""
        ...

    def records(self) -> tuple[EventRecord, ...]:
        """工作日志快照"""
        ...

    def audit_trail(self) -> tuple[EventRecord, ...]:
        """所有追加过的条目"""
        ...

    def discard(self, event_id: str) -> bool:
        """从工作日志移除指定条目"""
        ...

    def detach(self) -> tuple[EventRecord, ...]:
        """取走全部条目并清空工作日志"""
        ...

    def restore(self, records: Sequence[EventRecord]) -> None:
        """把条目原样放回工作日志末尾"""
        ...
