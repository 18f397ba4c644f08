"""EventLog 内存实现

工作日志 append-only：实时运行中只追加；只有 ReplayEngine 会移除回放触发事件
（discard）、整体取走并清空（detach），或在回放中断时放回未回放的条目（restore）。
审计轨迹 audit_trail 记录所有追加过的条目，永不清空。
"""

from collections.abc import Sequence
from datetime import UTC, datetime

from ulid import ULID

from ..models.event import EventRecord, TaskEvent


class InMemoryEventLog:
    """EventLog 的内存实现（进程生命周期内有效）"""

    def __init__(self) -> None:
        self._records: list[EventRecord] = []
        self._audit: list[EventRecord] = []
        self._next_seq = 1

    def append(self, event: TaskEvent, replay_depth: int = 0) -> EventRecord:
        """无条件追加事件，校验由 reducer 负责"""
        record = EventRecord(
            event_id=str(ULID()),
            seq=self._next_seq,
            ts=datetime.now(UTC),
            replay_depth=replay_depth,
            event=event,
        )
        self._next_seq += 1
        self._records.append(record)
        self._audit.append(record)
        return record

    def records(self) -> tuple[EventRecord, ...]:
        """工作日志快照，按追加顺序"""
        return tuple(self._records)

    def audit_trail(self) -> tuple[EventRecord, ...]:
        """所有追加过的条目（含回放触发事件与回放副本）"""
        return tuple(self._audit)

    def discard(self, event_id: str) -> bool:
        """从工作日志移除指定条目，审计轨迹保留

        Returns:
            True 如果找到并移除
        """
        for index, record in enumerate(self._records):
            if record.event_id == event_id:
                del self._records[index]
                return True
        return False

    def detach(self) -> tuple[EventRecord, ...]:
        """取走工作日志的全部条目并清空"""
        detached = tuple(self._records)
        self._records.clear()
        return detached

    def restore(self, records: Sequence[EventRecord]) -> None:
        """把未回放完的条目原样放回工作日志末尾（不重新编号，审计轨迹已有）"""
        self._records.extend(records)

    def __len__(self) -> int:
        return len(self._records)
