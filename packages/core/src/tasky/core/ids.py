"""Task ID 生成策略

reducer 不直接读取时钟或随机源，而是通过注入的 TaskIdFactory 生成 ID。
回放开始时工厂会被 reset，使回放重新生成与原始运行完全相同的 ID。
"""

from typing import Protocol


class TaskIdFactory(Protocol):
    """Task ID 工厂接口"""

    def mint(self, title: str) -> str:
        """为即将创建的任务生成唯一 ID"""
        ...

    def reset(self) -> None:
        """回到初始状态（回放开始时调用）"""
        ...


class SequentialTaskIdFactory:
    """单调递增 ID：task-1, task-2, ...

    与标题无关，重复标题不会产生冲突。
    """

    def __init__(self, prefix: str = "task") -> None:
        self._prefix = prefix
        self._counter = 0

    def mint(self, title: str) -> str:
        self._counter += 1
        return f"{self._prefix}-{self._counter}"

    def reset(self) -> None:
        self._counter = 0
