"""CLI 入口模块 -- python -m tasky.core <command>

支持的命令：
  demo [--json]  运行一段脚本化会话并回放历史（--json 输出结构化日志）
"""

import asyncio
import sys

from .config import load_controller_config
from .logging_config import setup_logging
from .models.state import TaskListState


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m tasky.core <command>")
        print("命令:")
        print("  demo [--json]  运行脚本化会话并回放历史")
        sys.exit(1)

    command = sys.argv[1]

    if command == "demo":
        setup_logging(log_format="json" if "--json" in sys.argv[2:] else None)
        asyncio.run(run_demo())
    else:
        print(f"未知命令: {command}")
        print("可用命令: demo")
        sys.exit(1)


def _print_state(label: str, state: TaskListState) -> None:
    print(f"[{label}] loading={state.is_loading} input_valid={state.is_input_valid}")
    for task in state.tasks:
        mark = "*" if task.is_favorited else " "
        print(f"  {mark} {task.task_id}  {task.title}")


async def run_demo() -> None:
    """执行脚本化会话：新增、收藏、删除，然后回放"""
    from .controller import TaskListController
    from .models.event import (
        AddTaskRequested,
        DeleteRequested,
        FavoriteToggled,
        InputChanged,
        PlaybackRequested,
    )

    config = load_controller_config()
    controller = TaskListController(config)

    script = [
        InputChanged(text="Buy milk"),
        AddTaskRequested(title="Buy milk"),
        AddTaskRequested(title="I love Go"),
        AddTaskRequested(title="Walk the dog"),
        FavoriteToggled(task_id="task-1", is_favorited=True),
        DeleteRequested(index=0),
    ]
    for event in script:
        await controller.submit(event)

    before = controller.state
    _print_state("before playback", before)

    result = await controller.submit(PlaybackRequested())
    _print_state(f"after playback ({result.replayed} events)", result.state)

    print(f"状态一致: {before.model_dump() == result.state.model_dump()}")


if __name__ == "__main__":
    main()
