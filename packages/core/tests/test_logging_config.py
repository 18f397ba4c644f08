"""logging_config 测试 -- 渲染格式、级别、派发与回放绑定的上下文"""

import json
import logging

import pytest
import structlog
from tasky.core.controller import TaskListController
from tasky.core.logging_config import setup_logging
from tasky.core.models import AddTaskRequested, PlaybackRequested


def _json_lines(err: str) -> list[dict]:
    return [json.loads(line) for line in err.splitlines() if line.startswith("{")]


@pytest.mark.usefixtures("restore_logging")
class TestSetupLogging:
    """setup_logging 参数与环境变量"""

    def test_json_includes_bound_context(self, capsys):
        setup_logging(log_format="json")
        with structlog.contextvars.bound_contextvars(replay_depth=2):
            structlog.get_logger("tasky.test").info("replay_started", event_count=3)

        (line,) = _json_lines(capsys.readouterr().err)
        assert line["event"] == "replay_started"
        assert line["event_count"] == 3
        assert line["replay_depth"] == 2
        assert line["level"] == "info"
        assert "timestamp" in line

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("TASKY_LOG_LEVEL", "warning")
        setup_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_argument_overrides_env(self, monkeypatch):
        monkeypatch.setenv("TASKY_LOG_LEVEL", "WARNING")
        setup_logging(level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(level="chatty")
        assert logging.getLogger().level == logging.INFO

    def test_unknown_format_rejected(self):
        with pytest.raises(ValueError):
            setup_logging(log_format="xml")

    def test_single_root_handler(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1


@pytest.mark.usefixtures("restore_logging")
class TestControllerContext:
    """派发与回放的日志带上事件上下文"""

    async def test_rejection_carries_event_context(self, controller: TaskListController, capsys):
        setup_logging(log_format="json")
        result = await controller.submit(AddTaskRequested(title=""))

        lines = [
            line for line in _json_lines(capsys.readouterr().err) if line["event"] == "event_rejected"
        ]
        assert len(lines) == 1
        assert lines[0]["event_id"] == result.event_id
        assert lines[0]["kind"] == "ADD_TASK_REQUESTED"
        assert lines[0]["replay_depth"] == 0
        assert lines[0]["reason"] == "empty_title"

    async def test_replay_carries_depth_and_trigger(self, controller: TaskListController, capsys):
        setup_logging(log_format="json", level="DEBUG")
        await controller.submit(AddTaskRequested(title="a"))
        result = await controller.submit(PlaybackRequested())

        lines = _json_lines(capsys.readouterr().err)
        completed = [line for line in lines if line["event"] == "replay_completed"]
        assert len(completed) == 1
        assert completed[0]["trigger_event_id"] == result.event_id
        assert completed[0]["replay_depth"] == 1

        replayed = [
            line
            for line in lines
            if line["event"] == "event_dispatched" and line.get("trigger_event_id")
        ]
        assert [line["replay_depth"] for line in replayed] == [1]

    async def test_context_cleared_after_dispatch(self, controller: TaskListController):
        await controller.submit(AddTaskRequested(title="a"))
        assert structlog.contextvars.get_contextvars() == {}
