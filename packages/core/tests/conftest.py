"""packages/core 测试配置 -- 零延迟配置 + 控制器 fixture"""

import logging

import pytest
import structlog
from tasky.core.config import ControllerConfig
from tasky.core.controller import TaskListController
from tasky.core.ids import SequentialTaskIdFactory


@pytest.fixture
def fast_config() -> ControllerConfig:
    """延迟与回放间隔都为 0 的配置"""
    return ControllerConfig(add_task_latency_s=0.0, replay_interval_s=0.0)


@pytest.fixture
def id_factory() -> SequentialTaskIdFactory:
    return SequentialTaskIdFactory()


@pytest.fixture
def controller(
    fast_config: ControllerConfig,
    id_factory: SequentialTaskIdFactory,
) -> TaskListController:
    """零延迟控制器"""
    return TaskListController(fast_config, id_factory=id_factory)


@pytest.fixture
def restore_logging(monkeypatch):
    """调用 setup_logging 的测试结束后恢复根 logger 与 structlog 默认配置"""
    monkeypatch.delenv("TASKY_LOG_FORMAT", raising=False)
    monkeypatch.delenv("TASKY_LOG_LEVEL", raising=False)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
