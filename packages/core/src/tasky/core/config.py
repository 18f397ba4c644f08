"""ControllerConfig -- 控制器配置加载

从环境变量加载延迟、回放节奏、输入校验阈值和收藏关键词。
"""

import os

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

_DEFAULT_ADD_TASK_LATENCY_S = 1.0
_DEFAULT_REPLAY_INTERVAL_S = 0.1
_DEFAULT_INPUT_MIN_LENGTH = 3


class ControllerConfig(BaseModel):
    """控制器配置 -- 从环境变量加载

    环境变量:
        TASKY_ADD_TASK_LATENCY_S: 新增任务的模拟延迟（秒，默认 1.0）
        TASKY_REPLAY_INTERVAL_S: 回放时相邻事件的间隔（秒，默认 0.1）
        TASKY_INPUT_MIN_LENGTH: 输入长度阈值（默认 3，长度必须严格大于它）
        TASKY_FAVORITE_KEYWORDS: 自动收藏关键词（逗号分隔，区分大小写）
    """

    add_task_latency_s: float = Field(
        default=_DEFAULT_ADD_TASK_LATENCY_S,
        ge=0,
        description="新增任务的模拟网络/校验延迟（秒）",
    )
    replay_interval_s: float = Field(
        default=_DEFAULT_REPLAY_INTERVAL_S,
        ge=0,
        description="回放时每个历史事件之前的等待（秒）",
    )
    input_min_length: int = Field(
        default=_DEFAULT_INPUT_MIN_LENGTH,
        ge=0,
        description="len(text) > input_min_length 时输入有效",
    )
    favorite_keywords: tuple[str, ...] = Field(
        default=("love", "Suat"),
        description="标题包含任一关键词时新任务自动收藏",
    )


def _read_float(env_var: str, default: float) -> float | None:
    val = os.environ.get(env_var)
    if not val:
        return None
    try:
        return float(val)
    except ValueError:
        log.warning("invalid_config_value", env_var=env_var, value=val, fallback=default)
        return None


def load_controller_config() -> ControllerConfig:
    """从环境变量加载控制器配置

    无法解析的数值记录 warning 并使用默认值，不阻塞启动。

    Returns:
        ControllerConfig 实例
    """
    kwargs: dict = {}

    latency = _read_float("TASKY_ADD_TASK_LATENCY_S", _DEFAULT_ADD_TASK_LATENCY_S)
    if latency is not None:
        kwargs["add_task_latency_s"] = latency

    interval = _read_float("TASKY_REPLAY_INTERVAL_S", _DEFAULT_REPLAY_INTERVAL_S)
    if interval is not None:
        kwargs["replay_interval_s"] = interval

    if val := os.environ.get("TASKY_INPUT_MIN_LENGTH"):
        try:
            kwargs["input_min_length"] = int(val)
        except ValueError:
            log.warning(
                "invalid_config_value",
                env_var="TASKY_INPUT_MIN_LENGTH",
                value=val,
                fallback=_DEFAULT_INPUT_MIN_LENGTH,
            )

    if val := os.environ.get("TASKY_FAVORITE_KEYWORDS"):
        keywords = tuple(k.strip() for k in val.split(",") if k.strip())
        if keywords:
            kwargs["favorite_keywords"] = keywords

    return ControllerConfig(**kwargs)
