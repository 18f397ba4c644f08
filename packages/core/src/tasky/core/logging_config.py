"""structlog 配置

控制器派发事件时绑定 event_id / kind / replay_depth，回放引擎绑定
trigger_event_id / replay_depth（structlog.contextvars）。merge_contextvars
把这些上下文并入每条日志，嵌套回放中的日志因此能看出所在层级。
"""

import logging
import os

import structlog

LOG_FORMATS = ("dev", "json")


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer()


def setup_logging(log_format: str | None = None, level: str | None = None) -> None:
    """初始化 structlog，输出经标准库 logging 的根 handler

    Args:
        log_format: "dev"（默认，可读输出）或 "json"；为 None 时读 TASKY_LOG_FORMAT
        level: 日志级别名；为 None 时读 TASKY_LOG_LEVEL，无法识别时用 INFO
    """
    log_format = log_format or os.environ.get("TASKY_LOG_FORMAT", "dev")
    level = level or os.environ.get("TASKY_LOG_LEVEL", "INFO")
    if log_format not in LOG_FORMATS:
        raise ValueError(f"未知日志格式: {log_format}，可选 {', '.join(LOG_FORMATS)}")

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    # json 输出需要先把 exc_info 格式化成字符串，ConsoleRenderer 自己处理
    render_chain: list[structlog.types.Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if log_format == "json":
        render_chain.append(structlog.processors.format_exc_info)
    render_chain.append(_renderer(log_format))

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processors=render_chain, foreign_pre_chain=pre_chain)
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
