"""structlog 配置模块

structlog 事件与标准库日志（uvicorn、httpx 等）走同一个 stderr handler：
- GEOTASK_LOG_FORMAT=dev（默认）：ConsoleRenderer 可读输出
- GEOTASK_LOG_FORMAT=json：每行一个 JSON 对象
- GEOTASK_LOG_LEVEL：根日志级别，非法值按 INFO 处理

请求日志由 LoggingMiddleware 输出、Tool 调用日志由 ToolClient 输出，
uvicorn.access / httpx / httpcore 的逐请求日志因此压到 WARNING。
"""

import logging
import os
import sys

import structlog

DEFAULT_LOG_FORMAT = "dev"
DEFAULT_LOG_LEVEL = "INFO"

_QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "aiosqlite")


def resolve_log_level(name: str | None) -> int:
    """日志级别名称 -> logging 常量，未知名称返回 INFO"""
    level = logging.getLevelName((name or DEFAULT_LOG_LEVEL).upper())
    return level if isinstance(level, int) else logging.INFO


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(log_format: str | None = None, log_level: str | None = None) -> None:
    """初始化日志

    Args:
        log_format: dev / json，None 时读取 GEOTASK_LOG_FORMAT
        log_level: 级别名称，None 时读取 GEOTASK_LOG_LEVEL
    """
    log_format = (log_format or os.environ.get("GEOTASK_LOG_FORMAT", DEFAULT_LOG_FORMAT)).lower()
    level = resolve_log_level(log_level or os.environ.get("GEOTASK_LOG_LEVEL"))

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if log_format == "json":
        # JSON 输出中异常以字符串字段呈现
        pre_chain.append(structlog.processors.format_exc_info)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(log_format),
            foreign_pre_chain=pre_chain,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
