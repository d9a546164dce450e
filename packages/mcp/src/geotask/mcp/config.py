"""McpConfig -- Tool 服务端配置加载

从环境变量加载配置，远端地址在构造客户端时一次性确定。
"""

import os

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

DEFAULT_MCP_URL = "https://mcp.open-mcp.org/api/server/google-maps@latest/mcp"
DEFAULT_TIMEOUT_S = 30


class McpConfig(BaseModel):
    """Tool 客户端配置 -- 从环境变量加载

    环境变量:
        GEOTASK_MCP_URL: Tool 服务端基础 URL
        GEOTASK_MCP_TIMEOUT_S: 单次调用超时（秒，默认 30）
    """

    base_url: str = Field(
        default=DEFAULT_MCP_URL,
        min_length=1,
        description="Tool 服务端基础 URL",
    )
    timeout_s: float = Field(
        default=DEFAULT_TIMEOUT_S,
        gt=0,
        description="单次 Tool 调用超时（秒）",
    )


def load_mcp_config() -> McpConfig:
    """从环境变量加载 Tool 客户端配置

    环境变量映射:
        GEOTASK_MCP_URL -> base_url
        GEOTASK_MCP_TIMEOUT_S -> timeout_s (默认 30，非法值回落默认)
    """
    kwargs: dict = {}

    if val := os.environ.get("GEOTASK_MCP_URL"):
        kwargs["base_url"] = val

    if val := os.environ.get("GEOTASK_MCP_TIMEOUT_S"):
        try:
            timeout = float(val)
            if timeout <= 0:
                raise ValueError(val)
            kwargs["timeout_s"] = timeout
        except ValueError:
            log.warning(
                "invalid_timeout_config",
                env_var="GEOTASK_MCP_TIMEOUT_S",
                value=val,
                fallback=DEFAULT_TIMEOUT_S,
            )

    return McpConfig(**kwargs)
