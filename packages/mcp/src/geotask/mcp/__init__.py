"""GeoTask MCP -- 远程 Tool 调用抽象层

packages/mcp 的公开接口导出。
"""

from .client import ToolClient
from .config import McpConfig, load_mcp_config
from .exceptions import (
    InvalidArgumentError,
    ProtocolError,
    ToolClientError,
    TransportError,
)
from .maps import MapsClient
from .models import (
    Direction,
    DirectionLeg,
    DirectionResult,
    LatLng,
    Place,
    PlaceDetail,
    PlaceList,
    ToolList,
    ToolResponse,
)

__all__ = [
    "ToolClient",
    "MapsClient",
    "McpConfig",
    "load_mcp_config",
    # 模型
    "ToolResponse",
    "ToolList",
    "LatLng",
    "Place",
    "Direction",
    "DirectionLeg",
    "PlaceList",
    "PlaceDetail",
    "DirectionResult",
    # 异常
    "ToolClientError",
    "TransportError",
    "ProtocolError",
    "InvalidArgumentError",
]
