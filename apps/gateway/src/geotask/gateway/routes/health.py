"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，SQLite 连通性；profile=mcp 时额外探测 Tool 服务端。
"""

import structlog
from fastapi import APIRouter, Depends, Query, Request
from geotask.core.store import StoreGroup
from starlette.responses import JSONResponse

from ..deps import get_store_group

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready(
    request: Request,
    profile: str | None = Query(
        default=None,
        description="core（默认）仅核心检查；mcp/full 包含 Tool 服务端探测",
    ),
    store_group: StoreGroup = Depends(get_store_group),
):
    """Readiness 检查

    检查项：
    1. sqlite: 数据库连通性
    2. tool_server: 根据 profile 决定是否探测（tools/list）
    """
    effective_profile = profile or "core"

    checks = {}
    all_ok = True

    # 1. SQLite 连通性检查
    try:
        cursor = await store_group.conn.execute("SELECT 1")
        await cursor.fetchone()
        checks["sqlite"] = "ok"
    except Exception as e:
        checks["sqlite"] = f"error: {str(e)}"
        all_ok = False

    # 2. Tool 服务端检查
    if effective_profile in ("mcp", "full"):
        tool_client = getattr(request.app.state, "tool_client", None)
        if tool_client is not None and await tool_client.health_check():
            checks["tool_server"] = "ok"
        else:
            log.warning("tool_server_not_ready", profile=effective_profile)
            checks["tool_server"] = "unreachable"
            all_ok = False
    else:
        checks["tool_server"] = "skipped"

    status_code = 200 if all_ok else 503
    status_text = "ready" if all_ok else "not_ready"

    return JSONResponse(
        status_code=status_code,
        content={
            "status": status_text,
            "profile": effective_profile,
            "checks": checks,
        },
    )
