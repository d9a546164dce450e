"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、任务持久化槽名称等可配置常量。
"""

import os
from pathlib import Path

# 浏览器版本使用的 localStorage key，保持一致便于迁移
DEFAULT_TASKS_SLOT_KEY = "todos"


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("GEOTASK_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "GEOTASK_DB_PATH",
        str(_get_base_dir() / "sqlite" / "geotask.db"),
    )


def get_tasks_slot_key() -> str:
    """获取任务集合所在的 key"""
    return os.environ.get("GEOTASK_TASKS_SLOT_KEY", DEFAULT_TASKS_SLOT_KEY)


# 序列化格式版本（见 store/codec.py）
TASKS_SCHEMA_VERSION: int = 1
