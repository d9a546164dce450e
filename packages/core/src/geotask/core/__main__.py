"""CLI 入口模块 -- python -m geotask.core <command>

支持的命令：
  list    按 pending / completed 分组列出任务
  export  以持久化格式（JSON）输出任务集合
"""

import asyncio
import sys

from .config import get_db_path, get_tasks_slot_key

COMMANDS = ("list", "export")


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m geotask.core <command>")
        print("命令:")
        print("  list    按 pending / completed 分组列出任务")
        print("  export  以 JSON 输出任务集合")
        sys.exit(1)

    command = sys.argv[1]

    if command in COMMANDS:
        asyncio.run(run(command))
    else:
        print(f"未知命令: {command}")
        print(f"可用命令: {', '.join(COMMANDS)}")
        sys.exit(1)


async def run(command: str) -> None:
    """打开 Store 并执行命令"""
    from .store import create_store_group, encode_tasks

    db_path = get_db_path()
    store_group = await create_store_group(db_path, slot_key=get_tasks_slot_key())

    try:
        store = store_group.task_store
        if command == "export":
            print(encode_tasks(store.list_tasks()))
            return

        print(f"数据库路径: {db_path}")
        for label, tasks in (("pending", store.pending()), ("completed", store.completed())):
            print(f"[{label}] {len(tasks)}")
            for task in tasks:
                where = f" @ {task.location.address}" if task.location else ""
                print(f"  {task.id}  ({task.priority.value}) {task.title}{where}")
    finally:
        await store_group.conn.close()


if __name__ == "__main__":
    main()
