"""
课程市场数据库表初始化脚本

运行方式:
python -m app.scripts.init_tables
"""

import asyncio
import logging

from app.core.config import settings
from app.main import build_database

logger = logging.getLogger(__name__)


async def create_tables():
    """创建课程、交易与学习进度数据表"""
    database = build_database(settings)
    try:
        await database.init()
        logger.info("开始创建数据表...")
        await database.create_tables()
        logger.info("数据库初始化完成")
    except Exception as e:
        logger.error(f"创建数据表失败: {e}")
        raise
    finally:
        await database.close()


if __name__ == "__main__":
    asyncio.run(create_tables())
