from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, AsyncEngine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy import text
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional
import logging

logger = logging.getLogger(__name__)

# 创建基础模型类
Base = declarative_base()


class Database:
    """文档存储连接管理器

    由应用生命周期显式创建并注入，每个请求通过 session() 获取独立会话。
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs: Any):
        self.url = url
        self.echo = echo
        self.engine_kwargs = engine_kwargs
        self.engine: Optional[AsyncEngine] = None
        self.session_maker: Optional[async_sessionmaker] = None

    async def init(self) -> None:
        """初始化数据库连接"""
        if self.engine is not None:
            return

        try:
            self.engine = create_async_engine(self.url, echo=self.echo, **self.engine_kwargs)
            self.session_maker = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False
            )
            logger.info("数据库连接初始化成功")
        except Exception as e:
            logger.error(f"数据库连接初始化失败: {e}")
            raise

    async def create_tables(self) -> None:
        """根据模型元数据建表（已存在的表跳过）"""
        # 导入模型以注册到Base.metadata
        import app.models.database  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("数据表创建完成")

    async def close(self) -> None:
        """关闭数据库连接"""
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self.session_maker = None
            logger.info("数据库连接已关闭")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """获取请求级数据库会话，请求结束时统一提交"""
        if not self.session_maker:
            raise RuntimeError("数据库未初始化，请先调用 init()")

        async with self.session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def health_check(self) -> Dict[str, Any]:
        """数据库健康检查"""
        try:
            if not self.engine:
                return {"status": "error", "message": "数据库引擎未初始化"}

            async with self.engine.begin() as conn:
                result = await conn.execute(text("SELECT 1"))
                row = result.fetchone()

            return {
                "status": "healthy",
                "message": "数据库连接正常",
                "test_query_result": row[0] if row else None
            }

        except Exception as e:
            return {
                "status": "error",
                "message": f"数据库连接失败: {str(e)}"
            }
