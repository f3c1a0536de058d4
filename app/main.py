from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Optional
import uvicorn

from app.core.config import Settings, settings
from app.core.database import Database
from app.core.identity import IdentityClient
from app.core.payment import PaymentClient
from app.api.health import router as health_router
from app.api.courses import router as courses_router
from app.api.transactions import router as transactions_router
from app.api.users import router as users_router
from app.api.exceptions import register_exception_handlers

# 简化日志配置
import logging

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def build_database(app_settings: Settings) -> Database:
    return Database(
        app_settings.database_url_computed,
        echo=app_settings.debug,
        pool_pre_ping=True,  # 连接前ping检查
        pool_recycle=3600,   # 连接回收时间1小时
    )


def build_payment_client(app_settings: Settings) -> PaymentClient:
    return PaymentClient(
        api_key=app_settings.stripe_secret_key,
        default_currency=app_settings.payment_default_currency,
        force_currency=app_settings.payment_force_currency,
    )


def build_identity_client(app_settings: Settings) -> IdentityClient:
    return IdentityClient(
        verification_key=app_settings.identity_jwt_key,
        algorithms=app_settings.identity_jwt_algorithms,
        issuer=app_settings.identity_issuer,
        audience=app_settings.identity_audience,
    )


def create_app(
    app_settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    payment_client: Optional[PaymentClient] = None,
    identity_client: Optional[IdentityClient] = None,
) -> FastAPI:
    """创建应用，外部客户端可注入以便测试替换"""
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """应用生命周期管理"""
        logger.info("正在启动课程市场应用")

        try:
            await app.state.database.init()
            if app_settings.auto_create_tables:
                await app.state.database.create_tables()
            logger.info("应用启动完成")
        except Exception as e:
            logger.error(f"应用启动失败: {e}")
            raise

        yield

        logger.info("正在关闭应用")
        await app.state.database.close()
        logger.info("应用关闭完成")

    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        description="课程市场后端 - 课程管理、Stripe支付意图与购买记录",
        debug=app_settings.debug,
        lifespan=lifespan
    )

    app.state.settings = app_settings
    app.state.database = database or build_database(app_settings)
    app.state.payment_client = payment_client or build_payment_client(app_settings)
    app.state.identity_client = identity_client or build_identity_client(app_settings)

    # CORS中间件
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 注册路由
    app.include_router(health_router)
    app.include_router(courses_router)
    app.include_router(transactions_router)
    app.include_router(users_router)

    # 注册异常处理器
    register_exception_handlers(app)

    @app.get("/")
    async def root():
        """根路径"""
        return {
            "message": f"欢迎使用 {app_settings.app_name}",
            "version": app_settings.app_version,
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
