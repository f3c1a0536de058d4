from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
from enum import Enum


class Environment(str, Enum):

    """运行环境枚举"""
    TESTING = "testing"
    PRODUCTION = "production"


class Settings(BaseSettings):

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # 应用基础配置
    app_name: str = "Course Marketplace"
    app_version: str = "1.0.0"
    environment: Environment = Environment.TESTING
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3001

    # 数据库配置
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "course_marketplace"
    db_user: str = "marketplace_user"
    db_password: str = "marketplace_password"
    auto_create_tables: bool = True

    # CORS配置
    cors_origins: List[str] = ["*"]

    # Stripe支付配置
    stripe_secret_key: Optional[str] = None
    payment_default_currency: str = "usd"
    # 设置后忽略调用方传入的币种
    payment_force_currency: Optional[str] = None

    # 身份认证配置 (会话令牌为JWT)
    identity_jwt_key: Optional[str] = None
    identity_jwt_algorithms: List[str] = ["RS256"]
    identity_issuer: Optional[str] = None
    identity_audience: Optional[str] = None

    # 日志配置
    log_level: str = "INFO"

    @property
    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def database_url_computed(self) -> str:
        """计算数据库URL"""
        if self.database_url:
            return self.database_url
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"


# 全局配置实例
settings = Settings()
