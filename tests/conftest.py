"""
测试配置文件 - pytest fixtures和共用配置
"""

import pytest
import pytest_asyncio
from typing import Optional
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.database import Database
from app.core.exceptions import UnauthorizedException
from app.main import create_app
from app.models.database.course_db import CourseDB


# 配置pytest-asyncio
pytest_plugins = ('pytest_asyncio',)

# 内存SQLite，StaticPool保证所有会话共享同一连接
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakePaymentClient:
    """测试用支付客户端，记录调用参数"""

    def __init__(self):
        self.calls = []

    async def create_payment_intent(self, amount: int, currency: Optional[str] = None) -> str:
        self.calls.append((amount, currency))
        return f"pi_test_{amount}_secret"


class FakeIdentityClient:
    """测试用身份客户端，令牌内容即用户ID"""

    def resolve_user_id(self, token: str) -> str:
        if token == "invalid":
            raise UnauthorizedException("Unauthenticated", error="Invalid session token")
        return token


def make_course_db(**overrides) -> CourseDB:
    """构造内存中的CourseDB对象"""
    data = {
        "course_id": "course_001",
        "teacher_id": "t1",
        "teacher_name": "Jane",
        "title": "Untitled Course",
        "description": "No description provided",
        "category": "Uncategorized",
        "image": "",
        "price": 0,
        "level": "Beginner",
        "status": "Draft",
        "sections": [],
        "enrollments": [],
        "created_at": "2024-01-01T00:00:00+00:00",
    }
    data.update(overrides)
    return CourseDB(**data)


@pytest.fixture
def course_db_factory():
    return make_course_db


@pytest_asyncio.fixture
async def database():
    """测试数据库 - 内存SQLite"""
    db = Database(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.init()
    await db.create_tables()

    yield db

    await db.close()


@pytest_asyncio.fixture
async def db_session(database):
    """测试数据库会话"""
    async with database.session() as session:
        yield session


@pytest.fixture
def payment_client():
    return FakePaymentClient()


@pytest.fixture
def identity_client():
    return FakeIdentityClient()


@pytest_asyncio.fixture
async def client(database, payment_client, identity_client):
    """测试HTTP客户端，注入测试数据库与假客户端"""
    app = create_app(
        Settings(auto_create_tables=False),
        database=database,
        payment_client=payment_client,
        identity_client=identity_client,
    )
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client
