"""
依赖注入 - 从应用状态获取适配器并组装服务
"""

from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import Database
from app.core.exceptions import UnauthorizedException
from app.core.identity import IdentityClient
from app.core.payment import PaymentClient
from app.repositories.course_repository import CourseRepository
from app.repositories.progress_repository import ProgressRepository
from app.repositories.transaction_repository import TransactionRepository
from app.services.course_service import CourseService
from app.services.transaction_service import TransactionService

bearer_scheme = HTTPBearer(auto_error=False)


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_payment_client(request: Request) -> PaymentClient:
    return request.app.state.payment_client


def get_identity_client(request: Request) -> IdentityClient:
    return request.app.state.identity_client


async def get_db_session(database: Database = Depends(get_database)) -> AsyncGenerator[AsyncSession, None]:
    """请求级数据库会话"""
    async with database.session() as session:
        yield session


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    identity_client: IdentityClient = Depends(get_identity_client),
) -> str:
    """解析调用者身份，未认证时返回401"""
    if credentials is None:
        raise UnauthorizedException("Unauthenticated", error="Missing bearer token")
    return identity_client.resolve_user_id(credentials.credentials)


def get_course_service(db: AsyncSession = Depends(get_db_session)) -> CourseService:
    return CourseService(CourseRepository(db))


def get_transaction_service(
    db: AsyncSession = Depends(get_db_session),
    payment_client: PaymentClient = Depends(get_payment_client),
) -> TransactionService:
    return TransactionService(
        transaction_repo=TransactionRepository(db),
        progress_repo=ProgressRepository(db),
        course_repo=CourseRepository(db),
        payment_client=payment_client
    )
