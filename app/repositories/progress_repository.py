"""
用户课程进度数据库操作层
"""

from typing import Optional

from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.progress import UserCourseProgress
from app.models.database.progress_db import UserCourseProgressDB


class ProgressRepository:
    """用户课程进度数据库操作类"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: str, course_id: str) -> Optional[UserCourseProgressDB]:
        """根据(用户ID, 课程ID)获取进度"""
        result = await self.db.execute(
            select(UserCourseProgressDB).where(
                and_(
                    UserCourseProgressDB.user_id == user_id,
                    UserCourseProgressDB.course_id == course_id
                )
            )
        )
        return result.scalar_one_or_none()

    async def create(self, progress: UserCourseProgress) -> UserCourseProgressDB:
        """写入进度记录"""
        data = progress.model_dump(by_alias=True)
        db_progress = UserCourseProgressDB(
            user_id=progress.user_id,
            course_id=progress.course_id,
            enrollment_date=progress.enrollment_date,
            overall_progress=progress.overall_progress,
            sections=data["sections"],
            last_accessed_timestamp=progress.last_accessed_timestamp
        )
        self.db.add(db_progress)
        await self.db.flush()
        return db_progress

    def to_model(self, db_progress: UserCourseProgressDB) -> UserCourseProgress:
        """转换为Pydantic模型"""
        return UserCourseProgress(
            user_id=db_progress.user_id,
            course_id=db_progress.course_id,
            enrollment_date=db_progress.enrollment_date,
            overall_progress=db_progress.overall_progress,
            sections=db_progress.sections or [],
            last_accessed_timestamp=db_progress.last_accessed_timestamp
        )
