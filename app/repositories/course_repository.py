"""
课程数据库操作层
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.course import Course
from app.models.database.course_db import CourseDB


class CourseRepository:
    """课程数据库操作类"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_course_id(self, course_id: str) -> Optional[CourseDB]:
        """根据课程ID获取课程"""
        result = await self.db.execute(
            select(CourseDB).where(CourseDB.course_id == course_id)
        )
        return result.scalar_one_or_none()

    async def scan(self, category: Optional[str] = None) -> List[CourseDB]:
        """获取全部课程，可按分类精确筛选"""
        query = select(CourseDB)
        if category is not None:
            query = query.where(CourseDB.category == category)
        query = query.order_by(CourseDB.created_at)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create(self, course: Course) -> CourseDB:
        """保存新课程"""
        db_course = CourseDB(**self._to_columns(course))
        self.db.add(db_course)
        await self.db.flush()
        return db_course

    async def update(self, db_course: CourseDB, update_data: Dict[str, Any]) -> CourseDB:
        """更新课程字段"""
        for field, value in update_data.items():
            setattr(db_course, field, value)
        await self.db.flush()
        return db_course

    async def delete(self, course_id: str) -> bool:
        """删除课程"""
        result = await self.db.execute(
            delete(CourseDB).where(CourseDB.course_id == course_id)
        )
        await self.db.flush()
        return result.rowcount > 0

    async def add_enrollment(self, db_course: CourseDB, user_id: str) -> bool:
        """追加选课记录，已选课的用户不重复追加

        追加前加行锁重新读取选课列表，并发购买同一课程时后提交的一方基于最新列表追加。
        """
        await self.db.refresh(db_course, attribute_names=["enrollments"], with_for_update=True)
        enrollments = list(db_course.enrollments or [])
        if any(item.get("userId") == user_id for item in enrollments):
            return False

        # 重新赋值整个列表以便ORM检测到JSON字段变更
        db_course.enrollments = enrollments + [{"userId": user_id}]
        await self.db.flush()
        return True

    def _to_columns(self, course: Course) -> Dict[str, Any]:
        data = course.model_dump(by_alias=True)
        return {
            "course_id": course.course_id,
            "teacher_id": course.teacher_id,
            "teacher_name": course.teacher_name,
            "title": course.title,
            "description": course.description,
            "category": course.category,
            "image": course.image,
            "price": course.price,
            "level": course.level,
            "status": course.status,
            "sections": data["sections"],
            "enrollments": data["enrollments"],
            "created_at": course.created_at,
        }

    def to_model(self, db_course: CourseDB) -> Course:
        """转换为Pydantic模型"""
        return Course(
            course_id=db_course.course_id,
            teacher_id=db_course.teacher_id,
            teacher_name=db_course.teacher_name,
            title=db_course.title,
            description=db_course.description,
            category=db_course.category,
            image=db_course.image,
            price=db_course.price,
            level=db_course.level,
            status=db_course.status,
            sections=db_course.sections or [],
            enrollments=db_course.enrollments or [],
            created_at=db_course.created_at
        )
