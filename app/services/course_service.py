"""
课程业务服务层
提供课程相关的业务逻辑处理
"""

import json
import logging
import uuid
from typing import Any, Dict, List, Optional
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from datetime import datetime, timezone

from pydantic import ValidationError

from app.core.exceptions import ValidationException, NotFoundException, ForbiddenException
from app.models.common import MAX_MINOR_UNITS
from app.models.course import Course, CourseUpdate, Section
from app.repositories.course_repository import CourseRepository

logger = logging.getLogger(__name__)

# 新建课程的占位默认值
DEFAULT_TITLE = "Untitled Course"
DEFAULT_DESCRIPTION = "No description provided"
DEFAULT_CATEGORY = "Uncategorized"
ALL_CATEGORIES = "all"


def generate_id() -> str:
    return str(uuid.uuid4())


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_price(value: Any) -> int:
    """将主货币单位的小数价格换算为最小货币单位的整数"""
    invalid = ValidationException("Invalid price value", error="Price must be a valid number")

    if isinstance(value, bool):
        raise invalid
    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise invalid

    if not price.is_finite() or price < 0:
        raise invalid

    try:
        minor = int((price * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise ValidationException("Invalid price value", error="Price is too large")

    if minor > MAX_MINOR_UNITS:
        raise ValidationException("Invalid price value", error="Price is too large")
    return minor


def normalize_sections(raw: Any) -> List[Dict[str, Any]]:
    """解析小节数据并为缺少ID的小节/章节生成ID，已有ID保持不变"""
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            raise ValidationException("Invalid sections value", error="Sections must be a JSON array")

    if not isinstance(raw, list):
        raise ValidationException("Invalid sections value", error="Sections must be a JSON array")

    try:
        sections = [Section.model_validate(item) for item in raw]
    except ValidationError as e:
        raise ValidationException(
            "Invalid sections value",
            error=[error["msg"] for error in e.errors()]
        )

    section_ids = set()
    for section in sections:
        section.section_id = section.section_id or generate_id()
        if section.section_id in section_ids:
            raise ValidationException("Invalid sections value", error=f"Duplicate section id: {section.section_id}")
        section_ids.add(section.section_id)

        chapter_ids = set()
        for chapter in section.chapters:
            chapter.chapter_id = chapter.chapter_id or generate_id()
            if chapter.chapter_id in chapter_ids:
                raise ValidationException("Invalid sections value", error=f"Duplicate chapter id: {chapter.chapter_id}")
            chapter_ids.add(chapter.chapter_id)

    return [section.model_dump(by_alias=True) for section in sections]


class CourseService:
    """课程业务服务"""

    def __init__(self, course_repo: CourseRepository):
        self.course_repo = course_repo

    async def list_courses(self, category: Optional[str] = None) -> List[Course]:
        """获取课程列表，category为空或"all"时不筛选"""
        if category == ALL_CATEGORIES or not category:
            category = None

        db_courses = await self.course_repo.scan(category=category)
        return [self.course_repo.to_model(db_course) for db_course in db_courses]

    async def get_course(self, course_id: str) -> Course:
        """获取课程详情"""
        db_course = await self.course_repo.get_by_course_id(course_id)
        if not db_course:
            raise NotFoundException("Course not found")

        return self.course_repo.to_model(db_course)

    async def create_course(self, teacher_id: Optional[str], teacher_name: Optional[str]) -> Course:
        """创建占位课程"""
        if not teacher_id or not teacher_name:
            raise ValidationException("Teacher ID and name are required")

        course = Course(
            course_id=generate_id(),
            teacher_id=teacher_id,
            teacher_name=teacher_name,
            title=DEFAULT_TITLE,
            description=DEFAULT_DESCRIPTION,
            category=DEFAULT_CATEGORY,
            image="",
            price=0,
            sections=[],
            enrollments=[],
            created_at=utc_now_iso()
        )

        await self.course_repo.create(course)
        logger.info(f"课程创建成功: {course.course_id} (讲师 {teacher_id})")

        return course

    async def update_course(self, course_id: str, patch: CourseUpdate, caller_id: Optional[str]) -> Course:
        """更新课程 - 仅课程所属讲师可操作，所有校验在写入前完成"""
        db_course = await self.course_repo.get_by_course_id(course_id)
        if not db_course:
            raise NotFoundException("Course not found")

        if db_course.teacher_id != caller_id:
            logger.warning(f"用户 {caller_id} 尝试更新非本人课程 {course_id}")
            raise ForbiddenException("Unauthorized to update this course")

        update_data = patch.model_dump(exclude_unset=True, exclude_none=True)

        if "price" in update_data:
            update_data["price"] = parse_price(update_data["price"])

        if "sections" in update_data:
            update_data["sections"] = normalize_sections(update_data["sections"])

        updated_course = await self.course_repo.update(db_course, update_data)
        logger.info(f"课程更新成功: {course_id}, 字段: {sorted(update_data)}")

        return self.course_repo.to_model(updated_course)

    async def delete_course(self, course_id: str, caller_id: Optional[str]) -> str:
        """删除课程 - 仅课程所属讲师可操作"""
        db_course = await self.course_repo.get_by_course_id(course_id)
        if not db_course:
            raise NotFoundException("Course not found")

        if db_course.teacher_id != caller_id:
            logger.warning(f"用户 {caller_id} 尝试删除非本人课程 {course_id}")
            raise ForbiddenException("Unauthorized to delete this course")

        await self.course_repo.delete(course_id)
        logger.info(f"课程已删除: {course_id}")

        return course_id
