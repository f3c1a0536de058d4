"""
学习进度数据模型
"""

from typing import List
from pydantic import Field

from app.models.common import CamelModel


class ChapterProgress(CamelModel):
    """章节完成状态"""

    chapter_id: str
    completed: bool = False


class SectionProgress(CamelModel):
    """小节完成状态"""

    section_id: str
    chapters: List[ChapterProgress] = Field(default_factory=list)


class UserCourseProgress(CamelModel):
    """用户课程进度 - 以(user_id, course_id)为键，结构为选课时课程的快照"""

    user_id: str
    course_id: str
    enrollment_date: str
    overall_progress: float = Field(default=0, ge=0, le=100, description="总体进度(0-100)")
    sections: List[SectionProgress] = Field(default_factory=list)
    last_accessed_timestamp: str
