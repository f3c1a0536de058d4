"""
课程相关数据模型
"""

from typing import Any, List, Optional
from pydantic import ConfigDict, Field
from enum import Enum

from app.models.common import CamelModel, MAX_MINOR_UNITS


class CourseLevel(str, Enum):
    """难度等级枚举"""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class CourseStatus(str, Enum):
    """课程状态枚举"""
    DRAFT = "Draft"
    PUBLISHED = "Published"


class ChapterType(str, Enum):
    """章节内容类型"""
    TEXT = "Text"
    QUIZ = "Quiz"
    VIDEO = "Video"


class Chapter(CamelModel):
    """章节 - 嵌入在Section中，额外的内容字段原样保留"""

    model_config = ConfigDict(extra="allow")

    chapter_id: Optional[str] = None
    type: Optional[ChapterType] = None
    title: Optional[str] = None
    content: Optional[str] = None
    video: Optional[str] = None


class Section(CamelModel):
    """课程小节 - 嵌入在Course中"""

    model_config = ConfigDict(extra="allow")

    section_id: Optional[str] = None
    section_title: Optional[str] = None
    section_description: Optional[str] = None
    chapters: List[Chapter] = Field(default_factory=list)


class Enrollment(CamelModel):
    """选课记录"""

    user_id: str


class Course(CamelModel):
    """课程基础模型"""

    course_id: str = Field(..., description="课程唯一标识")
    teacher_id: str = Field(..., description="讲师ID")
    teacher_name: str = Field(..., description="讲师姓名")
    title: str
    description: Optional[str] = None
    category: str
    image: Optional[str] = ""
    price: int = Field(default=0, ge=0, le=MAX_MINOR_UNITS, description="价格(最小货币单位)")
    level: CourseLevel = CourseLevel.BEGINNER
    status: CourseStatus = CourseStatus.DRAFT
    sections: List[Section] = Field(default_factory=list)
    enrollments: List[Enrollment] = Field(default_factory=list)
    created_at: str = Field(..., description="创建时间(ISO 8601)")

    def is_enrolled(self, user_id: str) -> bool:
        """检查用户是否已选课"""
        return any(enrollment.user_id == user_id for enrollment in self.enrollments)


class CourseCreate(CamelModel):
    """创建课程请求 - 必填校验在服务层完成"""

    teacher_id: Optional[str] = None
    teacher_name: Optional[str] = None


class CourseUpdate(CamelModel):
    """更新课程请求 - 仅允许修改以下字段，其余字段忽略"""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    image: Optional[str] = None
    level: Optional[CourseLevel] = None
    status: Optional[CourseStatus] = None
    # 以主货币单位传入的小数(字符串或数字)，由服务层换算
    price: Optional[Any] = None
    # JSON数组或序列化后的字符串
    sections: Optional[Any] = None


class CourseDeleted(CamelModel):
    """删除课程响应数据"""

    course_id: str
