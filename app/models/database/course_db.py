"""
课程数据库模型
"""

from sqlalchemy import Column, String, Integer, Text, JSON
from app.core.database import Base


class CourseDB(Base):
    """课程文档表 - 小节/章节与选课记录以JSON文档形式内嵌"""

    __tablename__ = "courses"

    # 主键和讲师信息
    course_id = Column(String(50), primary_key=True, comment="课程ID")
    teacher_id = Column(String(100), nullable=False, index=True, comment="讲师ID")
    teacher_name = Column(String(200), nullable=False, comment="讲师姓名")

    # 课程详情
    title = Column(String(200), nullable=False, comment="课程标题")
    description = Column(Text, comment="课程描述")
    category = Column(String(100), nullable=False, index=True, comment="课程分类")
    image = Column(Text, default="", comment="封面图片")

    # 价格（最小货币单位）
    price = Column(Integer, nullable=False, default=0, comment="价格")

    level = Column(String(20), nullable=False, default="Beginner", comment="难度等级")
    status = Column(String(20), nullable=False, default="Draft", index=True, comment="课程状态")

    # 内嵌文档
    sections = Column(JSON, nullable=False, default=list, comment="小节与章节")
    enrollments = Column(JSON, nullable=False, default=list, comment="选课记录")

    created_at = Column(String(40), nullable=False, comment="创建时间")

    __table_args__ = (
        {'comment': '课程信息表'}
    )
