"""
用户课程进度数据库模型
"""

from sqlalchemy import Column, String, Float, JSON
from app.core.database import Base


class UserCourseProgressDB(Base):
    """用户课程进度表"""

    __tablename__ = "user_course_progress"

    user_id = Column(String(100), primary_key=True, comment="用户ID")
    course_id = Column(String(50), primary_key=True, comment="课程ID")

    enrollment_date = Column(String(40), nullable=False, comment="选课时间")
    overall_progress = Column(Float, nullable=False, default=0, comment="总体进度")
    sections = Column(JSON, nullable=False, default=list, comment="小节/章节完成状态")
    last_accessed_timestamp = Column(String(40), nullable=False, comment="最近访问时间")

    __table_args__ = (
        {'comment': '用户课程进度表'}
    )
