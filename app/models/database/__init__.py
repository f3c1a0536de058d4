"""
数据库模型包初始化文件
"""

from .course_db import CourseDB
from .transaction_db import TransactionDB
from .progress_db import UserCourseProgressDB

__all__ = [
    "CourseDB",
    "TransactionDB",
    "UserCourseProgressDB"
]
