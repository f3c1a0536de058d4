"""
仓库包初始化文件 - 数据库访问层
"""

from .course_repository import CourseRepository
from .transaction_repository import TransactionRepository
from .progress_repository import ProgressRepository

__all__ = [
    "CourseRepository",
    "TransactionRepository",
    "ProgressRepository"
]
