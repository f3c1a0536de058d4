"""
服务包初始化文件
"""

from .course_service import CourseService
from .transaction_service import TransactionService

__all__ = [
    "CourseService",
    "TransactionService"
]
