"""
数据模型包初始化文件
"""

from .common import ApiResponse, CamelModel
from .course import (
    Course,
    CourseCreate,
    CourseUpdate,
    CourseDeleted,
    CourseLevel,
    CourseStatus,
    Section,
    Chapter,
    ChapterType,
    Enrollment
)
from .progress import UserCourseProgress, SectionProgress, ChapterProgress
from .transaction import (
    Transaction,
    TransactionCreate,
    PurchaseResult,
    PaymentIntentCreate,
    PaymentIntentResponse
)

__all__ = [
    "ApiResponse",
    "CamelModel",
    "Course",
    "CourseCreate",
    "CourseUpdate",
    "CourseDeleted",
    "CourseLevel",
    "CourseStatus",
    "Section",
    "Chapter",
    "ChapterType",
    "Enrollment",
    "UserCourseProgress",
    "SectionProgress",
    "ChapterProgress",
    "Transaction",
    "TransactionCreate",
    "PurchaseResult",
    "PaymentIntentCreate",
    "PaymentIntentResponse"
]
