"""
交易业务服务层
支付意图创建与购买记录（交易 + 初始学习进度 + 选课）
"""

import logging
from typing import Any, List, Optional
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from app.core.exceptions import ValidationException, NotFoundException, ForbiddenException
from app.core.payment import PaymentClient
from app.models.common import MAX_MINOR_UNITS
from app.models.course import Course
from app.models.progress import UserCourseProgress, SectionProgress, ChapterProgress
from app.models.transaction import Transaction, TransactionCreate, PurchaseResult
from app.repositories.course_repository import CourseRepository
from app.repositories.progress_repository import ProgressRepository
from app.repositories.transaction_repository import TransactionRepository
from app.services.course_service import utc_now_iso

logger = logging.getLogger(__name__)


def parse_amount(value: Any) -> int:
    """校验支付金额(最小货币单位)，必须为正数"""
    if value is None or value == "":
        raise ValidationException("Invalid amount", error="Amount is required")

    invalid = ValidationException("Invalid amount", error="Amount must be a positive number")
    if isinstance(value, bool):
        raise invalid
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise invalid

    if not amount.is_finite() or amount <= 0:
        raise invalid

    try:
        minor = int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise ValidationException("Invalid amount", error="Amount is too large")

    # 正数但四舍五入后不足一个最小货币单位
    if minor < 1:
        raise ValidationException("Invalid amount", error="Amount must be at least 1 minor currency unit")
    if minor > MAX_MINOR_UNITS:
        raise ValidationException("Invalid amount", error="Amount is too large")
    return minor


def build_initial_progress(user_id: str, course: Course, timestamp: str) -> UserCourseProgress:
    """按课程当前结构生成全部未完成的进度快照"""
    return UserCourseProgress(
        user_id=user_id,
        course_id=course.course_id,
        enrollment_date=timestamp,
        overall_progress=0,
        sections=[
            SectionProgress(
                section_id=section.section_id,
                chapters=[
                    ChapterProgress(chapter_id=chapter.chapter_id, completed=False)
                    for chapter in section.chapters
                ]
            )
            for section in course.sections
        ],
        last_accessed_timestamp=timestamp
    )


class TransactionService:
    """交易业务服务"""

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        progress_repo: ProgressRepository,
        course_repo: CourseRepository,
        payment_client: Optional[PaymentClient] = None
    ):
        self.transaction_repo = transaction_repo
        self.progress_repo = progress_repo
        self.course_repo = course_repo
        self.payment_client = payment_client

    async def create_payment_intent(self, amount: Any, currency: Optional[str] = None) -> str:
        """创建支付意图，返回客户端确认密钥"""
        minor_amount = parse_amount(amount)
        if self.payment_client is None:
            raise RuntimeError("支付客户端未配置")

        return await self.payment_client.create_payment_intent(minor_amount, currency)

    async def create_transaction(self, data: TransactionCreate) -> PurchaseResult:
        """记录购买：写入交易、初始进度并追加选课

        相同交易ID重复提交时返回已有记录，不产生新的写入。
        """
        required = {
            "transactionId": data.transaction_id,
            "userId": data.user_id,
            "courseId": data.course_id,
            "paymentProvider": data.payment_provider,
            "amount": data.amount,
        }
        missing = [name for name, value in required.items() if value is None or value == ""]
        if missing:
            raise ValidationException("Missing required fields", error=f"Missing: {', '.join(missing)}")

        existing = await self.transaction_repo.get_by_transaction_id(data.transaction_id)
        if existing and (existing.user_id != data.user_id or existing.course_id != data.course_id):
            raise ValidationException(
                "Transaction ID already used",
                error=f"Transaction {data.transaction_id} belongs to another purchase"
            )

        db_course = await self.course_repo.get_by_course_id(data.course_id)
        if not db_course:
            raise NotFoundException("Course not found")
        course = self.course_repo.to_model(db_course)

        timestamp = utc_now_iso()

        if existing:
            transaction = self.transaction_repo.to_model(existing)
            logger.info(f"交易已存在，跳过写入: {data.transaction_id}")
        else:
            transaction = Transaction(
                transaction_id=data.transaction_id,
                user_id=data.user_id,
                course_id=data.course_id,
                payment_provider=data.payment_provider,
                amount=data.amount,
                date_time=timestamp
            )
            await self.transaction_repo.create(transaction)

        db_progress = await self.progress_repo.get(data.user_id, data.course_id)
        if db_progress:
            progress = self.progress_repo.to_model(db_progress)
        else:
            progress = build_initial_progress(data.user_id, course, timestamp)
            await self.progress_repo.create(progress)

        enrolled = await self.course_repo.add_enrollment(db_course, data.user_id)
        if enrolled:
            logger.info(f"用户 {data.user_id} 已选课 {data.course_id}")

        return PurchaseResult(new_transaction=transaction, course_progress=progress)

    async def list_transactions(self, user_id: Optional[str] = None) -> List[Transaction]:
        """获取交易列表"""
        db_transactions = await self.transaction_repo.list_transactions(user_id=user_id)
        return [self.transaction_repo.to_model(item) for item in db_transactions]

    async def get_course_progress(self, user_id: str, course_id: str, caller_id: Optional[str]) -> UserCourseProgress:
        """获取用户课程进度 - 只能查看本人进度"""
        if user_id != caller_id:
            raise ForbiddenException("Unauthorized to view this progress")

        db_progress = await self.progress_repo.get(user_id, course_id)
        if not db_progress:
            raise NotFoundException("Course progress not found")

        return self.progress_repo.to_model(db_progress)
