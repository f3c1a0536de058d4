"""
交易与支付相关数据模型
"""

from typing import Any, Optional
from pydantic import Field

from app.models.common import CamelModel, MAX_MINOR_UNITS
from app.models.progress import UserCourseProgress


class Transaction(CamelModel):
    """交易记录 - 创建后不可变"""

    transaction_id: str = Field(..., description="交易ID(支付服务返回)")
    user_id: str = Field(..., description="用户ID")
    course_id: str = Field(..., description="课程ID")
    payment_provider: str = Field(..., description="支付服务商")
    amount: Optional[int] = Field(None, ge=0, le=MAX_MINOR_UNITS, description="金额(最小货币单位)")
    date_time: str = Field(..., description="交易时间(ISO 8601)")


class TransactionCreate(CamelModel):
    """创建交易请求 - 必填校验在服务层完成

    amount 为最小货币单位的整数（如 1999 表示 19.99），与支付意图实际扣款金额一致。
    带小数的金额（如 19.99）不是合法的最小货币单位，在请求校验阶段即返回400 "Invalid request"。
    """

    transaction_id: Optional[str] = None
    user_id: Optional[str] = None
    course_id: Optional[str] = None
    payment_provider: Optional[str] = None
    amount: Optional[int] = Field(None, ge=0, le=MAX_MINOR_UNITS)


class PurchaseResult(CamelModel):
    """购买结果"""

    new_transaction: Transaction
    course_progress: UserCourseProgress


class PaymentIntentCreate(CamelModel):
    """创建支付意图请求"""

    # 原样接收，由服务层校验是否为正数
    amount: Optional[Any] = None
    currency: Optional[str] = None


class PaymentIntentResponse(CamelModel):
    """支付意图响应"""

    client_secret: str
