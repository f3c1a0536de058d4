"""
交易数据库模型
"""

from sqlalchemy import Column, String, Integer
from app.core.database import Base


class TransactionDB(Base):
    """交易记录表 - 只追加"""

    __tablename__ = "transactions"

    transaction_id = Column(String(100), primary_key=True, comment="交易ID")
    user_id = Column(String(100), nullable=False, index=True, comment="用户ID")
    course_id = Column(String(50), nullable=False, index=True, comment="课程ID")
    payment_provider = Column(String(50), nullable=False, comment="支付服务商")
    amount = Column(Integer, comment="金额")
    date_time = Column(String(40), nullable=False, index=True, comment="交易时间")

    __table_args__ = (
        {'comment': '交易记录表'}
    )
