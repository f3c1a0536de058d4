"""
交易数据库操作层
"""

from typing import List, Optional

from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.transaction import Transaction
from app.models.database.transaction_db import TransactionDB


class TransactionRepository:
    """交易数据库操作类"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_transaction_id(self, transaction_id: str) -> Optional[TransactionDB]:
        """根据交易ID获取交易记录"""
        result = await self.db.execute(
            select(TransactionDB).where(TransactionDB.transaction_id == transaction_id)
        )
        return result.scalar_one_or_none()

    async def list_transactions(self, user_id: Optional[str] = None) -> List[TransactionDB]:
        """获取交易列表，可按用户筛选，按时间倒序"""
        query = select(TransactionDB)
        if user_id is not None:
            query = query.where(TransactionDB.user_id == user_id)
        query = query.order_by(desc(TransactionDB.date_time))

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create(self, transaction: Transaction) -> TransactionDB:
        """写入交易记录"""
        db_transaction = TransactionDB(
            transaction_id=transaction.transaction_id,
            user_id=transaction.user_id,
            course_id=transaction.course_id,
            payment_provider=transaction.payment_provider,
            amount=transaction.amount,
            date_time=transaction.date_time
        )
        self.db.add(db_transaction)
        await self.db.flush()
        return db_transaction

    def to_model(self, db_transaction: TransactionDB) -> Transaction:
        """转换为Pydantic模型"""
        return Transaction(
            transaction_id=db_transaction.transaction_id,
            user_id=db_transaction.user_id,
            course_id=db_transaction.course_id,
            payment_provider=db_transaction.payment_provider,
            amount=db_transaction.amount,
            date_time=db_transaction.date_time
        )
