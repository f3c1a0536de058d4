from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_current_user_id, get_transaction_service
from app.models.common import ApiResponse
from app.models.transaction import (
    PaymentIntentCreate,
    PaymentIntentResponse,
    PurchaseResult,
    Transaction,
    TransactionCreate,
)
from app.services.transaction_service import TransactionService

router = APIRouter(
    prefix="/transactions",
    tags=["交易"],
    dependencies=[Depends(get_current_user_id)],
)


@router.get("", response_model=ApiResponse[List[Transaction]])
async def list_transactions(
    user_id: Optional[str] = Query(None, alias="userId"),
    service: TransactionService = Depends(get_transaction_service),
):
    """交易列表，可按用户筛选"""
    transactions = await service.list_transactions(user_id)
    return ApiResponse(message="Transactions retrieved successfully", data=transactions)


@router.post("/stripe/payment-intent", response_model=ApiResponse[PaymentIntentResponse])
async def create_stripe_payment_intent(
    payload: PaymentIntentCreate,
    service: TransactionService = Depends(get_transaction_service),
):
    """创建Stripe支付意图"""
    client_secret = await service.create_payment_intent(payload.amount, payload.currency)
    return ApiResponse(
        message="Payment intent created successfully",
        data=PaymentIntentResponse(client_secret=client_secret),
    )


@router.post("", response_model=ApiResponse[PurchaseResult], status_code=status.HTTP_201_CREATED)
async def create_transaction(
    payload: TransactionCreate,
    service: TransactionService = Depends(get_transaction_service),
):
    """记录购买：交易、初始学习进度与选课"""
    result = await service.create_transaction(payload)
    return ApiResponse(message="Purchased Course successfully", data=result)
