from fastapi import APIRouter, Depends

from app.api.deps import get_current_user_id, get_transaction_service
from app.models.common import ApiResponse
from app.models.progress import UserCourseProgress
from app.services.transaction_service import TransactionService

router = APIRouter(prefix="/users", tags=["用户"])


@router.get(
    "/course-progress/{user_id}/courses/{course_id}",
    response_model=ApiResponse[UserCourseProgress],
)
async def get_user_course_progress(
    user_id: str,
    course_id: str,
    caller_id: str = Depends(get_current_user_id),
    service: TransactionService = Depends(get_transaction_service),
):
    """查看本人的课程学习进度"""
    progress = await service.get_course_progress(user_id, course_id, caller_id)
    return ApiResponse(message="Course progress retrieved successfully", data=progress)
