from typing import List, Optional

from fastapi import APIRouter, Depends, status
import logging

from app.api.deps import get_course_service, get_current_user_id
from app.models.common import ApiResponse
from app.models.course import Course, CourseCreate, CourseUpdate, CourseDeleted
from app.services.course_service import CourseService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses", tags=["课程"])


@router.get("", response_model=ApiResponse[List[Course]])
async def list_courses(
    category: Optional[str] = None,
    service: CourseService = Depends(get_course_service),
):
    """课程列表，category为"all"或缺省时返回全部"""
    courses = await service.list_courses(category)
    return ApiResponse(message="Courses fetched successfully", data=courses)


@router.get("/{course_id}", response_model=ApiResponse[Course])
async def get_course(
    course_id: str,
    service: CourseService = Depends(get_course_service),
):
    course = await service.get_course(course_id)
    return ApiResponse(message="Course fetched successfully", data=course)


@router.post(
    "",
    response_model=ApiResponse[Course],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_current_user_id)],
)
async def create_course(
    payload: CourseCreate,
    service: CourseService = Depends(get_course_service),
):
    course = await service.create_course(payload.teacher_id, payload.teacher_name)
    return ApiResponse(message="Course created successfully", data=course)


@router.put("/{course_id}", response_model=ApiResponse[Course])
async def update_course(
    course_id: str,
    patch: CourseUpdate,
    user_id: str = Depends(get_current_user_id),
    service: CourseService = Depends(get_course_service),
):
    """更新课程，调用者必须是课程讲师"""
    course = await service.update_course(course_id, patch, user_id)
    return ApiResponse(message="Course updated successfully", data=course)


@router.delete("/{course_id}", response_model=ApiResponse[CourseDeleted])
async def delete_course(
    course_id: str,
    user_id: str = Depends(get_current_user_id),
    service: CourseService = Depends(get_course_service),
):
    deleted_id = await service.delete_course(course_id, user_id)
    return ApiResponse(message="Course deleted successfully", data=CourseDeleted(course_id=deleted_id))
