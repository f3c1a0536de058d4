"""
CourseService业务逻辑测试
"""

import json
import uuid

import pytest
from unittest.mock import AsyncMock

from app.core.exceptions import ValidationException, NotFoundException, ForbiddenException
from app.models.course import CourseUpdate
from app.repositories.course_repository import CourseRepository
from app.services.course_service import CourseService, parse_price, normalize_sections


class TestParsePrice:
    """价格换算测试"""

    @pytest.mark.parametrize("value,expected", [
        ("19.99", 1999),
        (19.99, 1999),
        (10, 1000),
        ("0", 0),
        ("0.005", 1),
        (" 5.5 ", 550),
    ])
    def test_valid_price(self, value, expected):
        assert parse_price(value) == expected

    @pytest.mark.parametrize("value", ["abc", "", "NaN", "Infinity", "-1", True, [1], {"a": 1}])
    def test_invalid_price(self, value):
        with pytest.raises(ValidationException) as exc_info:
            parse_price(value)
        assert exc_info.value.message == "Invalid price value"
        assert exc_info.value.error == "Price must be a valid number"

    @pytest.mark.parametrize("value", ["1e30", 1e30, "30000000", "21474836.48"])
    def test_price_too_large(self, value):
        """超出Decimal精度或价格列上限的数值返回校验错误"""
        with pytest.raises(ValidationException) as exc_info:
            parse_price(value)
        assert exc_info.value.message == "Invalid price value"
        assert exc_info.value.error == "Price is too large"

    def test_price_at_column_limit(self):
        assert parse_price("21474836.47") == 2_147_483_647


class TestNormalizeSections:
    """小节/章节ID生成测试"""

    def test_existing_ids_are_kept(self):
        sections = normalize_sections([
            {"sectionId": "s1", "sectionTitle": "Intro", "chapters": [
                {"chapterId": "c1", "title": "Welcome", "type": "Text"}
            ]}
        ])

        assert sections[0]["sectionId"] == "s1"
        assert sections[0]["sectionTitle"] == "Intro"
        assert sections[0]["chapters"][0]["chapterId"] == "c1"
        assert sections[0]["chapters"][0]["type"] == "Text"

    def test_missing_ids_are_generated(self):
        sections = normalize_sections([
            {"sectionTitle": "A", "chapters": [{"title": "a1"}, {"title": "a2", "chapterId": ""}]},
            {"sectionTitle": "B", "chapters": []},
        ])

        ids = [sections[0]["sectionId"], sections[1]["sectionId"]]
        ids += [chapter["chapterId"] for chapter in sections[0]["chapters"]]
        assert all(ids)
        assert len(set(ids)) == 4
        for value in ids:
            uuid.UUID(value)

    def test_serialized_string_is_parsed(self):
        raw = json.dumps([{"sectionId": "s1", "chapters": [{"title": "x"}]}])
        sections = normalize_sections(raw)

        assert sections[0]["sectionId"] == "s1"
        assert sections[0]["chapters"][0]["chapterId"]

    def test_extra_fields_are_preserved(self):
        sections = normalize_sections([{"sectionId": "s1", "chapters": [{"chapterId": "c1", "duration": 12}]}])
        assert sections[0]["chapters"][0]["duration"] == 12

    def test_missing_chapters_defaults_to_empty(self):
        sections = normalize_sections([{"sectionTitle": "Only title"}])
        assert sections[0]["chapters"] == []

    @pytest.mark.parametrize("raw", ["not json", "{\"a\": 1}", 42, [1, 2]])
    def test_invalid_sections(self, raw):
        with pytest.raises(ValidationException):
            normalize_sections(raw)

    def test_duplicate_section_ids_rejected(self):
        with pytest.raises(ValidationException):
            normalize_sections([{"sectionId": "s1"}, {"sectionId": "s1"}])

    def test_duplicate_chapter_ids_rejected(self):
        with pytest.raises(ValidationException):
            normalize_sections([{"sectionId": "s1", "chapters": [{"chapterId": "c1"}, {"chapterId": "c1"}]}])


@pytest.mark.asyncio
class TestCourseService:
    """CourseService业务逻辑测试类"""

    @pytest.fixture
    def mock_course_repo(self):
        """模拟CourseRepository"""
        repo = AsyncMock(spec=CourseRepository)
        repo.to_model.side_effect = CourseRepository(None).to_model

        async def apply_update(db_course, update_data):
            for field, value in update_data.items():
                setattr(db_course, field, value)
            return db_course

        repo.update.side_effect = apply_update
        return repo

    @pytest.fixture
    def course_service(self, mock_course_repo):
        """创建CourseService实例"""
        return CourseService(mock_course_repo)

    async def test_create_course_defaults(self, course_service, mock_course_repo):
        """测试创建课程使用占位默认值"""
        course = await course_service.create_course("t1", "Jane")

        assert course.teacher_id == "t1"
        assert course.teacher_name == "Jane"
        assert course.title == "Untitled Course"
        assert course.description == "No description provided"
        assert course.category == "Uncategorized"
        assert course.status == "Draft"
        assert course.level == "Beginner"
        assert course.price == 0
        assert course.sections == []
        assert course.enrollments == []
        uuid.UUID(course.course_id)
        mock_course_repo.create.assert_called_once_with(course)

    async def test_create_course_generates_unique_ids(self, course_service):
        first = await course_service.create_course("t1", "Jane")
        second = await course_service.create_course("t1", "Jane")
        assert first.course_id != second.course_id

    @pytest.mark.parametrize("teacher_id,teacher_name", [(None, "Jane"), ("t1", None), ("", "Jane"), ("t1", "")])
    async def test_create_course_requires_teacher(self, course_service, mock_course_repo, teacher_id, teacher_name):
        with pytest.raises(ValidationException) as exc_info:
            await course_service.create_course(teacher_id, teacher_name)

        assert exc_info.value.message == "Teacher ID and name are required"
        mock_course_repo.create.assert_not_called()

    async def test_list_courses_all_means_no_filter(self, course_service, mock_course_repo, course_db_factory):
        mock_course_repo.scan.return_value = [course_db_factory()]

        all_courses = await course_service.list_courses("all")
        unfiltered = await course_service.list_courses(None)

        assert all_courses == unfiltered
        assert mock_course_repo.scan.call_args_list[0].kwargs == {"category": None}
        assert mock_course_repo.scan.call_args_list[1].kwargs == {"category": None}

    async def test_list_courses_by_category(self, course_service, mock_course_repo):
        mock_course_repo.scan.return_value = []

        await course_service.list_courses("Programming")

        mock_course_repo.scan.assert_called_once_with(category="Programming")

    async def test_get_course_not_found(self, course_service, mock_course_repo):
        mock_course_repo.get_by_course_id.return_value = None

        with pytest.raises(NotFoundException):
            await course_service.get_course("nonexistent")

    async def test_update_price(self, course_service, mock_course_repo, course_db_factory):
        """测试价格按最小货币单位存储"""
        db_course = course_db_factory()
        mock_course_repo.get_by_course_id.return_value = db_course

        course = await course_service.update_course("course_001", CourseUpdate(price="19.99"), "t1")

        assert course.price == 1999
        assert db_course.price == 1999

    async def test_update_by_other_user_forbidden(self, course_service, mock_course_repo, course_db_factory):
        """测试非课程讲师更新被拒绝且记录不变"""
        db_course = course_db_factory(price=1999)
        mock_course_repo.get_by_course_id.return_value = db_course

        with pytest.raises(ForbiddenException) as exc_info:
            await course_service.update_course("course_001", CourseUpdate(price="5", title="Hacked"), "t2")

        assert exc_info.value.message == "Unauthorized to update this course"
        assert db_course.price == 1999
        assert db_course.title == "Untitled Course"
        mock_course_repo.update.assert_not_called()

    async def test_update_invalid_price_no_mutation(self, course_service, mock_course_repo, course_db_factory):
        db_course = course_db_factory(price=500)
        mock_course_repo.get_by_course_id.return_value = db_course

        with pytest.raises(ValidationException):
            await course_service.update_course("course_001", CourseUpdate(price="abc", title="New"), "t1")

        assert db_course.price == 500
        assert db_course.title == "Untitled Course"
        mock_course_repo.update.assert_not_called()

    async def test_update_not_found(self, course_service, mock_course_repo):
        mock_course_repo.get_by_course_id.return_value = None

        with pytest.raises(NotFoundException):
            await course_service.update_course("missing", CourseUpdate(title="x"), "t1")

    async def test_update_sections_assigns_ids(self, course_service, mock_course_repo, course_db_factory):
        mock_course_repo.get_by_course_id.return_value = course_db_factory()
        patch = CourseUpdate(sections=json.dumps([
            {"sectionId": "s1", "sectionTitle": "Intro", "chapters": [{"title": "new chapter"}]}
        ]))

        course = await course_service.update_course("course_001", patch, "t1")

        assert course.sections[0].section_id == "s1"
        assert course.sections[0].chapters[0].chapter_id
        assert course.sections[0].chapters[0].title == "new chapter"

    async def test_update_ignores_non_allowed_fields(self, course_service, mock_course_repo, course_db_factory):
        """测试只允许修改白名单字段"""
        db_course = course_db_factory()
        mock_course_repo.get_by_course_id.return_value = db_course
        patch = CourseUpdate.model_validate({
            "title": "Python 101",
            "status": "Published",
            "teacherId": "attacker",
            "enrollments": [{"userId": "u9"}],
        })

        course = await course_service.update_course("course_001", patch, "t1")

        assert course.title == "Python 101"
        assert course.status == "Published"
        assert course.teacher_id == "t1"
        assert course.enrollments == []

    async def test_delete_course(self, course_service, mock_course_repo, course_db_factory):
        mock_course_repo.get_by_course_id.return_value = course_db_factory()

        deleted_id = await course_service.delete_course("course_001", "t1")

        assert deleted_id == "course_001"
        mock_course_repo.delete.assert_called_once_with("course_001")

    async def test_delete_course_forbidden(self, course_service, mock_course_repo, course_db_factory):
        mock_course_repo.get_by_course_id.return_value = course_db_factory()

        with pytest.raises(ForbiddenException) as exc_info:
            await course_service.delete_course("course_001", "t2")

        assert exc_info.value.message == "Unauthorized to delete this course"
        mock_course_repo.delete.assert_not_called()
