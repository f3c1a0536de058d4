"""
课程Repository数据库操作测试 - 使用内存SQLite
"""

import pytest

from app.models.course import Course
from app.repositories.course_repository import CourseRepository


def build_course(course_id: str, category: str = "Uncategorized", created_at: str = "2024-01-01T00:00:00+00:00") -> Course:
    return Course(
        course_id=course_id,
        teacher_id="t1",
        teacher_name="Jane",
        title="Untitled Course",
        description="No description provided",
        category=category,
        image="",
        price=0,
        created_at=created_at
    )


@pytest.mark.asyncio
class TestCourseRepository:
    """课程Repository数据库操作测试类"""

    async def test_create_and_get_course(self, db_session):
        """测试创建后读取的记录与创建时一致"""
        course_repo = CourseRepository(db_session)
        course = build_course("course_roundtrip")

        await course_repo.create(course)
        await db_session.commit()

        retrieved = await course_repo.get_by_course_id("course_roundtrip")

        assert retrieved is not None
        assert course_repo.to_model(retrieved) == course

    async def test_get_nonexistent_course(self, db_session):
        course_repo = CourseRepository(db_session)
        assert await course_repo.get_by_course_id("NONEXISTENT_COURSE_ID") is None

    async def test_scan_with_category(self, db_session):
        course_repo = CourseRepository(db_session)
        await course_repo.create(build_course("c1", "Programming", "2024-01-01T00:00:00+00:00"))
        await course_repo.create(build_course("c2", "Design", "2024-01-02T00:00:00+00:00"))
        await course_repo.create(build_course("c3", "Programming", "2024-01-03T00:00:00+00:00"))

        programming = await course_repo.scan(category="Programming")
        everything = await course_repo.scan()

        assert [item.course_id for item in programming] == ["c1", "c3"]
        assert [item.course_id for item in everything] == ["c1", "c2", "c3"]

    async def test_update_sections_persist(self, db_session):
        course_repo = CourseRepository(db_session)
        db_course = await course_repo.create(build_course("c_sections"))

        sections = [{"sectionId": "s1", "sectionTitle": "Intro", "chapters": [{"chapterId": "c1", "title": "Hi"}]}]
        await course_repo.update(db_course, {"sections": sections, "price": 1999})
        await db_session.commit()

        course = course_repo.to_model(await course_repo.get_by_course_id("c_sections"))
        assert course.price == 1999
        assert course.sections[0].section_id == "s1"
        assert course.sections[0].chapters[0].chapter_id == "c1"

    async def test_add_enrollment_is_idempotent(self, db_session):
        course_repo = CourseRepository(db_session)
        db_course = await course_repo.create(build_course("c_enroll"))

        assert await course_repo.add_enrollment(db_course, "u1") is True
        assert await course_repo.add_enrollment(db_course, "u1") is False
        assert await course_repo.add_enrollment(db_course, "u2") is True
        await db_session.commit()

        stored = await course_repo.get_by_course_id("c_enroll")
        assert stored.enrollments == [{"userId": "u1"}, {"userId": "u2"}]

    async def test_delete_course(self, db_session):
        course_repo = CourseRepository(db_session)
        await course_repo.create(build_course("c_delete"))

        assert await course_repo.delete("c_delete") is True
        assert await course_repo.get_by_course_id("c_delete") is None
        assert await course_repo.delete("c_delete") is False

    async def test_add_enrollment_keeps_concurrent_purchases(self, database):
        """测试两个会话先后读取同一课程后分别选课，两名用户都被保留"""
        async with database.session() as session:
            await CourseRepository(session).create(build_course("c_concurrent"))

        async with database.session() as first_session, database.session() as second_session:
            first_repo = CourseRepository(first_session)
            second_repo = CourseRepository(second_session)
            first_course = await first_repo.get_by_course_id("c_concurrent")
            second_course = await second_repo.get_by_course_id("c_concurrent")

            assert await first_repo.add_enrollment(first_course, "u1") is True
            await first_session.commit()

            assert await second_repo.add_enrollment(second_course, "u2") is True
            await second_session.commit()

        async with database.session() as session:
            stored = await CourseRepository(session).get_by_course_id("c_concurrent")
            assert stored.enrollments == [{"userId": "u1"}, {"userId": "u2"}]
