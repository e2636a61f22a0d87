"""
Note Nexus Backend — Class Route Tests
========================================

What:  Submission, admin review, instructor edits and the public catalogue.

What we test:
    ✅ Instructors submit classes that start Pending with 0 enrolled
    ✅ Approve / deny overwrite each other; deny stores feedback
    ✅ Editing clears feedback and keeps the current status
    ✅ /all-classes shows Approved only, most enrolled first, with ?limit
    ✅ Editing cannot null a required column (422)
    ✅ Unknown ids: 404 on read, matchedCount 0 on update
    ✅ Storage failures become DatabaseError with a generic 500 body
"""

import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from notenexus.exceptions import DatabaseError
from notenexus.models import ClassStatus, CourseClass, Role
from notenexus.services.class_service import ClassService


@pytest.fixture
def admin_headers(seed_user, auth_headers):
    async def _headers():
        await seed_user("root@x.com", role=Role.ADMIN)
        return auth_headers("root@x.com")

    return _headers


@pytest.fixture
def instructor_headers(seed_user, auth_headers):
    async def _headers(email: str = "teacher@x.com"):
        await seed_user(email, role=Role.INSTRUCTOR)
        return auth_headers(email)

    return _headers


class TestCreateClass:

    @pytest.mark.asyncio
    async def test_new_class_is_pending(self, test_client, instructor_headers, fetch):
        headers = await instructor_headers()

        response = await test_client.post(
            "/class",
            json={
                "name": "Oil Painting",
                "description": "Eight weeks of oils",
                "image": "https://img/oil.png",
                "price": 120,
                "seats": 15,
                "instructorName": "Teacher",
            },
            headers=headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["acknowledged"] is True
        course = await fetch(CourseClass, uuid.UUID(body["insertedId"]))
        assert course.status == ClassStatus.PENDING.value
        assert course.enrolled == 0
        assert course.feedback is None
        assert course.instructor_email == "teacher@x.com"

    @pytest.mark.asyncio
    async def test_student_cannot_create(self, test_client, seed_user, auth_headers):
        await seed_user("ada@x.com")

        response = await test_client.post(
            "/class", json={"name": "Sneaky", "seats": 1}, headers=auth_headers("ada@x.com")
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_negative_seats_rejected(self, test_client, instructor_headers):
        headers = await instructor_headers()
        response = await test_client.post("/class", json={"name": "Bad", "seats": -1}, headers=headers)
        assert response.status_code == 422


class TestReview:

    @pytest.mark.asyncio
    async def test_admin_lists_every_status(self, test_client, admin_headers, seed_class):
        headers = await admin_headers()
        await seed_class(name="A", status=ClassStatus.PENDING)
        await seed_class(name="B", status=ClassStatus.APPROVED)
        await seed_class(name="C", status=ClassStatus.DENIED)

        response = await test_client.get("/classes", headers=headers)

        assert response.status_code == 200
        assert {c["name"] for c in response.json()} == {"A", "B", "C"}

    @pytest.mark.asyncio
    async def test_approve_then_deny(self, test_client, admin_headers, seed_class, fetch):
        headers = await admin_headers()
        course = await seed_class()

        approved = await test_client.put(f"/class-approve/{course.id}", headers=headers)
        assert approved.json()["matchedCount"] == 1
        assert (await fetch(CourseClass, course.id)).status == ClassStatus.APPROVED.value

        denied = await test_client.put(
            f"/class-deny/{course.id}", json={"feedback": "Needs a syllabus"}, headers=headers
        )
        assert denied.status_code == 200
        stored = await fetch(CourseClass, course.id)
        assert stored.status == ClassStatus.DENIED.value
        assert stored.feedback == "Needs a syllabus"

    @pytest.mark.asyncio
    async def test_deny_requires_feedback(self, test_client, admin_headers, seed_class):
        headers = await admin_headers()
        course = await seed_class()

        response = await test_client.put(f"/class-deny/{course.id}", json={}, headers=headers)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_approve_unknown_class_matches_nothing(self, test_client, admin_headers):
        headers = await admin_headers()

        response = await test_client.put(f"/class-approve/{uuid.uuid4()}", headers=headers)

        assert response.status_code == 200
        assert response.json()["matchedCount"] == 0
        assert response.json()["modifiedCount"] == 0

    @pytest.mark.asyncio
    async def test_instructor_cannot_approve(self, test_client, instructor_headers, seed_class):
        headers = await instructor_headers()
        course = await seed_class()
        response = await test_client.put(f"/class-approve/{course.id}", headers=headers)
        assert response.status_code == 403


class TestInstructorClasses:

    @pytest.mark.asyncio
    async def test_my_classes_only_lists_own(self, test_client, instructor_headers, seed_class):
        headers = await instructor_headers("teacher@x.com")
        await seed_class(name="Mine", instructor_email="teacher@x.com")
        await seed_class(name="Theirs", instructor_email="other@x.com")

        response = await test_client.get("/my-classes/teacher@x.com", headers=headers)

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Mine"]

    @pytest.mark.asyncio
    async def test_my_classes_for_someone_else_is_401(self, test_client, instructor_headers):
        headers = await instructor_headers("teacher@x.com")
        response = await test_client.get("/my-classes/other@x.com", headers=headers)
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_get_class(self, test_client, instructor_headers, seed_class):
        headers = await instructor_headers()
        course = await seed_class(name="Clay", seats=4)

        response = await test_client.get(f"/class/{course.id}", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["_id"] == str(course.id)
        assert body["name"] == "Clay"
        assert body["seats"] == 4
        assert body["status"] == "Pending"
        assert body["instructorEmail"] == "teacher@x.com"

    @pytest.mark.asyncio
    async def test_get_unknown_class_is_404(self, test_client, instructor_headers):
        headers = await instructor_headers()
        response = await test_client.get(f"/class/{uuid.uuid4()}", headers=headers)
        assert response.status_code == 404
        assert response.json()["error"] is True

    @pytest.mark.asyncio
    async def test_edit_clears_feedback_and_keeps_status(
        self, test_client, instructor_headers, seed_class, fetch, session_factory
    ):
        headers = await instructor_headers()
        course = await seed_class(name="Clay", status=ClassStatus.DENIED, price=30)
        async with session_factory() as session:
            stored = await session.get(CourseClass, course.id)
            stored.feedback = "Too expensive"
            await session.commit()

        response = await test_client.put(
            f"/class/{course.id}", json={"price": 20, "seats": 12}, headers=headers
        )

        assert response.status_code == 200
        assert response.json()["matchedCount"] == 1
        assert response.json()["modifiedCount"] == 1
        edited = await fetch(CourseClass, course.id)
        assert edited.price == 20
        assert edited.seats == 12
        assert edited.name == "Clay"
        assert edited.feedback is None
        assert edited.status == ClassStatus.DENIED.value

    @pytest.mark.asyncio
    async def test_edit_unknown_class_matches_nothing(self, test_client, instructor_headers):
        headers = await instructor_headers()
        response = await test_client.put(f"/class/{uuid.uuid4()}", json={"seats": 3}, headers=headers)
        assert response.json()["matchedCount"] == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["name", "price", "seats"])
    async def test_edit_cannot_null_required_field(
        self, test_client, instructor_headers, seed_class, fetch, field
    ):
        headers = await instructor_headers()
        course = await seed_class(name="Clay", seats=4, price=30)

        response = await test_client.put(f"/class/{course.id}", json={field: None}, headers=headers)

        assert response.status_code == 422
        stored = await fetch(CourseClass, course.id)
        assert (stored.name, stored.seats, stored.price) == ("Clay", 4, 30)

    @pytest.mark.asyncio
    async def test_edit_may_clear_optional_field(
        self, test_client, instructor_headers, seed_class, fetch
    ):
        headers = await instructor_headers()
        course = await seed_class()

        response = await test_client.put(
            f"/class/{course.id}", json={"description": None}, headers=headers
        )

        assert response.status_code == 200
        assert (await fetch(CourseClass, course.id)).description is None


class TestCatalogue:

    @pytest.mark.asyncio
    async def test_only_approved_sorted_by_enrolled(self, test_client, seed_class):
        await seed_class(name="Quiet", status=ClassStatus.APPROVED, enrolled=1)
        await seed_class(name="Popular", status=ClassStatus.APPROVED, enrolled=30)
        await seed_class(name="Waiting", status=ClassStatus.PENDING, enrolled=99)
        await seed_class(name="Rejected", status=ClassStatus.DENIED, enrolled=50)

        response = await test_client.get("/all-classes")

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Popular", "Quiet"]

    @pytest.mark.asyncio
    async def test_limit(self, test_client, seed_class):
        for i in range(5):
            await seed_class(name=f"C{i}", status=ClassStatus.APPROVED, enrolled=i)

        response = await test_client.get("/all-classes", params={"limit": 3})

        assert [c["name"] for c in response.json()] == ["C4", "C3", "C2"]


class TestStorageFailures:
    """Driver errors surface as DatabaseError and a generic 500 body."""

    @pytest.mark.asyncio
    async def test_failed_flush_is_wrapped(self):
        course = MagicMock(spec=CourseClass)
        course.status = ClassStatus.PENDING.value
        db = MagicMock()
        db.get = AsyncMock(return_value=course)
        db.flush = AsyncMock(
            side_effect=OperationalError("UPDATE classes", {}, Exception("database is locked"))
        )

        with pytest.raises(DatabaseError) as exc_info:
            await ClassService().approve(db, uuid.uuid4())

        assert exc_info.value.status_code == 500
        assert exc_info.value.context["error_type"] == "OperationalError"

    @pytest.mark.asyncio
    async def test_database_error_response_hides_details(self, test_client):
        failing = AsyncMock(
            side_effect=DatabaseError(context={"error_type": "OperationalError"})
        )

        with patch.object(ClassService, "list_approved", failing):
            response = await test_client.get("/all-classes")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] is True
        assert body["message"] == "An internal error occurred. Please try again later."
        assert "OperationalError" not in response.text
