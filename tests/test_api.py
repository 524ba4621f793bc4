"""
Tests for the JSON API.
"""

import pytest

from conftest import USER_ID


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json() == {"status": "healthy"}


class TestDashboardApi:

    def test_requires_session(self, client, fake_supabase):
        response = client.get("/api/dashboard")
        assert response.status_code == 401
        assert fake_supabase.requests == []

    def test_returns_courses_with_progress(self, signed_in_client, fake_supabase):
        fake_supabase.tables["enrollments"].append(
            {"user_id": USER_ID, "course_id": "course-py", "progress": 0}
        )
        fake_supabase.tables["section_completions"] = [
            {"user_id": USER_ID, "section_id": "sec-1"},
            {"user_id": USER_ID, "section_id": "sec-2"},
        ]
        response = signed_in_client.get("/api/dashboard")
        assert response.status_code == 200
        courses = {course["id"]: course for course in response.get_json()["data"]}

        assert courses["course-py"]["enrolled"] is True
        assert courses["course-py"]["progress"] == 67
        assert [s["id"] for s in courses["course-py"]["sections"]] == ["sec-1", "sec-2", "sec-3"]
        assert courses["course-sql"]["enrolled"] is False
        assert courses["course-sql"]["progress"] == 0

    def test_backend_error(self, signed_in_client, fake_supabase):
        fake_supabase.fail("section_completions", "relation does not exist")
        response = signed_in_client.get("/api/dashboard")
        assert response.status_code == 500
        assert response.get_json()["details"] == "relation does not exist"


class TestProgressApi:

    def test_requires_session(self, client, fake_supabase):
        response = client.post("/api/courses/course-py/progress", json={"progress": 10})
        assert response.status_code == 401
        assert fake_supabase.requests == []

    def test_bumps_progress(self, signed_in_client, fake_supabase):
        fake_supabase.tables["enrollments"].append(
            {"user_id": USER_ID, "course_id": "course-py", "progress": 20}
        )
        response = signed_in_client.post("/api/courses/course-py/progress", json={"progress": 20})
        assert response.status_code == 200
        assert response.get_json()["data"]["progress"] == 30
        assert fake_supabase.tables["enrollments"][0]["progress"] == 30

    def test_never_above_hundred(self, signed_in_client, fake_supabase):
        fake_supabase.tables["enrollments"].append(
            {"user_id": USER_ID, "course_id": "course-py", "progress": 95}
        )
        response = signed_in_client.post("/api/courses/course-py/progress", json={"progress": 95})
        assert response.get_json()["data"]["progress"] == 100

    def test_does_not_refetch(self, signed_in_client, fake_supabase):
        signed_in_client.post("/api/courses/course-py/progress", json={"progress": 0})
        assert [request[1] for request in fake_supabase.requests] == ["update"]

    def test_missing_progress(self, signed_in_client):
        response = signed_in_client.post("/api/courses/course-py/progress", json={})
        assert response.status_code == 400

    def test_invalid_progress(self, signed_in_client):
        response = signed_in_client.post("/api/courses/course-py/progress", json={"progress": "lots"})
        assert response.status_code == 400

    def test_backend_error(self, signed_in_client, fake_supabase):
        fake_supabase.fail("enrollments", "permission denied")
        response = signed_in_client.post("/api/courses/course-py/progress", json={"progress": 0})
        assert response.status_code == 500
        assert response.get_json()["details"] == "permission denied"

    @pytest.mark.parametrize("progress", [-50, 101, True, "30", 12.5])
    def test_rejects_out_of_range_or_non_integer(self, signed_in_client, fake_supabase, progress):
        response = signed_in_client.post("/api/courses/course-py/progress", json={"progress": progress})
        assert response.status_code == 400
        assert fake_supabase.requests == []
