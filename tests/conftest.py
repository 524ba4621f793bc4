"""
Shared fixtures: a recording in-memory stand-in for the Supabase client and
Flask test clients wired to it.
"""

import copy
import threading
from types import SimpleNamespace

import pytest
from postgrest.exceptions import APIError
from supabase import AuthApiError

from coursehub import create_app
from coursehub.utils.session_guard import SESSION_KEY


class RejectedTokenError(AuthApiError):
    """4xx auth error raised for unknown tokens, like an expired refresh token."""

    def __init__(self, message="Invalid Refresh Token"):
        super().__init__(message, 400, "refresh_token_not_found")


class FakeQuery:
    """Mimics the chained postgrest request builder."""

    def __init__(self, client, table):
        self.client = client
        self.table_name = table
        self.operation = "select"
        self.columns = "*"
        self.payload = None
        self.filters = {}
        self.order_by = None
        self.single_row = False

    def select(self, columns="*"):
        self.operation = "select"
        self.columns = columns
        return self

    def insert(self, record):
        self.operation = "insert"
        self.payload = record
        return self

    def update(self, values):
        self.operation = "update"
        self.payload = values
        return self

    def eq(self, column, value):
        self.filters[column] = value
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def maybe_single(self):
        self.single_row = True
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters.items())

    def _project(self, row):
        columns = self.columns.strip()
        if "*" in columns or "(" in columns:
            return copy.deepcopy(row)
        return {name.strip(): row.get(name.strip()) for name in columns.split(",")}

    def execute(self):
        self.client.record(self)
        failure = self.client.failures.get(self.table_name)
        if failure:
            raise APIError({"message": failure, "code": "500", "details": None, "hint": None})

        rows = self.client.tables.setdefault(self.table_name, [])

        if self.operation == "insert":
            rows.append(dict(self.payload))
            return SimpleNamespace(data=[dict(self.payload)])

        if self.operation == "update":
            updated = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    updated.append(dict(row))
            return SimpleNamespace(data=updated)

        selected = [self._project(row) for row in rows if self._matches(row)]
        if self.order_by:
            column, desc = self.order_by
            selected.sort(key=lambda row: row.get(column) or "", reverse=desc)
        if self.single_row:
            if not selected:
                return None
            return SimpleNamespace(data=selected[0])
        return SimpleNamespace(data=selected)


def _auth_response(user_id, email, access_token, refresh_token):
    user = SimpleNamespace(id=user_id, email=email)
    session = SimpleNamespace(access_token=access_token, refresh_token=refresh_token, user=user)
    return SimpleNamespace(user=user, session=session)


class FakeAuth:
    """Mimics the supabase auth client with an in-memory user list."""

    def __init__(self):
        self.users = {}
        self.tokens = {}
        self.calls = []
        self.failure = None
        self.confirm_email = False

    def add_user(self, email, password, user_id):
        self.users[email] = {"id": user_id, "password": password}
        access_token = f"access-{user_id}"
        self.tokens[access_token] = email
        return {"access_token": access_token, "refresh_token": f"refresh-{user_id}"}

    def _check_failure(self):
        if self.failure is not None:
            raise self.failure

    def set_session(self, access_token, refresh_token):
        self.calls.append(("set_session", access_token))
        self._check_failure()
        email = self.tokens.get(access_token)
        if email is None:
            raise RejectedTokenError()
        user = self.users[email]
        return _auth_response(user["id"], email, access_token, refresh_token)

    def sign_in_with_password(self, credentials):
        self.calls.append(("sign_in_with_password", credentials["email"]))
        self._check_failure()
        user = self.users.get(credentials["email"])
        if user is None or user["password"] != credentials["password"]:
            raise RejectedTokenError("Invalid login credentials")
        return _auth_response(
            user["id"], credentials["email"], f"access-{user['id']}", f"refresh-{user['id']}"
        )

    def sign_up(self, credentials):
        self.calls.append(("sign_up", credentials["email"]))
        self._check_failure()
        user_id = f"user-{len(self.users) + 1}"
        tokens = self.add_user(credentials["email"], credentials["password"], user_id)
        if self.confirm_email:
            return SimpleNamespace(user=SimpleNamespace(id=user_id, email=credentials["email"]), session=None)
        return _auth_response(user_id, credentials["email"], tokens["access_token"], tokens["refresh_token"])

    def sign_out(self):
        self.calls.append(("sign_out", None))
        self._check_failure()


class FakeSupabase:
    """Recording stand-in for supabase.Client."""

    def __init__(self):
        self.tables = {}
        self.failures = {}
        self.requests = []
        self.auth = FakeAuth()
        self._lock = threading.Lock()

    def table(self, name):
        return FakeQuery(self, name)

    def record(self, query):
        with self._lock:
            self.requests.append((query.table_name, query.operation, dict(query.filters), query.payload))

    def fail(self, table, message):
        self.failures[table] = message

    def requests_for(self, table):
        return [request for request in self.requests if request[0] == table]


USER_ID = "user-1"


def seed_catalog(fake):
    """Two courses; sections stored out of display order."""
    fake.tables["courses"] = [
        {
            "id": "course-py",
            "title": "Python Basics",
            "description": "Learn Python",
            "thumbnail_url": "https://img.example.com/py.png",
            "vimeo_url": "https://player.vimeo.com/video/1",
            "created_at": "2024-01-01T00:00:00",
            "course_sections": [
                {"id": "sec-3", "title": "Functions", "description": None, "order_index": 3},
                {"id": "sec-1", "title": "Variables", "description": "Names and values", "order_index": 1},
                {"id": "sec-2", "title": "Loops", "description": None, "order_index": 2},
            ],
        },
        {
            "id": "course-sql",
            "title": "SQL Fundamentals",
            "description": "Query data",
            "thumbnail_url": "https://img.example.com/sql.png",
            "vimeo_url": "https://player.vimeo.com/video/2",
            "created_at": "2024-02-01T00:00:00",
            "course_sections": [],
        },
    ]
    fake.tables["enrollments"] = []
    fake.tables["section_completions"] = []


@pytest.fixture
def fake_supabase():
    fake = FakeSupabase()
    seed_catalog(fake)
    return fake


@pytest.fixture
def app(fake_supabase):
    return create_app("testing", supabase_factory=lambda: fake_supabase)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def signed_in_client(app, fake_supabase):
    tokens = fake_supabase.auth.add_user("student@example.com", "secret123", USER_ID)
    test_client = app.test_client()
    with test_client.session_transaction() as sess:
        sess[SESSION_KEY] = tokens
    return test_client
