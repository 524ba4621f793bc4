"""
Error types raised by the service layer and handled by the controllers.
"""


class CourseHubError(Exception):
    """Base class for every error surfaced to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BackendError(CourseHubError):
    """A Supabase request (query, write or auth call) failed."""

    @classmethod
    def from_exception(cls, exc: Exception) -> "BackendError":
        # postgrest's APIError and the auth errors both carry .message
        message = getattr(exc, 'message', None) or str(exc) or exc.__class__.__name__
        return cls(message)


class CourseNotFoundError(CourseHubError):
    def __init__(self, course_id: str):
        super().__init__("Course not found")
        self.course_id = course_id
