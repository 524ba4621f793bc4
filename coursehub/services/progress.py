"""
Progress helpers shared by the dashboard and the course page.

Two progress values exist for the same user and course. The dashboard
computes one from section completions (compute_progress), the course page
shows the enrollment's stored progress scalar, which only changes through
bump_progress. They are not synchronized.
"""
from typing import Iterable

from ..models.course import Course, Enrollment

PROGRESS_STEP = 10
MAX_PROGRESS = 100


def compute_progress(course: Course) -> int:
    """
    Percentage of the course's sections the user has completed
    @param course: Course with sections attached
    @returns: int between 0 and 100, 0 when the course has no sections
    """
    if not course.sections:
        return 0
    total = len(course.sections)
    completed = sum(1 for section in course.sections if section.completed)
    # Rounds halves up: floor(100 * completed / total + 0.5)
    return (200 * completed + total) // (2 * total)


def bump_progress(current: int, step: int = PROGRESS_STEP) -> int:
    """Next value of the stored progress scalar, capped at 100"""
    return min(int(current) + step, MAX_PROGRESS)


def is_enrolled(enrollments: Iterable[Enrollment], course_id: str) -> bool:
    return any(enrollment.course_id == course_id for enrollment in enrollments)
