"""
Course Service Module
Handles the course detail page: one course, its stored progress, and progress updates
"""
from typing import Optional
import logging
from supabase import Client
from ..errors import CourseNotFoundError
from ..logger import custom_logger
from ..models.course import Course, CourseDetail
from ..utils.supabase_utils import fetch_one, update_rows
from .progress import bump_progress

logger = logging.getLogger(__name__)


class CourseService:
    """
    Service class for handling course-related operations
    """

    @staticmethod
    @custom_logger.log_function_call
    def get_course(supabase: Client, course_id: str) -> Course:
        """
        Fetch a single course without its sections
        @raises: CourseNotFoundError when no course has this id
        """
        row = fetch_one(
            supabase.table('courses').select('*').eq('id', course_id).maybe_single(),
            f"fetch course {course_id}"
        )
        if row is None:
            logger.warning(f"No course found with ID {course_id}")
            raise CourseNotFoundError(course_id)
        return Course.from_row(row)

    @staticmethod
    def get_stored_progress(supabase: Client, course_id: str, user_id: str) -> int:
        """
        Read the enrollment's progress scalar
        @returns: int, 0 when the user is not enrolled
        """
        row: Optional[dict] = fetch_one(
            supabase.table('enrollments')
            .select('progress')
            .eq('course_id', course_id)
            .eq('user_id', user_id)
            .maybe_single(),
            f"fetch enrollment for course {course_id}"
        )
        if not row:
            return 0
        return int(row.get('progress') or 0)

    @staticmethod
    @custom_logger.log_function_call
    def fetch_course_detail(supabase: Client, course_id: str, user_id: str) -> CourseDetail:
        """
        Fetch everything the course page renders.
        The progress shown is the stored scalar, not the section-completion percentage.
        """
        course = CourseService.get_course(supabase, course_id)
        progress = CourseService.get_stored_progress(supabase, course_id, user_id)
        return CourseDetail(course=course, progress=progress)

    @staticmethod
    @custom_logger.log_function_call
    def update_progress(supabase: Client, course_id: str, user_id: str, current_progress: int) -> int:
        """
        Bump the stored progress by one step
        @param current_progress: progress value currently shown to the user
        @returns: the new progress value, never above 100
        """
        new_progress = bump_progress(current_progress)
        update_rows(
            supabase,
            'enrollments',
            {'progress': new_progress},
            {'course_id': course_id, 'user_id': user_id}
        )
        return new_progress
