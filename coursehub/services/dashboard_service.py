"""
Dashboard Service Module
Fetches the dashboard data and handles the enroll and mark-complete mutations
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Set
from supabase import Client
from ..logger import custom_logger
from ..models.course import Course, DashboardData, Enrollment, SectionCompletion
from ..utils.supabase_utils import fetch_rows, insert_row

logger = logging.getLogger(__name__)

COURSES_WITH_SECTIONS = """
    *,
    course_sections (
        id,
        title,
        description,
        order_index
    )
"""


class DashboardService:
    """
    Service class for the dashboard page
    """

    @staticmethod
    def get_courses(supabase: Client) -> List[dict]:
        return fetch_rows(
            supabase.table('courses').select(COURSES_WITH_SECTIONS).order('created_at'),
            "fetch courses"
        )

    @staticmethod
    def get_enrollments(supabase: Client, user_id: str) -> List[Enrollment]:
        rows = fetch_rows(
            supabase.table('enrollments').select('*').eq('user_id', user_id),
            "fetch enrollments"
        )
        return [Enrollment.from_row(row) for row in rows]

    @staticmethod
    def get_completions(supabase: Client, user_id: str) -> List[SectionCompletion]:
        rows = fetch_rows(
            supabase.table('section_completions').select('section_id').eq('user_id', user_id),
            "fetch section completions"
        )
        return [SectionCompletion(section_id=row['section_id']) for row in rows]

    @staticmethod
    @custom_logger.log_function_call
    def fetch_dashboard(supabase: Client, user_id: str) -> DashboardData:
        """
        Fetch courses, enrollments and section completions for a user
        @param supabase: Supabase client of the current request
        @param user_id: id of the signed in user
        @returns: DashboardData with completed flags set and sections in order
        @raises: BackendError if any of the requests failed; nothing partial is returned
        """
        course_rows = DashboardService.get_courses(supabase)

        with ThreadPoolExecutor(max_workers=2) as executor:
            enrollments_future = executor.submit(DashboardService.get_enrollments, supabase, user_id)
            completions_future = executor.submit(DashboardService.get_completions, supabase, user_id)
            # Wait for both before raising the first failure
            enrollments_error = enrollments_future.exception()
            completions_error = completions_future.exception()

        if enrollments_error is not None:
            raise enrollments_error
        if completions_error is not None:
            raise completions_error

        completed_ids: Set[str] = {c.section_id for c in completions_future.result()}
        courses = [Course.from_row(row, completed_ids) for row in course_rows]

        logger.info(
            f"Fetched {len(courses)} courses and {len(completed_ids)} completed sections for user {user_id}"
        )
        return DashboardData(courses=courses, enrollments=enrollments_future.result())

    @staticmethod
    @custom_logger.log_function_call
    def enroll(supabase: Client, user_id: str, course_id: str) -> None:
        """
        Enroll the user in a course.
        Duplicate enrollments are left to the database's unique constraint.
        """
        insert_row(supabase, 'enrollments', {
            'course_id': course_id,
            'user_id': user_id,
        })

    @staticmethod
    @custom_logger.log_function_call
    def mark_section_complete(supabase: Client, user_id: str, section_id: str) -> None:
        insert_row(supabase, 'section_completions', {
            'user_id': user_id,
            'section_id': section_id,
        })
