"""
Course Controller Module
Renders the course detail page with its video and stored progress
"""
from flask import Blueprint, g, redirect, render_template, url_for
import logging
from ..errors import BackendError, CourseNotFoundError
from ..services.course_service import CourseService
from ..utils.notifications import notify_error
from ..utils.session_guard import session_required
from ..utils.supabase_utils import get_supabase

logger = logging.getLogger(__name__)
course_bp = Blueprint('course', __name__)


@course_bp.route('/course/<course_id>', methods=['GET'])
@session_required
def course_detail(course_id):
    """
    Render one course
    @param course_id: id of the course from the URL
    @returns: the course page, or a redirect to the dashboard with a notification
    """
    try:
        detail = CourseService.fetch_course_detail(get_supabase(), course_id, g.user_session.user_id)
    except CourseNotFoundError as e:
        notify_error(e.message)
        return redirect(url_for('dashboard.dashboard'))
    except BackendError as e:
        logger.error(f"Error fetching course {course_id}: {e.message}")
        notify_error(e.message)
        return redirect(url_for('dashboard.dashboard'))

    return render_template('course.html', course=detail.course, progress=detail.progress)
