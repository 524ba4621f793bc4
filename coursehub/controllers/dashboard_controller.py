"""
Dashboard Controller Module
Renders the course list and handles enroll and mark-complete
"""
from flask import Blueprint, g, redirect, render_template, request, url_for
import logging
from ..errors import BackendError
from ..models.course import DashboardData
from ..services.dashboard_service import DashboardService
from ..services.progress import compute_progress, is_enrolled
from ..utils.notifications import notify_error, notify_success
from ..utils.session_guard import session_required
from ..utils.supabase_utils import get_supabase

logger = logging.getLogger(__name__)
dashboard_bp = Blueprint('dashboard', __name__)


@dashboard_bp.route('/dashboard', methods=['GET'])
@session_required
def dashboard():
    """
    Render the dashboard from a full fetch
    @returns: the dashboard page, empty with an error notification if the fetch failed
    """
    data = DashboardData()
    try:
        data = DashboardService.fetch_dashboard(get_supabase(), g.user_session.user_id)
    except BackendError as e:
        logger.error(f"Error fetching dashboard: {e.message}")
        notify_error(e.message)

    return render_template(
        'dashboard.html',
        courses=data.courses,
        is_enrolled=lambda course_id: is_enrolled(data.enrollments, course_id),
        get_progress=compute_progress,
    )


@dashboard_bp.route('/dashboard/courses/<course_id>/enroll', methods=['POST'])
@session_required
def enroll(course_id):
    try:
        DashboardService.enroll(get_supabase(), g.user_session.user_id, course_id)
        notify_success("Successfully enrolled in the course.", title="Success!")
    except BackendError as e:
        notify_error(e.message)

    return redirect(url_for('dashboard.dashboard'))


@dashboard_bp.route('/dashboard/sections/<section_id>/complete', methods=['POST'])
@session_required
def mark_section_complete(section_id):
    try:
        DashboardService.mark_section_complete(get_supabase(), g.user_session.user_id, section_id)
        notify_success("Section marked as complete")
    except BackendError as e:
        notify_error(e.message)

    return redirect(url_for('dashboard.dashboard', open=request.form.get('course_id')))
