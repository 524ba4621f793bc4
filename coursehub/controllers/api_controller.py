"""
API Controller Module
JSON endpoints for the dashboard data and the course page's progress control
"""
from flask import Blueprint, g, jsonify, request
import logging
from ..errors import BackendError
from ..services.course_service import CourseService
from ..services.dashboard_service import DashboardService
from ..services.progress import MAX_PROGRESS, compute_progress, is_enrolled
from ..utils.session_guard import api_session_required
from ..utils.supabase_utils import get_supabase

logger = logging.getLogger(__name__)
api_bp = Blueprint('api', __name__)


@api_bp.route('/dashboard', methods=['GET'])
@api_session_required
def get_dashboard():
    """
    Courses with their sections, computed progress and enrollment flag
    @returns: JSON response with the courses or error
    """
    try:
        data = DashboardService.fetch_dashboard(get_supabase(), g.user_session.user_id)
    except BackendError as e:
        logger.error(f"Error fetching dashboard: {e.message}")
        return jsonify({
            'error': 'Failed to fetch dashboard',
            'details': e.message
        }), 500

    courses = []
    for course in data.courses:
        course_json = course.to_dict()
        course_json['enrolled'] = is_enrolled(data.enrollments, course.id)
        course_json['progress'] = compute_progress(course)
        courses.append(course_json)

    return jsonify({
        'message': 'Dashboard fetched successfully',
        'data': courses
    }), 200


@api_bp.route('/courses/<course_id>/progress', methods=['POST'])
@api_session_required
def update_progress(course_id):
    """
    Bump the stored progress of the user's enrollment by one step
    @body: {"progress": <progress currently shown>}
    @returns: JSON response with the new progress or error
    """
    data = request.get_json(silent=True)
    if not data or 'progress' not in data:
        return jsonify({
            'error': 'Missing required field: progress'
        }), 400

    current_progress = data['progress']
    # bool is an int subclass, JSON true must not pass as 1
    valid = isinstance(current_progress, int) and not isinstance(current_progress, bool)
    if not valid or not 0 <= current_progress <= MAX_PROGRESS:
        return jsonify({
            'error': f'progress must be an integer between 0 and {MAX_PROGRESS}'
        }), 400

    try:
        new_progress = CourseService.update_progress(
            get_supabase(), course_id, g.user_session.user_id, current_progress
        )
    except BackendError as e:
        logger.error(f"Error updating progress for course {course_id}: {e.message}")
        return jsonify({
            'error': 'Failed to update progress',
            'details': e.message
        }), 500

    return jsonify({
        'message': 'Progress updated successfully',
        'data': {'course_id': course_id, 'progress': new_progress}
    }), 200
