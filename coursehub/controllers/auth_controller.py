"""
Auth Controller Module
Landing redirect, sign in, sign up and sign out
"""
from flask import Blueprint, current_app, redirect, render_template, request, url_for
import logging
from ..errors import BackendError
from ..services.auth_service import AuthService
from ..utils.notifications import notify_error, notify_success
from ..utils.session_guard import clear_session, get_current_session, render_loading, store_session
from ..utils.supabase_utils import get_supabase

logger = logging.getLogger(__name__)
auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/', methods=['GET'])
def landing():
    """
    Send the visitor to the dashboard or to the auth page
    @returns: redirect, or the loading page when the session check failed
    """
    try:
        user_session = get_current_session()
    except BackendError as e:
        logger.error(f"Session check failed on landing page: {e.message}")
        return render_loading()

    if user_session:
        return redirect(url_for('dashboard.dashboard'))
    return redirect(url_for('auth.auth_page'))


@auth_bp.route('/auth', methods=['GET'])
def auth_page():
    try:
        user_session = get_current_session()
    except BackendError as e:
        logger.error(f"Session check failed on auth page: {e.message}")
        user_session = None

    if user_session:
        return redirect(url_for('dashboard.dashboard'))
    return render_template('auth.html', mode=request.args.get('mode', 'sign-in'))


def _read_credentials():
    email = (request.form.get('email') or '').strip().lower()
    password = request.form.get('password') or ''
    if not email or not password:
        return None, None
    return email, password


@auth_bp.route('/auth/sign-in', methods=['POST'])
def sign_in():
    email, password = _read_credentials()
    if not email:
        notify_error("Email and password are required")
        return redirect(url_for('auth.auth_page'))

    try:
        user_session = AuthService.sign_in(get_supabase(), email, password)
    except BackendError as e:
        notify_error(e.message)
        return redirect(url_for('auth.auth_page'))

    store_session(user_session)
    return redirect(url_for('dashboard.dashboard'))


@auth_bp.route('/auth/sign-up', methods=['POST'])
def sign_up():
    email, password = _read_credentials()
    if not email:
        notify_error("Email and password are required")
        return redirect(url_for('auth.auth_page', mode='sign-up'))

    try:
        user_session = AuthService.sign_up(
            get_supabase(), email, password,
            redirect_to=current_app.config.get('SITE_URL')
        )
    except BackendError as e:
        notify_error(e.message)
        return redirect(url_for('auth.auth_page', mode='sign-up'))

    if user_session is None:
        notify_success("Check your email to confirm your account")
        return redirect(url_for('auth.auth_page'))

    store_session(user_session)
    return redirect(url_for('dashboard.dashboard'))


@auth_bp.route('/auth/sign-out', methods=['POST'])
def sign_out():
    try:
        # The client must carry the session for the server to revoke it
        if get_current_session() is not None:
            AuthService.sign_out(get_supabase())
    except BackendError as e:
        # The local tokens are dropped either way
        logger.warning(f"Sign out request failed: {e.message}")
    clear_session()
    return redirect(url_for('auth.auth_page'))
