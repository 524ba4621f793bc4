"""
Session guard for the pages and the JSON API.
The session is re-derived from the stored Supabase tokens on every request.
"""
import functools
import logging
from typing import Optional
from flask import g, jsonify, redirect, render_template, session, url_for
from ..errors import BackendError
from ..models.course import UserSession
from ..services.auth_service import AuthService
from .supabase_utils import get_supabase

logger = logging.getLogger(__name__)

SESSION_KEY = 'supabase_session'


def store_session(user_session: UserSession) -> None:
    session[SESSION_KEY] = user_session.to_cookie()


def clear_session() -> None:
    session.pop(SESSION_KEY, None)


def get_current_session() -> Optional[UserSession]:
    """
    Check whether the request carries a valid Supabase session
    @returns: UserSession or None
    @raises: BackendError when the check itself failed
    """
    tokens = session.get(SESSION_KEY)
    if not tokens:
        return None

    user_session = AuthService.restore_session(
        get_supabase(), tokens.get('access_token'), tokens.get('refresh_token')
    )
    if user_session is None:
        clear_session()
        return None

    # set_session may have refreshed an expired access token
    if user_session.access_token != tokens.get('access_token'):
        store_session(user_session)
    return user_session


def render_loading():
    """The inert page shown when the session check could not complete"""
    return render_template('loading.html')


def session_required(view):
    """
    Decorator for pages that need a session.
    Redirects to the auth page without running the view when there is none;
    otherwise exposes the session as g.user_session.
    """
    @functools.wraps(view)
    def wrapper(*args, **kwargs):
        try:
            user_session = get_current_session()
        except BackendError as e:
            logger.error(f"Session check failed on {view.__name__}: {e.message}")
            return render_loading()

        if user_session is None:
            return redirect(url_for('auth.auth_page'))

        g.user_session = user_session
        return view(*args, **kwargs)

    return wrapper


def api_session_required(view):
    """Like session_required, answering with JSON errors instead of redirects"""
    @functools.wraps(view)
    def wrapper(*args, **kwargs):
        try:
            user_session = get_current_session()
        except BackendError as e:
            return jsonify({
                'error': 'Failed to check session',
                'details': e.message
            }), 500

        if user_session is None:
            return jsonify({'error': 'Not authenticated'}), 401

        g.user_session = user_session
        return view(*args, **kwargs)

    return wrapper
