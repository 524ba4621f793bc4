"""
Auth Service Module
Wraps the Supabase auth calls the pages need
"""
import logging
from typing import Optional
from supabase import Client, AuthApiError, AuthSessionMissingError
from ..errors import BackendError
from ..logger import custom_logger
from ..models.course import UserSession

logger = logging.getLogger(__name__)


def _to_user_session(response) -> Optional[UserSession]:
    session = getattr(response, 'session', None)
    if session is None:
        return None
    user = getattr(response, 'user', None) or session.user
    return UserSession(
        user_id=user.id,
        email=getattr(user, 'email', None),
        access_token=session.access_token,
        refresh_token=session.refresh_token,
    )


class AuthService:
    """
    Service class for the session check, sign in, sign up and sign out
    """

    @staticmethod
    @custom_logger.log_function_call(log_params=False)
    def restore_session(supabase: Client, access_token: str, refresh_token: str) -> Optional[UserSession]:
        """
        Restore a session from stored tokens
        @param supabase: Supabase client of the current request
        @returns: UserSession, possibly with refreshed tokens, or None if the tokens were rejected
        @raises: BackendError when the auth server could not be reached or failed
        """
        try:
            response = supabase.auth.set_session(access_token, refresh_token)
        except AuthSessionMissingError:
            return None
        except AuthApiError as e:
            status = getattr(e, 'status', None)
            # 4xx: the tokens were rejected; 5xx or no status: the check itself failed
            if status is not None and status < 500:
                logger.info(f"Stored session rejected: {e.message}")
                return None
            logger.error(f"Session check failed with status {status}: {e.message}")
            raise BackendError.from_exception(e)
        except Exception as e:
            logger.error(f"Session check failed: {str(e)}")
            raise BackendError.from_exception(e)
        return _to_user_session(response)

    @staticmethod
    @custom_logger.log_function_call(log_params=False)
    def sign_in(supabase: Client, email: str, password: str) -> UserSession:
        """
        Sign in with email and password
        @raises: BackendError carrying the auth server's message
        """
        try:
            response = supabase.auth.sign_in_with_password({'email': email, 'password': password})
        except Exception as e:
            logger.error(f"Sign in failed for {email}: {str(e)}")
            raise BackendError.from_exception(e)

        user_session = _to_user_session(response)
        if user_session is None:
            raise BackendError("Sign in did not return a session")
        return user_session

    @staticmethod
    @custom_logger.log_function_call(log_params=False)
    def sign_up(supabase: Client, email: str, password: str, redirect_to: Optional[str] = None) -> Optional[UserSession]:
        """
        Create an account
        @returns: UserSession, or None while the email address awaits confirmation
        """
        credentials = {'email': email, 'password': password}
        if redirect_to:
            credentials['options'] = {'email_redirect_to': redirect_to}
        try:
            response = supabase.auth.sign_up(credentials)
        except Exception as e:
            logger.error(f"Sign up failed for {email}: {str(e)}")
            raise BackendError.from_exception(e)
        return _to_user_session(response)

    @staticmethod
    @custom_logger.log_function_call
    def sign_out(supabase: Client) -> None:
        try:
            supabase.auth.sign_out()
        except Exception as e:
            logger.error(f"Sign out failed: {str(e)}")
            raise BackendError.from_exception(e)
