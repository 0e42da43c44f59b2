"""
Session authentication for the admin area.

A signed JWT (HS256) is stored in an HttpOnly cookie. API routes answer 401
when it is missing or invalid; admin pages redirect to the sign-in form.
"""
import hmac
import jwt
import logging
import datetime
from functools import wraps
from flask import request, jsonify, current_app, redirect, url_for, g, Response
from typing import Dict, Any, Callable, Optional

logger = logging.getLogger(__name__)


class SessionConfigError(RuntimeError):
    """The session secret is not configured."""


def generate_token(user_id: str, additional_data: Dict = None, expiry_hours: int = None) -> str:
    """
    Generates a session token.

    Args:
        user_id: User identifier
        additional_data: Extra claims
        expiry_hours: Validity in hours (defaults to SESSION_EXPIRY_HOURS)

    Returns:
        Encoded JWT
    """
    additional_data = additional_data or {}

    secret_key = current_app.config.get('SESSION_SECRET')
    if not secret_key:
        raise SessionConfigError("SESSION_SECRET is not configured")

    if expiry_hours is None:
        expiry_hours = current_app.config.get('SESSION_EXPIRY_HOURS', 24)

    now = datetime.datetime.now(datetime.timezone.utc)
    payload = {
        'sub': user_id,
        'iat': now,
        'exp': now + datetime.timedelta(hours=expiry_hours)
    }
    payload.update(additional_data)

    return jwt.encode(payload, secret_key, algorithm='HS256')


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verifies and decodes a session token.

    Returns:
        The payload if valid, None otherwise
    """
    secret_key = current_app.config.get('SESSION_SECRET')
    if not secret_key:
        logger.error("SESSION_SECRET is not configured")
        return None

    try:
        return jwt.decode(token, secret_key, algorithms=['HS256'])
    except jwt.ExpiredSignatureError:
        logger.warning("Session token expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid session token: {str(e)}")
        return None


def get_token_from_request() -> Optional[str]:
    """
    Reads the session token from the cookie, falling back to a Bearer header.
    """
    cookie_name = current_app.config.get('SIGNAGE_COOKIE_NAME', 'signage_session')
    token = request.cookies.get(cookie_name)
    if token:
        return token

    auth_header = request.headers.get('Authorization')
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != 'bearer':
        return None
    return parts[1]


def current_session() -> Optional[Dict[str, Any]]:
    token = get_token_from_request()
    if not token:
        return None
    return verify_token(token)


def authenticate_user(username: str, password: str) -> bool:
    """Checks a username/password pair against the configured admin secrets."""
    expected_user = current_app.config.get('ADMIN_USER') or ''
    expected_pass = current_app.config.get('ADMIN_PASS') or ''
    if not expected_user or not expected_pass:
        logger.error("ADMIN_USER/ADMIN_PASS are not configured; rejecting login")
        return False
    user_ok = hmac.compare_digest((username or '').encode(), expected_user.encode())
    pass_ok = hmac.compare_digest((password or '').encode(), expected_pass.encode())
    return user_ok and pass_ok


def set_session_cookie(response: Response, token: str) -> Response:
    response.set_cookie(
        current_app.config.get('SIGNAGE_COOKIE_NAME', 'signage_session'),
        token,
        max_age=int(current_app.config.get('SESSION_EXPIRY_HOURS', 24)) * 3600,
        httponly=True,
        secure=bool(current_app.config.get('SIGNAGE_COOKIE_SECURE', False)),
        samesite='Lax',
    )
    return response


def clear_session_cookie(response: Response) -> Response:
    response.delete_cookie(current_app.config.get('SIGNAGE_COOKIE_NAME', 'signage_session'))
    return response


def session_required(f: Callable) -> Callable:
    """
    Requires a valid session for an API endpoint; answers 401 JSON otherwise.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        payload = current_session()
        if not payload:
            return jsonify({'message': 'Authentication required'}), 401

        g.session = payload
        return f(*args, **kwargs)

    return decorated


def signin_required(f: Callable) -> Callable:
    """
    Requires a valid session for an admin page; redirects to the sign-in form otherwise.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        payload = current_session()
        if not payload:
            # Form posts cannot be replayed after sign-in; send those back to the admin page
            next_url = request.path if request.method == 'GET' else url_for('pages.admin')
            return redirect(url_for('auth.signin', next=next_url))

        g.session = payload
        return f(*args, **kwargs)

    return decorated
