"""
Sign-in/sign-out routes for the admin session.
"""
from flask import Blueprint, request, jsonify, render_template, redirect, url_for, make_response
import logging
from marshmallow import ValidationError

from ..auth import (
    authenticate_user,
    generate_token,
    set_session_cookie,
    clear_session_cookie,
    current_session,
    SessionConfigError,
)
from ..schemas.models import LoginSchema

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def _safe_next(target: str) -> str:
    # Only local paths; never redirect off-site
    if not target or not target.startswith('/') or target.startswith('//'):
        return url_for('pages.admin')
    return target


def _issue_session(username: str) -> str:
    return generate_token(user_id='1', additional_data={'name': 'Admin', 'username': username})


def create_auth_blueprint():
    """Creates the blueprint with the sign-in/sign-out routes"""
    auth_bp = Blueprint('auth', __name__)

    login_schema = LoginSchema()

    @auth_bp.route('/api/auth/login', methods=['POST'])
    def login():
        """
        JSON login. Sets the session cookie and returns the token.
        """
        try:
            data = login_schema.load(request.get_json(silent=True) or {})
        except ValidationError as e:
            return jsonify({"errors": e.messages}), 400

        if not authenticate_user(data['username'], data['password']):
            logger.info(f"Failed admin login for '{data['username']}'")
            return jsonify({"message": INVALID_CREDENTIALS}), 401

        try:
            token = _issue_session(data['username'])
        except SessionConfigError as e:
            logger.error(f"Cannot issue session: {e}")
            return jsonify({"message": "Session signing is not configured"}), 500

        response = make_response(jsonify({"access_token": token, "token_type": "bearer"}), 200)
        return set_session_cookie(response, token)

    @auth_bp.route('/api/auth/logout', methods=['POST'])
    def logout():
        response = make_response(jsonify({"success": True}), 200)
        return clear_session_cookie(response)

    @auth_bp.route('/admin/signin', methods=['GET', 'POST'])
    def signin():
        """
        Sign-in form. On failure the form is shown again with the username kept.
        """
        next_url = request.values.get('next', '')
        if request.method == 'GET':
            if current_session():
                return redirect(_safe_next(next_url))
            return render_template('signin.html', error='', username='', next_url=next_url)

        username = request.form.get('username', '')
        password = request.form.get('password', '')
        if not authenticate_user(username, password):
            logger.info(f"Failed admin sign-in for '{username}'")
            return render_template('signin.html', error=INVALID_CREDENTIALS,
                                   username=username, next_url=next_url), 401

        try:
            token = _issue_session(username)
        except SessionConfigError as e:
            logger.error(f"Cannot issue session: {e}")
            return render_template('signin.html', error="Sign-in is not available right now",
                                   username=username, next_url=next_url), 500

        response = redirect(_safe_next(next_url))
        return set_session_cookie(response, token)

    @auth_bp.route('/admin/signout', methods=['POST'])
    def signout():
        response = redirect(url_for('auth.signin'))
        return clear_session_cookie(response)

    return auth_bp
