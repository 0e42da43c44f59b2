"""
Helpers shared by the API routes.
"""
from flask import jsonify, current_app

from ..store import EventStore


def error_response(message: str, status_code: int = 500):
    """
    Standard error payload.

    Args:
        message: Error message
        status_code: HTTP status code

    Returns:
        ``({"error": message}, status_code)``
    """
    return jsonify({"error": message}), status_code


def success_response(status_code: int = 200):
    return jsonify({"success": True}), status_code


def get_store() -> EventStore:
    """Returns the event store attached to the running application."""
    return current_app.extensions["event_store"]
