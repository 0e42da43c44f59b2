"""
Public events feed.
"""
import logging
from flask import Blueprint, jsonify, current_app

from ...clock import fixed_today
from ...store import StoreError
from ..schemas.models import EventSchema
from ..utils import error_response, get_store

logger = logging.getLogger(__name__)

events_bp = Blueprint('events', __name__)
_event_schema = EventSchema(many=True)


def upcoming_events(limit: int = None):
    """Next ``limit`` events from today (fixed timezone), ascending by date."""
    if limit is None:
        limit = current_app.config.get('FEED_LIMIT', 5)
    now = current_app.extensions["clock"]()
    return get_store().list_upcoming(fixed_today(now), limit)


@events_bp.route('/api/events', methods=['GET'])
def list_upcoming():
    try:
        events = upcoming_events()
    except StoreError as e:
        logger.error(f"Error loading upcoming events: {e}")
        return error_response(str(e), 500)
    return jsonify(_event_schema.dump(events))
